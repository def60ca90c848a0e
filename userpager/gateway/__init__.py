"""
Query gateway package: operation registry, executor and HTTP server.
"""

from userpager.gateway.executor import Envelope, QueryGateway
from userpager.gateway.schema import OPERATIONS, SDL, GraphQLRequest
from userpager.gateway.server import create_app, create_default_app

__all__ = [
    "Envelope",
    "GraphQLRequest",
    "OPERATIONS",
    "QueryGateway",
    "SDL",
    "create_app",
    "create_default_app",
]
