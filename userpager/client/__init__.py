"""
Client package: transports, the caching query client and its factory.
"""

from userpager.client.factory import build_client
from userpager.client.query_client import CACHE_FIRST, NETWORK_ONLY, QueryClient
from userpager.client.transport import HttpTransport, LocalTransport, Transport

__all__ = [
    "CACHE_FIRST",
    "HttpTransport",
    "LocalTransport",
    "NETWORK_ONLY",
    "QueryClient",
    "Transport",
    "build_client",
]
