"""
userpager - paginated user listing over a mock GraphQL API.

The package pairs a small server with a terminal client:

- A synthetic in-memory user source (optionally with simulated latency)
- A GraphQL-style query gateway served over HTTP with FastAPI
- A caching query client with in-process and httpx transports
- A client state store driving pagination and random-user selection
- A prefetch coordinator warming the first pages of the listing
- A Textual browser bound to "j" / "k" for paging
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from userpager.client import HttpTransport, LocalTransport, QueryClient, build_client
from userpager.config import Settings, get_settings
from userpager.datasource import DelayedUserSource, InMemoryUserSource, generate_users
from userpager.domain import PaginationState, PrefetchState, UserRecord
from userpager.errors import TransportError, UserPagerError, ValidationError
from userpager.gateway import QueryGateway, create_app
from userpager.prefetch import PrefetchCoordinator
from userpager.state import PaginationStore, RandomSelector
from userpager.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Data
    "DelayedUserSource",
    "InMemoryUserSource",
    "UserRecord",
    "generate_users",
    # Gateway
    "QueryGateway",
    "create_app",
    # Client
    "HttpTransport",
    "LocalTransport",
    "QueryClient",
    "build_client",
    # State
    "PaginationState",
    "PaginationStore",
    "PrefetchCoordinator",
    "PrefetchState",
    "RandomSelector",
    # Errors
    "TransportError",
    "UserPagerError",
    "ValidationError",
    # Logging
    "configure_logging",
    "get_logger",
]
