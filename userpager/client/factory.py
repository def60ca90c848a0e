"""
Build a query client wired to either an in-process or a remote gateway.
"""

from __future__ import annotations

from typing import Optional

from userpager.client.query_client import QueryClient
from userpager.client.transport import HttpTransport, LocalTransport, Transport
from userpager.config import Settings, get_settings
from userpager.datasource.factory import build_source
from userpager.gateway.executor import QueryGateway


def build_client(
    settings: Optional[Settings] = None,
    url: Optional[str] = None,
    delay: Optional[bool] = None,
) -> QueryClient:
    """
    Parameters
    ----------
    url : str | None
        Remote endpoint. When None, a fresh in-process source and gateway are built.
    delay : bool | None
        Overrides `settings.delay_enabled` for the in-process source.
    """
    settings = settings or get_settings()
    transport: Transport
    if url:
        transport = HttpTransport(
            url,
            timeout=settings.client_timeout_seconds,
            attempts=settings.client_retry_attempts,
        )
    else:
        transport = LocalTransport(QueryGateway(build_source(settings, delay=delay)))
    return QueryClient(transport, fetch_policy=settings.fetch_policy)


__all__ = ["build_client"]
