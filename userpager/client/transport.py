"""
Transports carrying gateway requests for the query client.

`LocalTransport` calls an in-process gateway; `HttpTransport` posts to the
FastAPI endpoint with httpx. Both return the raw GraphQL envelope. Connection
failures, timeouts and unexpected HTTP statuses become `TransportError`;
retries are bounded by `attempts` (1 means a single try).
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, runtime_checkable

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from userpager.errors import TransportError
from userpager.gateway.executor import Envelope, QueryGateway
from userpager.utils.logging import get_logger

log = get_logger(__name__)


@runtime_checkable
class Transport(Protocol):
    async def request(self, operation: str, variables: Mapping[str, Any]) -> Envelope:
        ...

    async def aclose(self) -> None:
        ...


class LocalTransport:
    """Execute requests against a gateway living in the same process."""

    def __init__(self, gateway: QueryGateway) -> None:
        self.gateway = gateway

    async def request(self, operation: str, variables: Mapping[str, Any]) -> Envelope:
        return await self.gateway.execute(operation, variables)

    async def aclose(self) -> None:
        return None


class HttpTransport:
    """
    POST requests to a remote gateway endpoint.

    Parameters
    ----------
    url : str
        Full endpoint URL, e.g. ``http://127.0.0.1:4000/graphql``.
    timeout : float
        Per-request timeout in seconds.
    attempts : int
        Total tries per request; transport failures are retried with exponential backoff.
    backoff : float
        Base of the backoff between tries, in seconds.
    client : httpx.AsyncClient | None
        Pre-built client (tests pass one with a mock transport). Not closed by `aclose`.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        attempts: int = 1,
        backoff: float = 0.2,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if attempts < 1:
            raise ValueError(f"attempts must be >= 1, got {attempts}")
        self.url = url
        self.timeout = timeout
        self.attempts = attempts
        self.backoff = backoff
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def _post(self, operation: str, variables: Mapping[str, Any]) -> Envelope:
        payload = {"operationName": operation, "variables": dict(variables)}
        try:
            response = await self._get_client().post(self.url, json=payload)
        except httpx.HTTPError as exc:
            raise TransportError(f"{operation} request to {self.url} failed: {exc}") from exc

        if not (response.is_success or response.status_code == 400):
            raise TransportError(
                f"{operation} request to {self.url} returned HTTP {response.status_code}"
            )
        try:
            envelope = response.json()
        except ValueError as exc:
            raise TransportError(f"{operation} response is not JSON") from exc
        if not isinstance(envelope, dict) or not ("data" in envelope or "errors" in envelope):
            raise TransportError(f"{operation} response is not a GraphQL envelope")
        return envelope

    async def request(self, operation: str, variables: Mapping[str, Any]) -> Envelope:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.attempts),
            wait=wait_exponential(multiplier=self.backoff, max=2),
            retry=retry_if_exception_type(TransportError),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                number = attempt.retry_state.attempt_number
                if number > 1:
                    log.warning(
                        "Retrying %s", operation, extra={"operation": operation, "attempt": number}
                    )
                return await self._post(operation, variables)
        raise TransportError(f"{operation} request was never attempted")  # pragma: no cover

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None


__all__ = ["HttpTransport", "LocalTransport", "Transport"]
