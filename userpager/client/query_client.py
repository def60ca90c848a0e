"""
Query client with a result cache shared by page views and the prefetcher.

With the ``cache-first`` policy a query whose (operation, variables) pair was
already answered is served from the cache without touching the transport;
``network-only`` always goes out and refreshes the cache entry.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional, Tuple

from userpager.client.transport import Transport
from userpager.domain.models import UserRecord
from userpager.errors import UserPagerError, ValidationError
from userpager.utils.logging import get_logger

log = get_logger(__name__)

CACHE_FIRST = "cache-first"
NETWORK_ONLY = "network-only"
FETCH_POLICIES = (CACHE_FIRST, NETWORK_ONLY)

CacheKey = Tuple[str, str]


def _cache_key(operation: str, variables: Mapping[str, Any]) -> CacheKey:
    return operation, json.dumps(dict(variables), sort_keys=True)


def _raise_for_errors(operation: str, errors: List[Dict[str, Any]]) -> None:
    first = errors[0] if errors else {}
    message = first.get("message", f"{operation} failed")
    code = first.get("extensions", {}).get("code")
    if code == ValidationError.code:
        raise ValidationError(message, details=errors)
    raise UserPagerError(message)


class QueryClient:
    """
    Typed access to the gateway operations.
    """

    def __init__(self, transport: Transport, fetch_policy: str = CACHE_FIRST) -> None:
        if fetch_policy not in FETCH_POLICIES:
            raise ValueError(
                f"Unknown fetch policy '{fetch_policy}'. Available: {', '.join(FETCH_POLICIES)}"
            )
        self.transport = transport
        self.fetch_policy = fetch_policy
        self._cache: Dict[CacheKey, Any] = {}

    def is_cached(self, operation: str, variables: Optional[Mapping[str, Any]] = None) -> bool:
        return _cache_key(operation, variables or {}) in self._cache

    def clear_cache(self) -> None:
        self._cache.clear()

    async def query(
        self,
        operation: str,
        variables: Optional[Mapping[str, Any]] = None,
        fetch_policy: Optional[str] = None,
    ) -> Any:
        """
        Run `operation` and return its ``data`` field.

        Raises
        ------
        ValidationError
            The gateway rejected the arguments.
        TransportError
            The request never produced a response.
        """
        variables = variables or {}
        policy = fetch_policy or self.fetch_policy
        key = _cache_key(operation, variables)

        if policy == CACHE_FIRST and key in self._cache:
            log.debug(
                "Cache hit for %s",
                operation,
                extra={"operation": operation, "variables": dict(variables)},
            )
            return self._cache[key]

        envelope = await self.transport.request(operation, variables)
        errors = envelope.get("errors")
        if errors:
            _raise_for_errors(operation, errors)

        result = (envelope.get("data") or {}).get(operation)
        self._cache[key] = result
        return result

    async def list_page(self, page: int, fetch_policy: Optional[str] = None) -> List[UserRecord]:
        rows = await self.query("listPage", {"page": page}, fetch_policy)
        return [UserRecord.model_validate(row) for row in rows]

    async def find_by_key(
        self, username: str, fetch_policy: Optional[str] = None
    ) -> Optional[UserRecord]:
        row = await self.query("findByKey", {"username": username}, fetch_policy)
        return UserRecord.model_validate(row) if row is not None else None

    async def spammy_users(self, fetch_policy: Optional[str] = None) -> List[UserRecord]:
        rows = await self.query("spammyUsers", {}, fetch_policy)
        return [UserRecord.model_validate(row) for row in rows]

    async def aclose(self) -> None:
        await self.transport.aclose()


__all__ = ["CACHE_FIRST", "FETCH_POLICIES", "NETWORK_ONLY", "QueryClient"]
