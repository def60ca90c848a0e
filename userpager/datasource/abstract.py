"""
Abstract data source interface for the user pager demo.

Concrete sources (in-memory, delayed) implement the UserSource protocol so the
gateway can serve any of them without knowing whether latency is simulated.
"""

from __future__ import annotations

import abc
from typing import List, Optional, Protocol, Sequence, runtime_checkable

from userpager.domain.models import UserRecord


@runtime_checkable
class UserSource(Protocol):
    """
    Read-only access to the user collection.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier.
    page_size : int
        Number of records per page.
    """

    name: str
    page_size: int

    async def list_page(self, page: int) -> Sequence[UserRecord]:
        """
        Return the records of a 1-based page.

        Pages past the end of the collection (or below 1) are empty, never an error.
        """
        ...

    async def find_by_key(self, key: str) -> Optional[UserRecord]:
        """Exact-match lookup by username; ``None`` when absent."""
        ...

    async def spammy_users(self) -> Sequence[UserRecord]:
        """Every record flagged spammy, regardless of page."""
        ...


class AbstractUserSource(abc.ABC):
    """
    Optional ABC helper for class-based implementations.
    """

    name: str
    page_size: int

    @abc.abstractmethod
    async def list_page(self, page: int) -> List[UserRecord]:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    async def find_by_key(self, key: str) -> Optional[UserRecord]:  # pragma: no cover
        raise NotImplementedError

    @abc.abstractmethod
    async def spammy_users(self) -> List[UserRecord]:  # pragma: no cover
        raise NotImplementedError


__all__ = ["AbstractUserSource", "UserSource"]
