"""
Domain models for the user pager demo.

`UserRecord` mirrors the GraphQL `User` type served by the mock API. The
client-side `PaginationState` and prefetch status values live here too so
the store, the prefetcher and the view share one vocabulary.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass

from pydantic import BaseModel, Field


class UserRecord(BaseModel):
    """
    A single synthetic user served by the data source.
    """

    username: str = Field(..., description="Unique key, formatted as user<N>.")
    email: str = Field(..., description="Derived from the username.")
    timestamp: str = Field(..., description="ISO-8601 creation instant, fixed at generation.")
    spammy: bool = Field(..., description="Random flag assigned at generation.")

    model_config = {
        "frozen": True,
        "extra": "forbid",
    }


@dataclass(frozen=True)
class PaginationState:
    """Snapshot of the client state store."""

    page: int = 1
    selected_key: str = "user1"
    refresh_counter: int = 0


class PrefetchState(str, enum.Enum):
    PENDING = "pending"
    COMPLETE = "complete"


def user_key(index: int) -> str:
    """Key of the `index`-th user (1-based)."""
    return f"user{index}"


__all__ = ["PaginationState", "PrefetchState", "UserRecord", "user_key"]
