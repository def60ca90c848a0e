"""
In-memory synthetic user source.

The collection is generated once, when the source is built, and never mutated
afterwards: records are frozen models held in a tuple, so concurrent reads
need no locking.
"""

from __future__ import annotations

import random
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple

from userpager.datasource.abstract import AbstractUserSource
from userpager.domain.models import UserRecord, user_key

DEFAULT_USER_COUNT = 100
DEFAULT_PAGE_SIZE = 10
SPAMMY_PROBABILITY = 0.5


def generate_users(
    count: int = DEFAULT_USER_COUNT,
    seed: Optional[int] = None,
    now: Optional[datetime] = None,
) -> Tuple[UserRecord, ...]:
    """
    Build `count` users keyed user1..user<count>.

    All records share one creation instant; `spammy` is drawn independently per
    record with probability 0.5. Pass `seed` for a reproducible collection.
    """
    rng = random.Random(seed)
    created_at = (now or datetime.now(timezone.utc)).isoformat()
    return tuple(
        UserRecord(
            username=user_key(i),
            email=f"{user_key(i)}@example.com",
            timestamp=created_at,
            spammy=rng.random() < SPAMMY_PROBABILITY,
        )
        for i in range(1, count + 1)
    )


class InMemoryUserSource(AbstractUserSource):
    """
    Serve pages and lookups straight from the generated tuple.
    """

    name: str = "memory"

    def __init__(
        self,
        records: Optional[Sequence[UserRecord]] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        self.page_size = page_size
        self._records: Tuple[UserRecord, ...] = (
            tuple(records) if records is not None else generate_users()
        )
        self._by_key: Dict[str, UserRecord] = {r.username: r for r in self._records}
        if len(self._by_key) != len(self._records):
            raise ValueError("usernames must be unique")

    @property
    def records(self) -> Tuple[UserRecord, ...]:
        return self._records

    @property
    def page_count(self) -> int:
        return -(-len(self._records) // self.page_size)

    def slice_page(self, page: int) -> List[UserRecord]:
        if page < 1:
            return []
        start = (page - 1) * self.page_size
        return list(self._records[start : start + self.page_size])

    async def list_page(self, page: int) -> List[UserRecord]:
        return self.slice_page(page)

    async def find_by_key(self, key: str) -> Optional[UserRecord]:
        return self._by_key.get(key)

    async def spammy_users(self) -> List[UserRecord]:
        return [r for r in self._records if r.spammy]


__all__ = ["DEFAULT_PAGE_SIZE", "DEFAULT_USER_COUNT", "InMemoryUserSource", "generate_users"]
