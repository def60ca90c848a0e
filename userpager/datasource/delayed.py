"""
Latency-simulating wrapper around another user source.

Every call suspends for its own uniform random delay before delegating. The
delay is an `await`, so concurrent requests wait in parallel rather than in
line.
"""

from __future__ import annotations

import asyncio
import random
from typing import Awaitable, Callable, List, Optional

from userpager.datasource.abstract import AbstractUserSource, UserSource
from userpager.domain.models import UserRecord
from userpager.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_MIN_DELAY_MS = 500
DEFAULT_MAX_DELAY_MS = 3000

Sleeper = Callable[[float], Awaitable[None]]


class DelayedUserSource(AbstractUserSource):
    """
    Delay each read by a duration drawn from [min_delay_ms, max_delay_ms].
    """

    name: str = "delayed"

    def __init__(
        self,
        inner: UserSource,
        min_delay_ms: int = DEFAULT_MIN_DELAY_MS,
        max_delay_ms: int = DEFAULT_MAX_DELAY_MS,
        rng: Optional[random.Random] = None,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        if min_delay_ms < 0 or min_delay_ms > max_delay_ms:
            raise ValueError(
                f"invalid delay range [{min_delay_ms}, {max_delay_ms}] ms"
            )
        self.inner = inner
        self.page_size = inner.page_size
        self.min_delay_ms = min_delay_ms
        self.max_delay_ms = max_delay_ms
        self._rng = rng or random.Random()
        self._sleep = sleep

    def draw_delay(self) -> float:
        """Delay for one call, in seconds."""
        return self._rng.uniform(self.min_delay_ms, self.max_delay_ms) / 1000.0

    async def _pause(self, operation: str) -> None:
        delay = self.draw_delay()
        log.debug("Delaying %s by %.3fs", operation, delay, extra={"delay_seconds": delay})
        await self._sleep(delay)

    async def list_page(self, page: int) -> List[UserRecord]:
        await self._pause("list_page")
        return list(await self.inner.list_page(page))

    async def find_by_key(self, key: str) -> Optional[UserRecord]:
        await self._pause("find_by_key")
        return await self.inner.find_by_key(key)

    async def spammy_users(self) -> List[UserRecord]:
        await self._pause("spammy_users")
        return list(await self.inner.spammy_users())


__all__ = ["DEFAULT_MAX_DELAY_MS", "DEFAULT_MIN_DELAY_MS", "DelayedUserSource"]
