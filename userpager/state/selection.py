"""
Random-user reaction to refreshes.

On every refresh a key is drawn uniformly from user1..user<key_count>. The
draw covers the whole collection, not just the page on screen.
"""

from __future__ import annotations

import random
from typing import Optional

from userpager.domain.models import PaginationState, user_key
from userpager.state.store import PaginationStore, Unsubscribe
from userpager.utils.logging import get_logger

log = get_logger(__name__)


def draw_key(rng: random.Random, key_count: int) -> str:
    return user_key(rng.randint(1, key_count))


class RandomSelector:
    """
    Writes a freshly drawn key into the store each time it refreshes.

    Parameters
    ----------
    store : PaginationStore
        Store to react to and write into.
    key_count : int
        Size of the key space (100 for the default collection).
    rng : random.Random | None
        Seed it in tests for reproducible draws.
    """

    def __init__(
        self,
        store: PaginationStore,
        key_count: int = 100,
        rng: Optional[random.Random] = None,
    ) -> None:
        if key_count < 1:
            raise ValueError(f"key_count must be >= 1, got {key_count}")
        self.store = store
        self.key_count = key_count
        self._rng = rng or random.Random()
        self._unsubscribe: Optional[Unsubscribe] = None

    @property
    def attached(self) -> bool:
        return self._unsubscribe is not None

    def attach(self) -> None:
        """Register on the store once; repeated calls are no-ops."""
        if self._unsubscribe is None:
            self._unsubscribe = self.store.on_refresh(self._handle_refresh)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def select(self) -> str:
        key = draw_key(self._rng, self.key_count)
        self.store.set_selected_key(key)
        return key

    def _handle_refresh(self, state: PaginationState) -> None:
        key = self.select()
        log.debug(
            "Selected random user",
            extra={"selected_key": key, "refresh_counter": state.refresh_counter},
        )


__all__ = ["RandomSelector", "draw_key"]
