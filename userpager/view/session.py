"""
Wire one browsing session: client, store, random selector and prefetcher.

Each call builds independent objects, so tests and multiple apps never share
state through module globals.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from userpager.client.factory import build_client
from userpager.client.query_client import QueryClient
from userpager.config import Settings, get_settings
from userpager.domain.models import PaginationState
from userpager.prefetch.coordinator import PrefetchCoordinator
from userpager.state.selection import RandomSelector
from userpager.state.store import PaginationStore


@dataclass
class Session:
    client: QueryClient
    store: PaginationStore
    selector: RandomSelector
    coordinator: Optional[PrefetchCoordinator]


def build_session(
    settings: Optional[Settings] = None,
    url: Optional[str] = None,
    delay: Optional[bool] = None,
    prefetch: bool = True,
    client: Optional[QueryClient] = None,
    rng: Optional[random.Random] = None,
) -> Session:
    settings = settings or get_settings()
    client = client or build_client(settings, url=url, delay=delay)
    store = PaginationStore(PaginationState(selected_key=settings.default_selected_key))
    selector = RandomSelector(store, key_count=settings.user_count, rng=rng)
    coordinator = None
    if prefetch and settings.prefetch_pages > 0:
        coordinator = PrefetchCoordinator(
            client,
            pages=range(1, settings.prefetch_pages + 1),
            concurrency=settings.prefetch_concurrency,
            clear_delay=settings.prefetch_clear_delay_ms / 1000.0,
            cancel_on_close=settings.prefetch_cancel_on_close,
        )
    return Session(client=client, store=store, selector=selector, coordinator=coordinator)


__all__ = ["Session", "build_session"]
