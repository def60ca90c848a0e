from __future__ import annotations

import random

import pytest

from userpager.domain.models import PaginationState
from userpager.state.selection import RandomSelector, draw_key
from userpager.state.store import PaginationStore

TRIALS = 200
PAGE_KEYS = {f"user{i}" for i in range(1, 11)}


def test_next_then_prev_returns_to_page_and_counts_twice(store: PaginationStore) -> None:
    store.next_page()
    store.next_page()
    start = store.state

    store.next_page()
    store.prev_page()

    assert store.state.page == start.page
    assert store.state.refresh_counter == start.refresh_counter + 2


def test_prev_page_clamps_at_one_but_still_refreshes(store: PaginationStore) -> None:
    store.prev_page()
    assert store.state.page == 1
    assert store.state.refresh_counter == 1


def test_request_refresh_only_touches_counter(store: PaginationStore) -> None:
    store.next_page()
    store.request_refresh()
    assert store.state.page == 2
    assert store.state.refresh_counter == 2


def test_set_selected_key_does_not_refresh(store: PaginationStore) -> None:
    store.set_selected_key("user42")
    assert store.state.selected_key == "user42"
    assert store.state.refresh_counter == 0


def test_paging_never_writes_selected_key_without_a_reaction(store: PaginationStore) -> None:
    store.next_page()
    store.prev_page()
    assert store.state.selected_key == "user1"


def test_initial_page_must_be_positive() -> None:
    with pytest.raises(ValueError):
        PaginationStore(PaginationState(page=0))


def test_subscribers_and_refresh_handlers(store: PaginationStore) -> None:
    seen: list[PaginationState] = []
    refreshes: list[int] = []
    unsubscribe = store.subscribe(seen.append)
    store.on_refresh(lambda s: refreshes.append(s.refresh_counter))

    store.next_page()
    store.set_selected_key("user9")
    unsubscribe()
    store.prev_page()

    assert [s.page for s in seen] == [2, 2]
    assert refreshes == [1, 2]


def test_independent_stores_do_not_share_state() -> None:
    first, second = PaginationStore(), PaginationStore()
    first.next_page()
    assert second.state.page == 1


def test_selector_reacts_to_every_refresh(store: PaginationStore) -> None:
    selector = RandomSelector(store, rng=random.Random(1))
    selector.attach()
    selector.attach()
    keys: list[str] = []
    store.subscribe(lambda s: keys.append(s.selected_key))

    store.next_page()
    store.prev_page()
    store.request_refresh()

    # Paging publishes once, then the reaction publishes the new key.
    assert len(keys) == 6
    assert store.state.selected_key == keys[-1]


def test_selector_is_reproducible_with_seed() -> None:
    draws = []
    for _ in range(2):
        store = PaginationStore()
        RandomSelector(store, rng=random.Random(99)).attach()
        for _ in range(10):
            store.request_refresh()
        draws.append(store.state.selected_key)
    assert draws[0] == draws[1]


def test_selection_spans_full_key_space_not_current_page(store: PaginationStore) -> None:
    selector = RandomSelector(store, key_count=100, rng=random.Random(2024))
    selector.attach()
    drawn = set()

    for _ in range(TRIALS):
        store.request_refresh()
        drawn.add(store.state.selected_key)

    assert store.state.page == 1
    assert drawn - PAGE_KEYS
    assert all(1 <= int(k.removeprefix("user")) <= 100 for k in drawn)


def test_detach_stops_reacting(store: PaginationStore) -> None:
    selector = RandomSelector(store, rng=random.Random(5))
    selector.attach()
    selector.detach()
    store.next_page()
    assert store.state.selected_key == "user1"
    assert not selector.attached


def test_draw_key_bounds() -> None:
    rng = random.Random(0)
    assert {draw_key(rng, 1) for _ in range(5)} == {"user1"}
