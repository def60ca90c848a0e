"""
Client state store: current page, selected user key and refresh counter.

The store is a plain object handed to the view and to reactions; there is no
module-level instance, so every test or app session owns its own. Every
transition is synchronous and notifies listeners before returning.

Paging bumps `refresh_counter`, and refresh handlers registered with
`on_refresh` react to it (the random selector writes the new key back through
`set_selected_key`). Paging itself never touches `selected_key`.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, List

from userpager.domain.models import PaginationState
from userpager.utils.logging import get_logger

log = get_logger(__name__)

Listener = Callable[[PaginationState], None]
Unsubscribe = Callable[[], None]


def _remover(listeners: List[Listener], listener: Listener) -> Unsubscribe:
    def unsubscribe() -> None:
        if listener in listeners:
            listeners.remove(listener)

    return unsubscribe


class PaginationStore:
    """
    Holds a `PaginationState` and applies the paging transitions.
    """

    def __init__(self, initial: PaginationState | None = None) -> None:
        self._state = initial or PaginationState()
        if self._state.page < 1:
            raise ValueError(f"page must be >= 1, got {self._state.page}")
        self._listeners: List[Listener] = []
        self._refresh_handlers: List[Listener] = []

    @property
    def state(self) -> PaginationState:
        return self._state

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """Call `listener` with the new state after every transition."""
        self._listeners.append(listener)
        return _remover(self._listeners, listener)

    def on_refresh(self, handler: Listener) -> Unsubscribe:
        """Call `handler` whenever `refresh_counter` changes."""
        self._refresh_handlers.append(handler)
        return _remover(self._refresh_handlers, handler)

    def _commit(self, new_state: PaginationState) -> None:
        refreshed = new_state.refresh_counter != self._state.refresh_counter
        self._state = new_state
        log.debug(
            "State changed",
            extra={
                "page": new_state.page,
                "selected_key": new_state.selected_key,
                "refresh_counter": new_state.refresh_counter,
            },
        )
        for listener in list(self._listeners):
            listener(new_state)
        if refreshed:
            for handler in list(self._refresh_handlers):
                handler(new_state)

    def next_page(self) -> None:
        s = self._state
        self._commit(replace(s, page=s.page + 1, refresh_counter=s.refresh_counter + 1))

    def prev_page(self) -> None:
        # Clamped at 1, but the counter still moves.
        s = self._state
        self._commit(replace(s, page=max(1, s.page - 1), refresh_counter=s.refresh_counter + 1))

    def request_refresh(self) -> None:
        s = self._state
        self._commit(replace(s, refresh_counter=s.refresh_counter + 1))

    def set_selected_key(self, key: str) -> None:
        self._commit(replace(self._state, selected_key=key))


__all__ = ["Listener", "PaginationStore", "Unsubscribe"]
