"""
Textual front end: the paginated user table, the random user and prefetch progress.

The app owns no state of its own. It renders whatever the store, the query
client and the prefetcher report, and turns the `j` / `k` key presses into
store transitions. Page and user loads run as exclusive workers, so a newer
request cancels the one it supersedes.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import DataTable, Footer, Header, Static

from userpager.client.query_client import QueryClient
from userpager.domain.models import PaginationState, PrefetchState
from userpager.errors import UserPagerError
from userpager.prefetch.coordinator import PrefetchCoordinator
from userpager.state.selection import RandomSelector
from userpager.state.store import PaginationStore
from userpager.utils.logging import get_logger
from userpager.view.formatting import (
    HELP_TEXT,
    USER_COLUMNS,
    page_title,
    prefetch_summary,
    selected_user_text,
    user_row,
)

log = get_logger(__name__)


class UserBrowserApp(App):
    """Browse the mock users page by page."""

    TITLE = "userpager"

    CSS = """
    #title {
        padding: 0 1;
        text-style: bold;
    }
    #users {
        height: 1fr;
    }
    #random-user {
        padding: 0 1;
        background: $boost;
        color: $warning;
    }
    #prefetch, #help {
        padding: 0 1;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("j", "advance_page", "Next page"),
        Binding("k", "retreat_page", "Previous page"),
        Binding("r", "refresh", "New random user"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        client: QueryClient,
        store: PaginationStore,
        selector: RandomSelector,
        coordinator: Optional[PrefetchCoordinator] = None,
    ) -> None:
        super().__init__()
        self.client = client
        self.store = store
        self.selector = selector
        self.coordinator = coordinator
        self.page_error: Optional[str] = None
        self.rendered: Dict[str, str] = {}
        self._shown_page: Optional[int] = None
        self._shown_key: Optional[str] = None
        self._unsubscribers: List[Callable[[], None]] = []

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(id="title")
        yield DataTable(id="users", cursor_type="row", zebra_stripes=True)
        yield Static(id="random-user")
        yield Static(prefetch_summary({}), id="prefetch")
        yield Static(HELP_TEXT, id="help")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one(DataTable).add_columns(*USER_COLUMNS)
        self._unsubscribers.append(self.store.subscribe(self._on_state))
        self.selector.attach()
        if self.coordinator is not None:
            self._unsubscribers.append(self.coordinator.on_change(self._on_prefetch))
            self.coordinator.start()
        self._show("prefetch", prefetch_summary({}))
        self._on_state(self.store.state)

    async def on_unmount(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        self.selector.detach()
        if self.coordinator is not None:
            await self.coordinator.aclose()

    def _on_state(self, state: PaginationState) -> None:
        if state.page != self._shown_page:
            self._shown_page = state.page
            self.load_page(state.page)
        if state.selected_key != self._shown_key:
            self._shown_key = state.selected_key
            self.load_selected(state.selected_key)

    def _show(self, widget_id: str, text: str) -> None:
        self.rendered[widget_id] = text
        self.query_one(f"#{widget_id}", Static).update(text)

    def _on_prefetch(self, status: Dict[int, PrefetchState]) -> None:
        self._show("prefetch", prefetch_summary(status))

    @work(exclusive=True, group="page")
    async def load_page(self, page: int) -> None:
        self._show("title", page_title(page))
        table = self.query_one(DataTable)
        table.loading = True
        try:
            records = await self.client.list_page(page)
        except UserPagerError as exc:
            self.page_error = str(exc)
            log.warning("Page load failed", extra={"page": page, "error": str(exc)})
            table.clear()
            self._show("title", f"{page_title(page)} - Error: {exc}")
            return
        finally:
            table.loading = False

        self.page_error = None
        table.clear()
        for record in records:
            table.add_row(*user_row(record), key=record.username)

    @work(exclusive=True, group="selected")
    async def load_selected(self, key: str) -> None:
        self._show("random-user", selected_user_text(key, loading=True))
        try:
            record = await self.client.find_by_key(key)
        except UserPagerError as exc:
            log.warning("User load failed", extra={"username": key, "error": str(exc)})
            self._show("random-user", selected_user_text(key, error=str(exc)))
            return
        self._show("random-user", selected_user_text(key, record=record))

    def action_advance_page(self) -> None:
        self.store.next_page()

    def action_retreat_page(self) -> None:
        self.store.prev_page()

    def action_refresh(self) -> None:
        self.store.request_refresh()


__all__ = ["UserBrowserApp"]
