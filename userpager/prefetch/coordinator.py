"""
Prefetch coordinator: warm the query client's cache for a fixed page range.

Each tracked page moves pending -> complete -> removed. `start` fires one
`listPage` request per page; with `concurrency=None` they all go out at once,
otherwise an asyncio semaphore caps how many are in flight. A completed page
drops out of the status mapping `clear_delay` seconds after its response.

A failed request is logged and its page stays pending; nothing is retried and
nothing propagates to the caller, so prefetching can never break the page
view. `aclose` cancels outstanding requests unless `cancel_on_close` is off.
"""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable, Dict, Iterable, List, Optional

from userpager.client.query_client import QueryClient
from userpager.domain.models import PrefetchState
from userpager.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_PAGES = range(1, 11)
DEFAULT_CLEAR_DELAY_SECONDS = 0.5

StatusListener = Callable[[Dict[int, PrefetchState]], None]
Sleeper = Callable[[float], Awaitable[None]]


class PrefetchCoordinator:
    """
    Issue and track one prefetch per page.

    Parameters
    ----------
    client : QueryClient
        Client whose cache the responses land in.
    pages : iterable[int]
        Pages to prefetch, 1..10 by default.
    concurrency : int | None
        Maximum requests in flight; None means unbounded.
    clear_delay : float
        Seconds a completed page stays visible before it is removed.
    cancel_on_close : bool
        Whether `aclose` abandons requests still in flight.
    """

    def __init__(
        self,
        client: QueryClient,
        pages: Iterable[int] = DEFAULT_PAGES,
        concurrency: Optional[int] = None,
        clear_delay: float = DEFAULT_CLEAR_DELAY_SECONDS,
        cancel_on_close: bool = True,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        if concurrency is not None and concurrency < 1:
            raise ValueError(f"concurrency must be >= 1 or None, got {concurrency}")
        self.client = client
        self.pages: List[int] = list(dict.fromkeys(pages))
        self.concurrency = concurrency
        self.clear_delay = clear_delay
        self.cancel_on_close = cancel_on_close
        self._sleep = sleep
        self._semaphore = asyncio.Semaphore(concurrency) if concurrency else None

        self._status: Dict[int, PrefetchState] = {}
        self._tasks: Dict[int, asyncio.Task] = {}
        self._listeners: List[StatusListener] = []
        self.timings: Dict[int, float] = {}
        self.failures: Dict[int, str] = {}
        self.in_flight = 0
        self.max_in_flight = 0

    @property
    def status(self) -> Dict[int, PrefetchState]:
        """Snapshot of the tracked pages."""
        return dict(self._status)

    @property
    def started(self) -> bool:
        return bool(self._tasks)

    @property
    def done(self) -> bool:
        return self.started and all(task.done() for task in self._tasks.values())

    def on_change(self, listener: StatusListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.status
        for listener in list(self._listeners):
            listener(snapshot)

    def start(self) -> None:
        """Mark every page pending and fire its request. Must run inside an event loop."""
        if self.started:
            raise RuntimeError("prefetch already started")
        for page in self.pages:
            self._status[page] = PrefetchState.PENDING
        self._notify()
        log.info(
            "Prefetch started",
            extra={"pages": len(self.pages), "concurrency": self.concurrency},
        )
        for page in self.pages:
            self._tasks[page] = asyncio.create_task(
                self._prefetch(page), name=f"prefetch-page-{page}"
            )

    async def _fetch(self, page: int) -> None:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        started = time.perf_counter()
        try:
            await self.client.list_page(page)
        finally:
            self.in_flight -= 1
        self.timings[page] = time.perf_counter() - started
        self._status[page] = PrefetchState.COMPLETE
        self._notify()

    async def _prefetch(self, page: int) -> None:
        try:
            if self._semaphore is not None:
                async with self._semaphore:
                    await self._fetch(page)
            else:
                await self._fetch(page)
        except asyncio.CancelledError:
            log.debug("Prefetch cancelled", extra={"page": page})
            raise
        except Exception as exc:  # noqa: BLE001 - prefetch failures are only logged
            self.failures[page] = str(exc)
            log.warning("Prefetch failed", extra={"page": page, "error": str(exc)})
            return

        await self._sleep(self.clear_delay)
        self._status.pop(page, None)
        self._notify()

    async def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for every prefetch task to finish; True when all did within `timeout`.
        """
        if not self._tasks:
            return True
        _, pending = await asyncio.wait(list(self._tasks.values()), timeout=timeout)
        return not pending

    async def aclose(self) -> None:
        outstanding = [task for task in self._tasks.values() if not task.done()]
        if self.cancel_on_close:
            for task in outstanding:
                task.cancel()
            if outstanding:
                log.info("Prefetch abandoned", extra={"outstanding": len(outstanding)})
        await asyncio.gather(*outstanding, return_exceptions=True)

    async def __aenter__(self) -> "PrefetchCoordinator":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        del exc_type, exc, tb
        await self.aclose()


__all__ = ["DEFAULT_CLEAR_DELAY_SECONDS", "DEFAULT_PAGES", "PrefetchCoordinator"]
