from __future__ import annotations

import asyncio
import sys
from typing import Any, Awaitable, Callable, Optional, TypeVar

import typer
import uvicorn

from userpager.client.factory import build_client
from userpager.client.query_client import QueryClient
from userpager.config import Settings, get_settings
from userpager.errors import UserPagerError
from userpager.gateway.server import create_default_app
from userpager.prefetch.coordinator import PrefetchCoordinator
from userpager.reporter import print_prefetch_report, print_users
from userpager.utils.logging import configure_logging, get_logger
from userpager.utils.profiler import profile_block
from userpager.view.app import UserBrowserApp
from userpager.view.formatting import page_title
from userpager.view.session import build_session

app = typer.Typer(help="Paginated user listing over a mock GraphQL API.")
log = get_logger(__name__)

T = TypeVar("T")

URL_OPTION = typer.Option(
    None, "--url", "-u", help="Remote GraphQL endpoint. Defaults to an in-process gateway."
)
DELAY_OPTION = typer.Option(
    None, "--delay/--no-delay", help="Simulate 500-3000ms latency (default from settings)."
)


def _settings() -> Settings:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    return settings


def _run(client: QueryClient, fn: Callable[[QueryClient], Awaitable[T]]) -> T:
    async def _go() -> T:
        try:
            return await fn(client)
        finally:
            await client.aclose()

    try:
        return asyncio.run(_go())
    except UserPagerError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    delay = (
        f"{settings.delay_min_ms}-{settings.delay_max_ms}ms" if settings.delay_enabled else "off"
    )
    typer.echo(
        f"GraphQL={settings.graphql_url} | users={settings.user_count} "
        f"page_size={settings.page_size} delay={delay} | "
        f"prefetch pages={settings.prefetch_pages} "
        f"concurrency={settings.prefetch_concurrency or 'unbounded'} "
        f"fetch_policy={settings.fetch_policy}"
    )


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from settings)."),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (default from settings)."),
    delay: Optional[bool] = DELAY_OPTION,
) -> None:
    """
    Run the mock GraphQL server.
    """
    settings = _settings()
    overrides: dict[str, Any] = {}
    if host is not None:
        overrides["server_host"] = host
    if port is not None:
        overrides["server_port"] = port
    if delay is not None:
        overrides["delay_enabled"] = delay
    settings = settings.model_copy(update=overrides)

    typer.echo(f"GraphQL server running at {settings.graphql_url}")
    uvicorn.run(
        create_default_app(settings),
        host=settings.server_host,
        port=settings.server_port,
        log_config=None,
    )


@app.command()
def browse(
    url: Optional[str] = URL_OPTION,
    delay: Optional[bool] = DELAY_OPTION,
    prefetch: bool = typer.Option(True, "--prefetch/--no-prefetch", help="Warm pages 1..N on start."),
) -> None:
    """
    Open the interactive browser ("j" next page, "k" previous page, "r" new random user).
    """
    settings = _settings()
    session = build_session(settings, url=url, delay=delay, prefetch=prefetch)
    UserBrowserApp(
        client=session.client,
        store=session.store,
        selector=session.selector,
        coordinator=session.coordinator,
    ).run()


@app.command()
def page(
    number: int = typer.Argument(1, help="1-based page number."),
    url: Optional[str] = URL_OPTION,
    delay: Optional[bool] = DELAY_OPTION,
) -> None:
    """
    Print one page of users.
    """
    settings = _settings()
    records = _run(build_client(settings, url=url, delay=delay), lambda c: c.list_page(number))
    print_users(records, title=page_title(number))


@app.command()
def user(
    username: str = typer.Argument(..., help="Username, e.g. user57."),
    url: Optional[str] = URL_OPTION,
    delay: Optional[bool] = DELAY_OPTION,
) -> None:
    """
    Look up a single user.
    """
    settings = _settings()
    record = _run(build_client(settings, url=url, delay=delay), lambda c: c.find_by_key(username))
    if record is None:
        typer.echo(f"User {username} not found")
        raise typer.Exit(code=1)
    print_users([record], title=f"User {username}")


@app.command()
def spammy(
    url: Optional[str] = URL_OPTION,
    delay: Optional[bool] = DELAY_OPTION,
) -> None:
    """
    Print every user flagged spammy.
    """
    settings = _settings()
    records = _run(build_client(settings, url=url, delay=delay), lambda c: c.spammy_users())
    print_users(records, title="Spammy Users", caption=f"{len(records)} flagged")


@app.command()
def prefetch(
    url: Optional[str] = URL_OPTION,
    delay: Optional[bool] = DELAY_OPTION,
    pages: Optional[int] = typer.Option(None, "--pages", help="Pages to warm (default from settings)."),
    concurrency: Optional[int] = typer.Option(
        None, "--concurrency", "-c", min=1, help="Max requests in flight (default: unbounded)."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", "-t", help="Give up on pages still pending after this many seconds."
    ),
) -> None:
    """
    Prefetch pages once and report per-page latency.
    """
    settings = _settings()
    page_numbers = list(range(1, (pages if pages is not None else settings.prefetch_pages) + 1))
    client = build_client(settings, url=url, delay=delay)
    coordinator = PrefetchCoordinator(
        client,
        pages=page_numbers,
        concurrency=concurrency if concurrency is not None else settings.prefetch_concurrency,
        clear_delay=0.0,
    )

    async def _warm(_: QueryClient) -> None:
        async with coordinator:
            finished = await coordinator.wait(timeout=timeout)
        if not finished:
            log.warning("Prefetch timed out", extra={"pending": len(coordinator.status)})

    with profile_block("prefetch") as stats:
        _run(client, _warm)

    stats.extra.update(
        pages=len(page_numbers),
        completed=len(coordinator.timings),
        failed=len(coordinator.failures),
    )
    log.info("Prefetch finished", extra=stats.as_dict())

    print_prefetch_report(coordinator.timings, coordinator.failures, page_numbers, stats)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
