from __future__ import annotations

from typing import Dict, Iterable, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from userpager.domain.models import UserRecord
from userpager.utils.profiler import ProfileStats
from userpager.view.formatting import USER_COLUMNS, user_row


def print_users(
    records: Iterable[UserRecord],
    title: str,
    caption: Optional[str] = None,
    console: Optional[Console] = None,
) -> None:
    """
    Render user records as a rich table.
    """
    console = console or Console()
    records = list(records)

    if not records:
        console.print(f"[yellow]{title}: no users.[/yellow]")
        return

    table = Table(title=title, box=box.ROUNDED, caption=caption)
    styles = ("cyan", "magenta", "green", None)
    for column, style in zip(USER_COLUMNS, styles):
        table.add_column(column, style=style, no_wrap=column != "Email")

    for record in records:
        table.add_row(*user_row(record))

    console.print(table)


def print_prefetch_report(
    timings: Dict[int, float],
    failures: Dict[int, str],
    pages: Iterable[int],
    stats: ProfileStats,
    console: Optional[Console] = None,
) -> None:
    """
    Render per-page prefetch latency plus the profile of the whole run.

    Pages with neither a timing nor a failure never resolved.
    """
    console = console or Console()

    table = Table(
        title="Prefetch Results",
        box=box.ROUNDED,
        caption=f"Total {stats.duration_seconds:.2f}s",
    )
    table.add_column("Page", justify="right", style="cyan")
    table.add_column("Status", style="bold")
    table.add_column("Latency (s)", justify="right", style="green")

    for page in pages:
        if page in timings:
            table.add_row(str(page), "[green]complete[/green]", f"{timings[page]:.3f}")
        elif page in failures:
            table.add_row(str(page), f"[red]failed: {failures[page]}[/red]", "N/A")
        else:
            table.add_row(str(page), "[yellow]pending[/yellow]", "N/A")

    console.print(table)

    mem_mb = (stats.peak_rss_bytes or 0) / (1024 * 1024)
    cpu = stats.cpu_percent or 0.0
    console.print(f"[dim]Peak memory: {mem_mb:.2f} MB │ CPU: {cpu:.1f}%[/dim]")


__all__ = ["print_prefetch_report", "print_users"]
