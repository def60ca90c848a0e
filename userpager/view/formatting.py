"""
Pure rendering helpers shared by the Textual view and the CLI tables.
"""

from __future__ import annotations

from datetime import datetime
from typing import Mapping, Optional, Tuple

from rich.text import Text

from userpager.domain.models import PrefetchState, UserRecord

HELP_TEXT = 'Press "j" for next page, "k" for previous page.'
USER_COLUMNS = ("Username", "Email", "Timestamp", "Spammy")


def page_title(page: int) -> str:
    return f"Users - Page {page}"


def format_timestamp(value: str) -> str:
    """Render an ISO-8601 instant in local time; unparseable values pass through."""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return parsed.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def spammy_label(spammy: bool) -> Text:
    return Text("Yes", style="bold red") if spammy else Text("No", style="green")


def user_row(record: UserRecord) -> Tuple[str, str, str, Text]:
    return (
        record.username,
        record.email,
        format_timestamp(record.timestamp),
        spammy_label(record.spammy),
    )


def prefetch_summary(status: Mapping[int, PrefetchState]) -> str:
    """One-line status, e.g. ``Prefetch: 1 ✓  2 …``; pages are listed in order."""
    if not status:
        return "Prefetch: idle"
    marks = {PrefetchState.PENDING: "…", PrefetchState.COMPLETE: "✓"}
    return "Prefetch: " + "  ".join(
        f"{page} {marks[state]}" for page, state in sorted(status.items())
    )


def selected_user_text(
    key: str,
    record: Optional[UserRecord] = None,
    loading: bool = False,
    error: Optional[str] = None,
) -> str:
    if loading:
        return f"Random user {key}: loading..."
    if error is not None:
        return f"Random user {key}: error: {error}"
    if record is None:
        return f"Random user {key}: not found"
    flag = "spammy" if record.spammy else "not spammy"
    return f"Random user: {record.username} <{record.email}> ({flag})"


__all__ = [
    "HELP_TEXT",
    "USER_COLUMNS",
    "format_timestamp",
    "page_title",
    "prefetch_summary",
    "selected_user_text",
    "spammy_label",
    "user_row",
]
