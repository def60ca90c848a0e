"""
Build the configured user source from settings.
"""

from __future__ import annotations

from typing import Optional

from userpager.config import Settings, get_settings
from userpager.datasource.abstract import UserSource
from userpager.datasource.delayed import DelayedUserSource
from userpager.datasource.memory import InMemoryUserSource, generate_users
from userpager.utils.logging import get_logger

log = get_logger(__name__)


def build_source(settings: Optional[Settings] = None, delay: Optional[bool] = None) -> UserSource:
    """
    Generate the user collection once and wrap it in a delay when enabled.

    Parameters
    ----------
    settings : Settings | None
        Defaults to the cached process settings.
    delay : bool | None
        Overrides `settings.delay_enabled` when given.
    """
    settings = settings or get_settings()
    records = generate_users(count=settings.user_count, seed=settings.data_seed)
    source: UserSource = InMemoryUserSource(records, page_size=settings.page_size)

    use_delay = settings.delay_enabled if delay is None else delay
    if use_delay:
        source = DelayedUserSource(
            source,
            min_delay_ms=settings.delay_min_ms,
            max_delay_ms=settings.delay_max_ms,
        )

    log.info(
        "User source ready",
        extra={
            "source": source.name,
            "users": settings.user_count,
            "page_size": settings.page_size,
        },
    )
    return source


__all__ = ["build_source"]
