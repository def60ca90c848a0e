"""
Data source package for the user pager demo.

Re-exports the source protocol and the concrete sources so callers can import
from `userpager.datasource` directly.
"""

from userpager.datasource.abstract import AbstractUserSource, UserSource
from userpager.datasource.delayed import DelayedUserSource
from userpager.datasource.factory import build_source
from userpager.datasource.memory import InMemoryUserSource, generate_users

__all__ = [
    # Abstracts
    "AbstractUserSource",
    "UserSource",
    # Concrete sources
    "DelayedUserSource",
    "InMemoryUserSource",
    # Helpers
    "build_source",
    "generate_users",
]
