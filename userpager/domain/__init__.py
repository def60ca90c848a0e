"""
Domain package for the user pager demo.

Exports the record, state and status types shared by the server and client
halves. Keep this package focused on data definitions.
"""

from userpager.domain.models import PaginationState, PrefetchState, UserRecord, user_key

__all__ = [
    "PaginationState",
    "PrefetchState",
    "UserRecord",
    "user_key",
]
