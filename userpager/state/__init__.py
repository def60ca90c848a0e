"""
Client state package: the pagination store and the random-selection reaction.
"""

from userpager.state.selection import RandomSelector, draw_key
from userpager.state.store import PaginationStore

__all__ = ["PaginationStore", "RandomSelector", "draw_key"]
