"""
Prefetch package.
"""

from userpager.prefetch.coordinator import PrefetchCoordinator

__all__ = ["PrefetchCoordinator"]
