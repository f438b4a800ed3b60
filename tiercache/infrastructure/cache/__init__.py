"""Multilevel cache implementation.

Provides CacheLevel (one fixed-capacity tier bound to an eviction policy)
and MultilevelCache (the ordered chain implementing the CacheService
interface).
"""

from tiercache.infrastructure.cache.cache_level import CacheLevel
from tiercache.infrastructure.cache.multilevel_cache import MultilevelCache

__all__ = ["CacheLevel", "MultilevelCache"]
