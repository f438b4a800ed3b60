"""tiercache: an in-memory multilevel key-value cache.

Levels are ordered fastest first, each with its own capacity and its own
eviction policy (LRU or LFU). Reads promote hits into faster levels;
writes go to the fastest level.
"""

from tiercache.domain.exceptions import (
    EvictionError,
    InvalidCapacityError,
    InvalidPolicyError,
    NoCacheLevelsError,
    TierCacheError,
)
from tiercache.domain.models.common import PolicyKind, PromotionMode
from tiercache.infrastructure.cache import CacheLevel, MultilevelCache

__version__ = "0.1.0"

__all__ = [
    "CacheLevel",
    "MultilevelCache",
    "PolicyKind",
    "PromotionMode",
    "TierCacheError",
    "InvalidPolicyError",
    "InvalidCapacityError",
    "NoCacheLevelsError",
    "EvictionError",
]
