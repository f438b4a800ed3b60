"""Concrete implementation of the multilevel cache.

Chains CacheLevel instances from fastest (index 0) to slowest. Reads scan
the chain in order and promote hits into faster levels; writes go to the
fastest level only. Entries evicted from a level are discarded, never
demoted into the next level.
"""

import logging
import threading
from typing import List, Optional, Union

# Domain Layer Imports
from tiercache.domain.exceptions import NoCacheLevelsError
from tiercache.domain.interfaces.cache import CacheService
from tiercache.domain.models.common import (
    CacheKey,
    CacheValue,
    LevelSnapshot,
    LevelStats,
    PolicyKind,
    PromotionMode,
)
from tiercache.infrastructure.cache.cache_level import CacheLevel
from tiercache.infrastructure.eviction import create_policy

logger = logging.getLogger(__name__)


class MultilevelCache(CacheService):
    """Ordered chain of cache levels with read-through promotion.

    Every public operation holds the cache-wide lock for its full duration,
    so calls are linearizable. The exception is ``level(n)``: it hands out
    the live CacheLevel, and writes made through it are serialized only by
    that level's own lock. Locks are always taken cache, then level,
    then policy.

    Args:
        promotion: How hits found in slower levels are copied upward.
            ``admit`` (default) goes through ``CacheLevel.put`` so the
            receiving level keeps its capacity and marks the key as used.
            ``raw`` uses ``CacheLevel.update``, which skips only the
            capacity check and so can overflow it.
    """

    def __init__(self, promotion: Union[PromotionMode, str] = PromotionMode.ADMIT) -> None:
        self._levels: List[CacheLevel] = []
        self._lock = threading.Lock()
        self._promotion = PromotionMode.parse(promotion)
        logger.info(f"MultilevelCache initialized (promotion={self._promotion.value})")

    @property
    def promotion(self) -> PromotionMode:
        return self._promotion

    @property
    def level_count(self) -> int:
        with self._lock:
            return len(self._levels)

    # --- CacheService Interface Implementation ---

    def add_level(self, capacity: int, policy_kind: Union[PolicyKind, str]) -> None:
        policy = create_policy(policy_kind)
        level = CacheLevel(capacity, policy)
        with self._lock:
            self._levels.append(level)
            position = len(self._levels)
        logger.info(f"Added cache level L{position}: capacity={capacity}, policy={policy.kind.value}")

    def remove_level(self, index: int) -> bool:
        with self._lock:
            if not 1 <= index <= len(self._levels):
                logger.debug(f"remove_level({index}) ignored, cache has {len(self._levels)} levels")
                return False
            removed = self._levels.pop(index - 1)
        logger.info(f"Removed cache level L{index}: {removed!r}")
        return True

    def get(self, key: CacheKey) -> Optional[CacheValue]:
        with self._lock:
            for position, level in enumerate(self._levels):
                value = level.get(key)
                if value is None:
                    continue
                logger.debug(f"Cache hit for key '{key}' at L{position + 1}")
                self._promote(key, value, position)
                return value
        logger.debug(f"Cache miss for key '{key}' across all levels")
        return None

    def put(self, key: CacheKey, value: CacheValue) -> None:
        with self._lock:
            if not self._levels:
                raise NoCacheLevelsError("Cannot store a value: the cache has no levels")
            self._levels[0].put(key, value)

    def delete(self, key: CacheKey) -> bool:
        with self._lock:
            removed = [level.delete(key) for level in self._levels]
        return any(removed)

    def clear(self) -> None:
        with self._lock:
            for level in self._levels:
                level.clear()
        logger.info("Cleared all cache levels.")

    def levels(self) -> List[LevelSnapshot]:
        with self._lock:
            return [
                LevelSnapshot(
                    label=f"L{position}",
                    capacity=level.capacity,
                    policy=level.policy_kind,
                    entries=tuple(level.items()),
                    stats=level.stats(),
                )
                for position, level in enumerate(self._levels, start=1)
            ]

    def stats(self) -> List[LevelStats]:
        with self._lock:
            return [level.stats() for level in self._levels]

    # --- Direct level access ---

    def level(self, index: int) -> CacheLevel:
        """Returns the level at a 1-based position.

        Lets callers seed slower levels directly; nothing in the cache itself
        writes below L1. Calls on the returned level do not take the
        cache-wide lock, so they are not ordered against concurrent cache
        operations.

        Raises:
            IndexError: If no level exists at ``index``.
        """
        with self._lock:
            if not 1 <= index <= len(self._levels):
                raise IndexError(f"No cache level L{index} (cache has {len(self._levels)} levels)")
            return self._levels[index - 1]

    def _promote(self, key: CacheKey, value: CacheValue, hit_position: int) -> None:
        # Caller holds self._lock. Copies toward L1, nearest level first.
        for position in range(hit_position - 1, -1, -1):
            target = self._levels[position]
            if self._promotion is PromotionMode.RAW:
                target.update(key, value)
            else:
                target.put(key, value)
            logger.debug(f"Promoted '{key}' into L{position + 1} ({self._promotion.value})")
