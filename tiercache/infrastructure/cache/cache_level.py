"""A single fixed-capacity cache tier."""

import logging
import threading
from typing import Dict, List, Optional, Tuple

from tiercache.domain.exceptions import EvictionError, InvalidCapacityError
from tiercache.domain.interfaces.eviction_policy import EvictionPolicy
from tiercache.domain.models.common import CacheKey, CacheValue, LevelStats, PolicyKind

logger = logging.getLogger(__name__)


class CacheLevel:
    """Key/value store bounded by ``capacity`` and governed by one eviction policy.

    The level owns its policy exclusively. Every key stored in the level is
    tracked by the policy and vice versa. A level never talks to other levels;
    layering is handled by MultilevelCache.

    Args:
        capacity: Maximum number of entries, must be at least 1.
        policy: A fresh policy instance not shared with any other level.
    """

    def __init__(self, capacity: int, policy: EvictionPolicy) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
            raise InvalidCapacityError(f"Cache level capacity must be a positive integer, got {capacity!r}")
        self._capacity = capacity
        self._policy = policy
        self._data: Dict[CacheKey, CacheValue] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def policy_kind(self) -> PolicyKind:
        return self._policy.kind

    def get(self, key: CacheKey) -> Optional[CacheValue]:
        """Returns the value for ``key`` and records the access, or None on a miss."""
        with self._lock:
            if key not in self._data:
                self._misses += 1
                return None
            self._policy.access(key)
            self._hits += 1
            return self._data[key]

    def put(self, key: CacheKey, value: CacheValue) -> List[CacheKey]:
        """Inserts or overwrites ``key``, evicting when a new key does not fit.

        Overwriting a key that is already stored never evicts. After a raw
        promotion overflowed the level, one put may evict several keys.

        Returns:
            The evicted keys in eviction order, empty when nothing was evicted.
        """
        with self._lock:
            victims: List[CacheKey] = []
            if key not in self._data:
                while len(self._data) >= self._capacity:
                    victims.append(self._evict_one())
            self._data[key] = value
            self._policy.access(key)
            return victims

    def update(self, key: CacheKey, value: CacheValue) -> None:
        """Stores ``key`` without checking capacity.

        A key not yet stored is registered with the policy as an access, so
        it becomes the most recently used entry and stays eligible for
        eviction. Overwriting a stored key leaves the policy untouched.
        """
        with self._lock:
            if key not in self._data:
                self._policy.access(key)
            self._data[key] = value

    def contains(self, key: CacheKey) -> bool:
        with self._lock:
            return key in self._data

    def delete(self, key: CacheKey) -> bool:
        with self._lock:
            if key not in self._data:
                return False
            del self._data[key]
            self._policy.discard(key)
            return True

    def clear(self) -> None:
        with self._lock:
            for key in self._data:
                self._policy.discard(key)
            self._data.clear()

    def items(self) -> List[Tuple[CacheKey, CacheValue]]:
        """Snapshot of the stored (key, value) pairs."""
        with self._lock:
            return list(self._data.items())

    def stats(self) -> LevelStats:
        with self._lock:
            return LevelStats(hits=self._hits, misses=self._misses, evictions=self._evictions)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __repr__(self) -> str:
        return f"CacheLevel(capacity={self._capacity}, policy={self._policy.kind.value}, size={len(self._data)})"

    def _evict_one(self) -> CacheKey:
        # Caller holds self._lock.
        victim = self._policy.evict()
        if victim not in self._data:
            raise EvictionError(f"Policy chose '{victim}' as victim but the level does not hold it")
        del self._data[victim]
        self._evictions += 1
        logger.info(f"Evicted '{victim}' from {self._policy.kind.value} level (capacity={self._capacity})")
        return victim
