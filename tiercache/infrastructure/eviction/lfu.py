"""Least Frequently Used eviction policy."""

import itertools
import logging
import threading
from typing import Dict

from tiercache.domain.exceptions import EvictionError
from tiercache.domain.models.common import CacheKey, PolicyKind

logger = logging.getLogger(__name__)


class LFUEvictionPolicy:
    """Evicts the key with the fewest accesses.

    Each key carries an access count and the sequence number of its most
    recent access. The sequence counter advances on every ``access`` call,
    so among keys with equal counts the one touched longest ago loses.
    Victim selection is a linear scan over the tracked keys.
    """

    kind = PolicyKind.LFU

    def __init__(self) -> None:
        self._counts: Dict[CacheKey, int] = {}
        self._last_access: Dict[CacheKey, int] = {}
        self._sequence = itertools.count()
        self._lock = threading.Lock()

    def access(self, key: CacheKey) -> None:
        with self._lock:
            self._counts[key] = self._counts.get(key, 0) + 1
            self._last_access[key] = next(self._sequence)

    def evict(self) -> CacheKey:
        with self._lock:
            if not self._counts:
                raise EvictionError("LFU policy asked to evict with no tracked keys")
            victim = min(self._counts, key=lambda k: (self._counts[k], self._last_access[k]))
            count = self._counts.pop(victim)
            del self._last_access[victim]
        logger.debug(f"LFU victim selected: {victim} (count={count})")
        return victim

    def discard(self, key: CacheKey) -> None:
        with self._lock:
            self._counts.pop(key, None)
            self._last_access.pop(key, None)

    def count(self, key: CacheKey) -> int:
        """Access count of ``key``, 0 if untracked."""
        with self._lock:
            return self._counts.get(key, 0)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._counts

    def __len__(self) -> int:
        with self._lock:
            return len(self._counts)
