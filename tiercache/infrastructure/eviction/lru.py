"""Least Recently Used eviction policy."""

import logging
import threading
from collections import OrderedDict
from typing import List

from tiercache.domain.exceptions import EvictionError
from tiercache.domain.models.common import CacheKey, PolicyKind

logger = logging.getLogger(__name__)


class LRUEvictionPolicy:
    """Evicts the key touched least recently.

    Keys are kept in an OrderedDict, oldest first, so both ``access`` and
    ``evict`` are O(1).
    """

    kind = PolicyKind.LRU

    def __init__(self) -> None:
        self._order: "OrderedDict[CacheKey, None]" = OrderedDict()
        self._lock = threading.Lock()

    def access(self, key: CacheKey) -> None:
        with self._lock:
            if key in self._order:
                self._order.move_to_end(key)
            else:
                self._order[key] = None

    def evict(self) -> CacheKey:
        with self._lock:
            if not self._order:
                raise EvictionError("LRU policy asked to evict with no tracked keys")
            victim, _ = self._order.popitem(last=False)
        logger.debug(f"LRU victim selected: {victim}")
        return victim

    def discard(self, key: CacheKey) -> None:
        with self._lock:
            self._order.pop(key, None)

    def order(self) -> List[CacheKey]:
        """Tracked keys, least recently used first."""
        with self._lock:
            return list(self._order)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._order

    def __len__(self) -> int:
        with self._lock:
            return len(self._order)
