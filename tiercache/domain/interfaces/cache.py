"""Interface for the multilevel cache.

Defines the contract callers (CLI, scripts, library users) rely on:
reading through the level chain, writing to the fastest level, and
managing the chain itself.
"""

import abc
from typing import List, Optional, Union

# Import relevant domain models
from tiercache.domain.models.common import CacheKey, CacheValue, LevelSnapshot, LevelStats, PolicyKind


class CacheService(abc.ABC):
    """Abstract Base Class for multilevel cache operations."""

    @abc.abstractmethod
    def get(self, key: CacheKey) -> Optional[CacheValue]:
        """Retrieves an item, searching levels from fastest to slowest.

        A hit in a slower level is promoted into every faster level.

        Args:
            key: The cache key to retrieve.

        Returns:
            The cached value, or None when no level holds the key.
        """
        pass

    @abc.abstractmethod
    def put(self, key: CacheKey, value: CacheValue) -> None:
        """Stores an item in the fastest level only.

        Args:
            key: The cache key to store the item under.
            value: The value to store.
        """
        pass

    @abc.abstractmethod
    def add_level(self, capacity: int, policy_kind: Union[PolicyKind, str]) -> None:
        """Appends a new, empty level at the slow end of the chain.

        Args:
            capacity: Maximum number of entries the level holds.
            policy_kind: Eviction policy for the level.
        """
        pass

    @abc.abstractmethod
    def remove_level(self, index: int) -> bool:
        """Removes the level at a 1-based position.

        Args:
            index: Position of the level, 1 being the fastest.

        Returns:
            True if a level was removed, False if the index was out of range.
        """
        pass

    @abc.abstractmethod
    def levels(self) -> List[LevelSnapshot]:
        """Returns read-only snapshots of every level, fastest first."""
        pass

    @abc.abstractmethod
    def delete(self, key: CacheKey) -> bool:
        """Removes a key from every level.

        Returns:
            True if at least one level held the key.
        """
        pass

    @abc.abstractmethod
    def clear(self) -> None:
        """Empties every level while keeping the chain intact."""
        pass

    @abc.abstractmethod
    def stats(self) -> List[LevelStats]:
        """Returns per-level counters, fastest first."""
        pass
