"""Interface for eviction strategies.

An eviction policy is a capability set rather than a base class: anything
that records accesses and picks a victim on demand can back a cache level.
Concrete strategies live in ``tiercache.infrastructure.eviction`` and are
looked up by their PolicyKind tag.
"""

from typing import Protocol, runtime_checkable

from tiercache.domain.models.common import CacheKey, PolicyKind


@runtime_checkable
class EvictionPolicy(Protocol):
    """Tracks key usage for one cache level and chooses keys to evict."""

    kind: PolicyKind

    def access(self, key: CacheKey) -> None:
        """Records that ``key`` was just inserted or read.

        Args:
            key: The key that was touched. Unknown keys start being tracked.
        """
        ...

    def evict(self) -> CacheKey:
        """Removes and returns the victim key.

        Returns:
            The key the level must drop.

        Raises:
            EvictionError: If no keys are tracked.
        """
        ...

    def discard(self, key: CacheKey) -> None:
        """Stops tracking ``key`` without treating it as a victim.

        Unknown keys are ignored.
        """
        ...

    def __contains__(self, key: object) -> bool:
        ...

    def __len__(self) -> int:
        ...
