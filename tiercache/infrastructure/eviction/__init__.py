"""Eviction policy implementations.

Maps each PolicyKind tag to a factory producing a fresh, unshared policy
instance. New strategies are added by registering another factory.
"""

from typing import Callable, Dict, Union

from tiercache.domain.interfaces.eviction_policy import EvictionPolicy
from tiercache.domain.models.common import PolicyKind
from tiercache.infrastructure.eviction.lfu import LFUEvictionPolicy
from tiercache.infrastructure.eviction.lru import LRUEvictionPolicy

POLICY_FACTORIES: Dict[PolicyKind, Callable[[], EvictionPolicy]] = {
    PolicyKind.LRU: LRUEvictionPolicy,
    PolicyKind.LFU: LFUEvictionPolicy,
}


def create_policy(kind: Union[PolicyKind, str]) -> EvictionPolicy:
    """Builds a new policy instance for ``kind``.

    Raises:
        InvalidPolicyError: If ``kind`` is not a known policy.
    """
    return POLICY_FACTORIES[PolicyKind.parse(kind)]()


__all__ = ["LRUEvictionPolicy", "LFUEvictionPolicy", "POLICY_FACTORIES", "create_policy"]
