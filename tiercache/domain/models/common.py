"""Defines common Value Objects used across the cache domain.

These objects represent simple values or concepts like cache keys,
policy kinds, level specifications and read-only level snapshots.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NewType, Tuple, Union

from tiercache.domain.exceptions import InvalidPolicyError, ConfigurationError

# === Core Value Objects ===

# Using NewType for semantic clarity, although they are strings at runtime.
CacheKey = NewType("CacheKey", str)      # Unique key within a cache level
CacheValue = NewType("CacheValue", str)  # Stored value; "" is a valid value

_INTEGER_PATTERN = re.compile(r"[+-]?\d+")


def parse_integer(value: Any) -> int:
    """Reads a whole number from an int or a decimal integer string.

    Booleans, floats and strings such as ``"2.5"`` are rejected rather
    than truncated.

    Raises:
        ValueError: If ``value`` is not exactly an integer.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and _INTEGER_PATTERN.fullmatch(value.strip()):
        return int(value.strip())
    raise ValueError(f"expected an integer, got {value!r}")


class PolicyKind(str, Enum):
    """Eviction strategies a cache level can be bound to."""

    LRU = "LRU"  # Recency: evict the least recently touched key
    LFU = "LFU"  # Frequency: evict the least touched key, oldest first on ties

    @classmethod
    def parse(cls, value: Union["PolicyKind", str]) -> "PolicyKind":
        """Resolves a PolicyKind from an enum member or a case-insensitive name.

        Raises:
            InvalidPolicyError: If the value names no known policy.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        known = ", ".join(kind.value for kind in cls)
        raise InvalidPolicyError(f"Unknown eviction policy '{value}'. Expected one of: {known}")


class PromotionMode(str, Enum):
    """How a value found in a slower level is copied into faster levels."""

    ADMIT = "admit"  # through CacheLevel.put: capacity and policy respected
    RAW = "raw"      # through CacheLevel.update: skips only the capacity check

    @classmethod
    def parse(cls, value: Union["PromotionMode", str]) -> "PromotionMode":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise ConfigurationError(f"Unknown promotion mode '{value}'. Expected 'admit' or 'raw'")


# --- Structured Data ---

@dataclass(frozen=True)
class LevelSpec:
    """Capacity and policy used to build one cache level."""
    capacity: int
    policy: PolicyKind


@dataclass(frozen=True)
class LevelStats:
    """Lookup and eviction counters of one cache level."""
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


@dataclass(frozen=True)
class LevelSnapshot:
    """Read-only view of a level used by display code.

    Attributes:
        label: Display label, "L1" for the fastest level.
        capacity: Configured capacity of the level.
        policy: Eviction policy kind bound to the level.
        entries: (key, value) pairs in the order the level stores them.
        stats: Counters at the time the snapshot was taken.
    """
    label: str
    capacity: int
    policy: PolicyKind
    entries: Tuple[Tuple[str, str], ...]
    stats: LevelStats = field(default_factory=LevelStats)

    @property
    def size(self) -> int:
        return len(self.entries)
