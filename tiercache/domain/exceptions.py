"""Exception hierarchy for tiercache.

All custom exceptions inherit from TierCacheError so callers can
catch a single base type when they want a broad safety net. A cache
miss is never an exception; lookups return ``None`` instead.
"""


class TierCacheError(Exception):
    """Base exception for all tiercache errors."""


class InvalidPolicyError(TierCacheError, ValueError):
    """Raised when an unknown eviction policy kind is requested."""


class InvalidCapacityError(TierCacheError, ValueError):
    """Raised when a cache level is created with a non-positive capacity."""


class ConfigurationError(TierCacheError, ValueError):
    """Raised when configuration values cannot be interpreted."""


class NoCacheLevelsError(TierCacheError):
    """Raised when a write is attempted on a cache with no levels."""


class EvictionError(TierCacheError, RuntimeError):
    """Raised when a policy cannot produce a victim.

    This signals a broken internal invariant (evicting from an empty
    policy, or a victim the level does not hold), not a recoverable
    condition.
    """


class ScriptError(TierCacheError, ValueError):
    """Raised when a cache operation script or shell command is malformed."""
