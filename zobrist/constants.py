# zobrist/constants.py
"""
Zobrist Constants

This module defines constants used throughout the zobrist package:

HASH LAYER
- SEED: Seed for the fast 64-bit hash (MurmurHash64A)
- MASK64: Mask keeping fingerprints inside 64 bits

VERIFICATION LAYER
- DEFAULT_CAPACITY: Slots in a BoundedMembershipChecker
- CHECK_SET_BEHAVIOR: Whether ZobristSet resolves to the checked variant

Verification is decided once, at import time. It requires both:
- Python running without -O (``__debug__`` is True)
- ZOBRIST_CHECK_SET_BEHAVIOR set to a truthy value (1, true, yes, on)
"""
import os


# =============================================================================
# HASH LAYER
# =============================================================================

SEED = 0
HASH_BITS = 64
MASK64 = (1 << HASH_BITS) - 1


# =============================================================================
# VERIFICATION LAYER
# =============================================================================

CHECK_SET_BEHAVIOR_ENV = "ZOBRIST_CHECK_SET_BEHAVIOR"
CHECK_CAPACITY_ENV = "ZOBRIST_CHECK_CAPACITY"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY


def _env_capacity(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        capacity = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be a positive integer, got {raw!r}") from None
    if capacity < 1:
        raise ValueError(f"{name} must be a positive integer, got {capacity}")
    return capacity


# Maximum number of simultaneously present elements a checker can track
DEFAULT_CAPACITY = _env_capacity(CHECK_CAPACITY_ENV, 1024 * 8)

# A checker logs a warning once it is this full
CAPACITY_WARNING_RATIO = 0.9
assert 0 < CAPACITY_WARNING_RATIO <= 1, "CAPACITY_WARNING_RATIO must be in (0, 1]"

CHECK_SET_BEHAVIOR = __debug__ and _env_flag(CHECK_SET_BEHAVIOR_ENV)
