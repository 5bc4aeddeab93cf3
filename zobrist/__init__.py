"""
Zobrist - incremental fingerprints for mutable sets

Tracks "what is currently in this set" as one 64-bit integer, updated
with a single XOR per added or removed element.

    from zobrist import ZobristSet

    s = ZobristSet.empty()
    s.add((0, 4, "king"))
    key = int(s)

Set ZOBRIST_CHECK_SET_BEHAVIOR=1 (and run without -O) to make ZobristSet
validate every add/remove against a bounded membership checker.
"""

__version__ = "0.1.0"

from .constants import CHECK_SET_BEHAVIOR, DEFAULT_CAPACITY
from .errors import (
    ZobristError,
    SetBehaviorError,
    DuplicateElementError,
    MissingElementError,
    CapacityExceededError,
)
from .hashing import HashConfig, DEFAULT_HASH_CONFIG, encode_key, hash_key, murmur_hash64a
from .membership import BoundedMembershipChecker
from .zobrist_set import (
    ZobristHashSet,
    CheckedZobristHashSet,
    ZobristSet,
    check_set_behavior_enabled,
)

__all__ = [
    "CHECK_SET_BEHAVIOR",
    "DEFAULT_CAPACITY",
    "ZobristError",
    "SetBehaviorError",
    "DuplicateElementError",
    "MissingElementError",
    "CapacityExceededError",
    "HashConfig",
    "DEFAULT_HASH_CONFIG",
    "encode_key",
    "hash_key",
    "murmur_hash64a",
    "BoundedMembershipChecker",
    "ZobristHashSet",
    "CheckedZobristHashSet",
    "ZobristSet",
    "check_set_behavior_enabled",
]
