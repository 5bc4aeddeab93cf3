"""
ZobristHashSet - incremental, order-independent set fingerprint

Implementation of Zobrist hashing without a random table: every element
is hashed with the fast 64-bit hash from `hashing`, and the fingerprint
is the XOR of the hashes of the elements currently present.

    s = ZobristSet.empty()
    s.add(k)      # value ^= hash(k)
    s.remove(k)   # value ^= hash(k)   (XOR is its own inverse)
    int(s)        # the fingerprint, a plain 64-bit int

What is "present" is defined only by the caller's add/remove sequence.
The fingerprint does not know the collection it describes.

Build Modes:
    ZobristHashSet         production: one int, no other state
    CheckedZobristHashSet  verification: also drives a
                           BoundedMembershipChecker and raises on misuse
    ZobristSet             whichever of the two this process selected
                           at import (see constants.CHECK_SET_BEHAVIOR)

For every call sequence the checker accepts, both variants go through
the same fingerprint values.
"""

from __future__ import annotations
from typing import Generic, Optional, TypeVar
import logging
import operator

from .constants import CHECK_SET_BEHAVIOR, DEFAULT_CAPACITY, MASK64
from .errors import DuplicateElementError, MissingElementError
from .hashing import HashConfig, DEFAULT_HASH_CONFIG
from .membership import BoundedMembershipChecker

logger = logging.getLogger(__name__)

E = TypeVar('E')


class ZobristHashSet(Generic[E]):
    """
    Fingerprint of a mutable set of elements of type E.

    The type parameter carries no runtime data; it lets a type checker
    reject mixing a ZobristHashSet[Cell] with a ZobristHashSet[str].

    A chess board keeping its fingerprint in sync with its cells:

        class ChessBoard:
            def __init__(self):
                self.board = [[None] * 8 for _ in range(8)]
                self.zobrist: ZobristHashSet[Tuple[int, int, Piece]] = ZobristSet.empty()

            def set_piece(self, x, y, piece):
                old = self.board[x][y]
                if old is not None:
                    self.zobrist.remove((x, y, old))
                if piece is not None:
                    self.zobrist.add((x, y, piece))
                self.board[x][y] = piece

    Instances have value semantics: copy() gives an independent
    fingerprint. They are mutable, so they are not hashable; use
    int(s) as a cache key.
    """

    __slots__ = ('_hash', '_config')

    def __init__(self, value: int = 0, config: Optional[HashConfig] = None):
        value = operator.index(value)
        if not 0 <= value <= MASK64:
            raise ValueError(f"Fingerprint must fit in 64 bits, got {value}")
        self._hash = value
        self._config = config or DEFAULT_HASH_CONFIG

    @classmethod
    def empty(cls, config: Optional[HashConfig] = None) -> 'ZobristHashSet[E]':
        """Fingerprint of the empty set (value 0)."""
        return cls(0, config)

    @classmethod
    def from_raw(cls, raw: int, config: Optional[HashConfig] = None) -> 'ZobristHashSet[E]':
        """
        Rebuild a fingerprint from its raw 64-bit value.

        Extracting a value and rebuilding from it reproduces the same
        future behavior, provided the same config is used. `raw` must be
        an integer (TypeError otherwise) in [0, 2**64) (ValueError).
        """
        return cls(raw, config)

    @property
    def value(self) -> int:
        return self._hash

    @property
    def config(self) -> HashConfig:
        return self._config

    def into(self) -> int:
        """The raw 64-bit fingerprint."""
        return self._hash

    def __int__(self) -> int:
        return self._hash

    def __index__(self) -> int:
        return self._hash

    def add(self, key: E):
        self._hash ^= self._config.hash(key)

    def remove(self, key: E):
        self._hash ^= self._config.hash(key)

    def copy(self) -> 'ZobristHashSet[E]':
        clone = object.__new__(type(self))
        clone._hash = self._hash
        clone._config = self._config
        return clone

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    def __eq__(self, other) -> bool:
        if not isinstance(other, ZobristHashSet):
            return NotImplemented
        return self._hash == other._hash and self._config == other._config

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(0x{self._hash:016x})"


class CheckedZobristHashSet(ZobristHashSet[E]):
    """
    ZobristHashSet that validates every add/remove.

    Each call is checked against a BoundedMembershipChecker before the
    fingerprint is touched:

        add(k)     k already present  → DuplicateElementError
        remove(k)  k not present      → MissingElementError
        add(k)     checker full       → CapacityExceededError

    All three derive from AssertionError: they report bugs in the caller.

    Instances rebuilt with from_raw() have no checker (the element set
    behind a raw value is unknowable) and accept every call.
    """

    __slots__ = ('checker',)

    def __init__(self, value: int = 0, config: Optional[HashConfig] = None,
                 checker: Optional[BoundedMembershipChecker[E]] = None):
        super().__init__(value, config)
        if checker is not None and checker.config != self._config:
            raise ValueError("Checker and fingerprint must share a HashConfig")
        self.checker = checker

    @classmethod
    def empty(cls, config: Optional[HashConfig] = None,
              checker_capacity: int = DEFAULT_CAPACITY) -> 'CheckedZobristHashSet[E]':
        cfg = config or DEFAULT_HASH_CONFIG
        checker = BoundedMembershipChecker.empty(capacity=checker_capacity, config=cfg)
        return cls(0, cfg, checker)

    @classmethod
    def from_raw(cls, raw: int, config: Optional[HashConfig] = None) -> 'CheckedZobristHashSet[E]':
        rebuilt = cls(raw, config)
        logger.debug("Rebuilt fingerprint 0x%016x without a membership checker", rebuilt.value)
        return rebuilt

    def add(self, key: E):
        if self.checker is not None and not self.checker.insert(key):
            raise DuplicateElementError(f"Element already present: {key!r}", key)
        super().add(key)

    def remove(self, key: E):
        if self.checker is not None and not self.checker.remove(key):
            raise MissingElementError(f"Element not present: {key!r}", key)
        super().remove(key)

    def copy(self) -> 'CheckedZobristHashSet[E]':
        clone = super().copy()
        clone.checker = self.checker.copy() if self.checker is not None else None
        return clone


# Selected once per process; production builds never see the checked path
if CHECK_SET_BEHAVIOR:
    ZobristSet = CheckedZobristHashSet
else:
    ZobristSet = ZobristHashSet

logger.debug("ZobristSet resolves to %s", ZobristSet.__name__)


def check_set_behavior_enabled() -> bool:
    """Whether ZobristSet validates add/remove calls in this process."""
    return ZobristSet is CheckedZobristHashSet


__all__ = [
    'ZobristHashSet',
    'CheckedZobristHashSet',
    'ZobristSet',
    'check_set_behavior_enabled',
]
