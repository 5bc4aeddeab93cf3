"""
BoundedMembershipChecker - fixed-capacity shadow set for verification

The checker tracks which elements are currently present in a Zobrist
fingerprint so that misuse becomes observable:

    add(k) when k is present     → insert() returns False
    remove(k) when k is absent   → remove() returns False

Design:
- Backing store is ONE numpy uint64 array, allocated at construction
- Occupied slots form a contiguous prefix [0, len)
- Membership is a linear scan of that prefix (vectorised by numpy)
- remove() swaps the hit with the last occupied slot, so nothing shifts
- copy() duplicates the array: two checkers never share slots

Elements are stored as their 64-bit probe key (hash), not as values.
Two distinct elements with the same hash look like one element to the
checker. That approximation is accepted: the checker validates call
discipline, not exact equality.
"""

from __future__ import annotations
from typing import Generic, Iterable, Optional, TypeVar
import logging

import numpy as np

from .constants import CAPACITY_WARNING_RATIO, DEFAULT_CAPACITY
from .errors import CapacityExceededError
from .hashing import HashConfig, DEFAULT_HASH_CONFIG

logger = logging.getLogger(__name__)

E = TypeVar('E')

PROBE_DTYPE = np.uint64


class BoundedMembershipChecker(Generic[E]):
    """
    Copiable membership set of at most `capacity` elements.

    Treat it as a value: copy() (or copy.copy / copy.deepcopy) gives a
    fully independent checker, so validation state can be snapshotted
    and restored cheaply.
    """

    __slots__ = ('_slots', '_len', '_config', '_warned')

    def __init__(self, capacity: int = DEFAULT_CAPACITY,
                 config: Optional[HashConfig] = None):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._slots = np.zeros(capacity, dtype=PROBE_DTYPE)
        self._len = 0
        self._config = config or DEFAULT_HASH_CONFIG
        self._warned = False

    @classmethod
    def empty(cls, capacity: int = DEFAULT_CAPACITY,
              config: Optional[HashConfig] = None) -> 'BoundedMembershipChecker[E]':
        """Checker with every slot unoccupied."""
        return cls(capacity=capacity, config=config)

    @classmethod
    def from_iterable(cls, keys: Iterable[E], capacity: int = DEFAULT_CAPACITY,
                      config: Optional[HashConfig] = None) -> 'BoundedMembershipChecker[E]':
        """Checker holding every distinct element of `keys`."""
        checker = cls(capacity=capacity, config=config)
        for key in keys:
            checker.insert(key)
        return checker

    @property
    def capacity(self) -> int:
        return len(self._slots)

    @property
    def config(self) -> HashConfig:
        return self._config

    def probe_key(self, key: E) -> int:
        """The 64-bit value this checker stores for `key`."""
        return self._config.hash(key)

    def _find(self, probe: int) -> int:
        hits = np.flatnonzero(self._slots[:self._len] == PROBE_DTYPE(probe))
        return int(hits[0]) if hits.size else -1

    def insert(self, key: E) -> bool:
        """
        Add an element.

        Returns:
            True if the element was new, False if it was already present.

        Raises:
            CapacityExceededError: a new element does not fit.
        """
        probe = self.probe_key(key)
        if self._find(probe) >= 0:
            return False

        if self._len == self.capacity:
            raise CapacityExceededError(self.capacity)

        self._slots[self._len] = probe
        self._len += 1

        if not self._warned and self._len >= CAPACITY_WARNING_RATIO * self.capacity:
            self._warned = True
            logger.warning(
                "Membership checker at %d/%d slots", self._len, self.capacity
            )
        return True

    def remove(self, key: E) -> bool:
        """
        Remove an element.

        Returns:
            True if the element was present, False otherwise.
        """
        pos = self._find(self.probe_key(key))
        if pos < 0:
            return False

        last = self._len - 1
        self._slots[pos], self._slots[last] = self._slots[last], self._slots[pos]
        self._len = last
        return True

    def __contains__(self, key) -> bool:
        return self._find(self.probe_key(key)) >= 0

    def __len__(self) -> int:
        return self._len

    def copy(self) -> 'BoundedMembershipChecker[E]':
        clone = object.__new__(type(self))
        clone._slots = self._slots.copy()
        clone._len = self._len
        clone._config = self._config
        clone._warned = self._warned
        return clone

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    def __eq__(self, other) -> bool:
        # Same occupied probe keys, regardless of slot order
        if not isinstance(other, BoundedMembershipChecker):
            return NotImplemented
        if self._len != other._len or self._config != other._config:
            return False
        mine = np.sort(self._slots[:self._len])
        theirs = np.sort(other._slots[:other._len])
        return bool(np.array_equal(mine, theirs))

    __hash__ = None

    def __repr__(self) -> str:
        return f"BoundedMembershipChecker(len={self._len}, capacity={self.capacity})"


__all__ = [
    'BoundedMembershipChecker',
    'PROBE_DTYPE',
]
