"""
Exceptions raised by the zobrist package.

Verification failures derive from AssertionError: they are contract
checks on the caller's add/remove discipline, not runtime conditions
to recover from.
"""


class ZobristError(Exception):
    """Base class for all zobrist errors."""


class SetBehaviorError(ZobristError, AssertionError):
    """An add/remove call that contradicts the tracked set membership."""

    def __init__(self, message: str, key=None):
        super().__init__(message)
        self.key = key


class DuplicateElementError(SetBehaviorError):
    """Added a key that is already present."""


class MissingElementError(SetBehaviorError):
    """Removed a key that is not present."""


class CapacityExceededError(ZobristError, AssertionError):
    """A BoundedMembershipChecker ran out of slots."""

    def __init__(self, capacity: int):
        super().__init__(
            f"Cannot handle more than {capacity} elements when checking. "
            f"Raise the checker capacity, or run with verification disabled "
            f"(python -O or unset ZOBRIST_CHECK_SET_BEHAVIOR)"
        )
        self.capacity = capacity
