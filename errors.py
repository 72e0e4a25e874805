"""Exceptions raised by the tree structures in this package."""

from __future__ import annotations


class BTreeError(Exception):
    """Base exception for tree errors."""


class KeyNotFoundError(BTreeError, KeyError):
    """Raised when a node or tree is asked for a key it does not hold."""

    def __str__(self) -> str:
        # KeyError repr()s its argument; keep the plain message instead.
        return str(self.args[0]) if self.args else "key not found"


class InvariantViolationError(BTreeError):
    """Raised when a structural invariant is broken.

    This always indicates a bug in a rebalancing policy. It is never caught
    inside the library: continuing would risk silently corrupting the tree.
    """


class InvalidDegreeError(BTreeError, ValueError):
    """Raised when a tree is constructed with an unusable branching degree."""


def check_invariant(condition: bool, message: str) -> None:
    """Raise InvariantViolationError with `message` unless `condition` holds."""
    if not condition:
        raise InvariantViolationError(message)
