from __future__ import annotations


class InvalidArgument(ValueError):
    """Raised when a caller passes no sequence, or one that cannot be sorted in place."""


class ContractViolation(AssertionError):
    """A runtime-checked precondition or postcondition did not hold."""
