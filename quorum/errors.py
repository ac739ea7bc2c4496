"""
Errors
Every failure the sharing layers can report.

All of them are local and synchronous: they go straight back to the caller
and nothing is retried. The builtin base classes let callers that only know
about ValueError / TypeError keep working.
"""


class QuorumError(Exception):
    """Base class for all quorum errors."""


class ConstructionError(QuorumError, TypeError):
    """An operation was asked of a representation that does not support it."""


class DuplicateEvaluationPoint(QuorumError, ValueError):
    """Two samples share an x-coordinate, so interpolation is singular."""

    def __init__(self, x):
        super().__init__(f"Duplicate evaluation point x={x}")
        self.x = x


class InsufficientShares(QuorumError, ValueError):
    """Fewer shares than the threshold were supplied."""

    def __init__(self, got: int, needed: int):
        super().__init__(f"Need at least {needed} shares, got {got}")
        self.got = got
        self.needed = needed


class VerificationFailure(QuorumError):
    """A share does not match the dealer's public commitments."""


class DomainPrecondition(QuorumError, ValueError):
    """A caller broke a documented precondition (bad width, bad threshold...)."""
