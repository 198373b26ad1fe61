"""Scorer error taxonomy.

An empty candidate pool or a pool with no overlapping skills is not an error:
the scorer returns an empty list.
"""


class ScoringError(Exception):
    """Base exception for scorer errors."""
    pass


class PreconditionViolation(ScoringError):
    """Raised when the scorer is called with invalid inputs or configuration.

    These are programmer errors (required skills not given as a set,
    negative weights), not runtime conditions to recover from.
    """
    pass
