"""Exceptions raised by the ranking container."""

from typing import Any


class RankingError(Exception):
    """Base exception for all ranking errors."""


class EmptyRankingError(RankingError, IndexError):
    """Raised when an element is requested from an empty ranking."""

    def __init__(self, operation: str) -> None:
        """Initialize the error.

        Args:
            operation: Name of the query that needed an element.
        """
        self.operation = operation
        super().__init__(f"{operation}() called on an empty ranking")


class RankingClosedError(RankingError):
    """Raised when a closed ranking is asked to accept elements."""

    def __init__(self, message: str = "Ranking is closed") -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message.
        """
        super().__init__(message)


class DisposalError(RankingError):
    """Raised when the disposal policy fails for departing elements.

    The failed elements have already left the ranking when this is raised,
    so the container itself is consistent.
    """

    def __init__(self, failures: list[tuple[Any, Exception]]) -> None:
        """Initialize the error with every failed disposal.

        Args:
            failures: Pairs of (element, exception raised by the policy).
        """
        self.failures = failures
        count = len(failures)
        first = failures[0][1] if failures else None
        super().__init__(f"Disposal failed for {count} element(s): {first!r}")
