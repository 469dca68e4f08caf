"""Metrics collection for the ranking module."""

from dataclasses import dataclass
from typing import ClassVar


@dataclass
class RankingMetrics:
    """Counters for ranking operations.

    Attributes:
        inserted: Number of insert calls.
        accepted: Inserts whose element survived.
        rejected: Inserts whose element was evicted immediately.
        evicted: Elements evicted to honor capacity.
        removed: Elements removed explicitly.
        disposed: Disposal policy invocations that succeeded.
        disposal_failures: Disposal policy invocations that raised.
    """

    inserted: int = 0
    accepted: int = 0
    rejected: int = 0
    evicted: int = 0
    removed: int = 0
    disposed: int = 0
    disposal_failures: int = 0

    _instance: ClassVar["RankingMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "RankingMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_insert(self, survived: bool) -> None:
        """Record an insert outcome.

        Args:
            survived: Whether the inserted element is still retained.
        """
        self.inserted += 1
        if survived:
            self.accepted += 1
        else:
            self.rejected += 1

    def record_eviction(self) -> None:
        """Record an element evicted for capacity."""
        self.evicted += 1

    def record_removal(self, count: int = 1) -> None:
        """Record explicitly removed elements.

        Args:
            count: Number of elements removed.
        """
        self.removed += count

    def record_disposal(self, ok: bool = True) -> None:
        """Record a disposal policy invocation.

        Args:
            ok: Whether the policy returned without raising.
        """
        if ok:
            self.disposed += 1
        else:
            self.disposal_failures += 1

    def to_dict(self) -> dict[str, int]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "inserted": self.inserted,
            "accepted": self.accepted,
            "rejected": self.rejected,
            "evicted": self.evicted,
            "removed": self.removed,
            "disposed": self.disposed,
            "disposal_failures": self.disposal_failures,
        }
