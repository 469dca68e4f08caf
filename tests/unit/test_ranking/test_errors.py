"""Unit tests for ranking exceptions."""

from toprank.ranking.errors import (
    DisposalError,
    EmptyRankingError,
    RankingClosedError,
    RankingError,
)


class TestErrorHierarchy:
    """Tests for the exception hierarchy."""

    def test_all_derive_from_ranking_error(self) -> None:
        """Callers can catch RankingError for everything."""
        assert issubclass(EmptyRankingError, RankingError)
        assert issubclass(RankingClosedError, RankingError)
        assert issubclass(DisposalError, RankingError)

    def test_empty_ranking_error_message(self) -> None:
        """Message names the operation."""
        error = EmptyRankingError("bottom")
        assert error.operation == "bottom"
        assert str(error) == "bottom() called on an empty ranking"

    def test_closed_error_default_message(self) -> None:
        """Closed error has a default message."""
        assert str(RankingClosedError()) == "Ranking is closed"

    def test_disposal_error_keeps_failures(self) -> None:
        """Failures are exposed as (element, exception) pairs."""
        cause = ValueError("boom")
        error = DisposalError([(7, cause)])

        assert error.failures == [(7, cause)]
        assert "1 element(s)" in str(error)
