"""Unit tests for disposal policies and disposal failures."""

import pytest

from toprank.ranking.disposal import (
    CallbackDisposal,
    CloseDisposal,
    DisposalPolicy,
    null_disposal,
)
from toprank.ranking.errors import DisposalError
from toprank.ranking.metrics import RankingMetrics
from toprank.ranking.ranking import Ranking


class _Handle:
    """Owned resource with a close() method."""

    def __init__(self, score: int) -> None:
        self.score = score
        self.close_calls = 0

    def close(self) -> None:
        self.close_calls += 1


class _Exploding:
    """Disposal policy that fails for selected values."""

    def __init__(self, bad: set[int]) -> None:
        self._bad = bad
        self.seen: list[int] = []

    def __call__(self, element: int) -> None:
        self.seen.append(element)
        if element in self._bad:
            msg = f"cannot release {element}"
            raise OSError(msg)


class TestPolicies:
    """Tests for the built-in policies."""

    def test_null_disposal_does_nothing(self) -> None:
        """The default policy accepts anything."""
        assert null_disposal(object()) is None

    def test_builtins_satisfy_protocol(self) -> None:
        """All policies are DisposalPolicy instances."""
        assert isinstance(CloseDisposal(), DisposalPolicy)
        assert isinstance(CallbackDisposal(print), DisposalPolicy)

    def test_close_disposal_closes(self) -> None:
        """CloseDisposal calls close() exactly once."""
        handle = _Handle(1)
        CloseDisposal()(handle)
        assert handle.close_calls == 1

    def test_close_disposal_requires_close(self) -> None:
        """Elements without close() are a TypeError by default."""
        with pytest.raises(TypeError, match="no close"):
            CloseDisposal()(42)

    def test_close_disposal_ignore_missing(self) -> None:
        """ignore_missing skips elements without close()."""
        CloseDisposal(ignore_missing=True)(42)

    def test_callback_disposal(self) -> None:
        """CallbackDisposal forwards the element."""
        index = {"a": 1, "b": 2}
        policy = CallbackDisposal(index.pop)

        policy("a")

        assert index == {"b": 2}
        assert "pop" in repr(policy)


class TestOwnedHandles:
    """Tests for rankings that own closable handles."""

    def test_evicted_handle_is_closed(self) -> None:
        """Eviction closes the evicted handle only."""
        ranking: Ranking[_Handle] = Ranking(
            1, key=lambda h: h.score, disposal=CloseDisposal(), metrics=RankingMetrics()
        )
        kept, evicted = _Handle(1), _Handle(2)

        ranking.insert(kept)
        assert ranking.insert(evicted) is False

        assert evicted.close_calls == 1
        assert kept.close_calls == 0

    def test_every_handle_closed_once(self) -> None:
        """Eviction, removal and close together close every handle once."""
        handles = [_Handle(score) for score in [5, 1, 4, 2, 3]]
        with Ranking(
            3, key=lambda h: h.score, disposal=CloseDisposal(), metrics=RankingMetrics()
        ) as ranking:
            for handle in handles:
                ranking.insert(handle)
            ranking.remove_first_identical(handles[1])

        assert [h.close_calls for h in handles] == [1, 1, 1, 1, 1]

    def test_repeated_handle_closed_once_on_identity_removal(self) -> None:
        """Removing a handle held twice closes it once."""
        metrics = RankingMetrics()
        ranking: Ranking[_Handle] = Ranking(
            5, key=lambda h: h.score, disposal=CloseDisposal(), metrics=metrics
        )
        handle = _Handle(1)
        ranking.insert(handle)
        ranking.insert(handle)

        assert ranking.remove_all_identical(handle) == 2

        assert ranking.empty()
        assert handle.close_calls == 1
        assert metrics.removed == 2
        assert metrics.disposed == 1

    def test_repeated_handle_closed_once_on_close(self) -> None:
        """Closing a ranking that holds a handle twice closes it once."""
        handle = _Handle(1)
        with Ranking(
            5, key=lambda h: h.score, disposal=CloseDisposal(), metrics=RankingMetrics()
        ) as ranking:
            ranking.insert(handle)
            ranking.insert(handle)

        assert handle.close_calls == 1

    def test_no_handle_closed_while_reachable(self) -> None:
        """Retained handles stay open."""
        handles = [_Handle(score) for score in [3, 1, 2]]
        ranking: Ranking[_Handle] = Ranking(
            2, key=lambda h: h.score, disposal=CloseDisposal(), metrics=RankingMetrics()
        )
        for handle in handles:
            ranking.insert(handle)

        assert all(h.close_calls == 0 for h in ranking)


class TestDisposalFailures:
    """Tests for policies that raise."""

    def test_eviction_failure_leaves_ranking_consistent(self) -> None:
        """The evicted element is gone even if disposal fails."""
        policy = _Exploding({9})
        ranking: Ranking[int] = Ranking(2, disposal=policy, metrics=RankingMetrics())
        ranking.insert(1)
        ranking.insert(2)

        with pytest.raises(DisposalError) as exc_info:
            ranking.insert(9)

        assert ranking.to_list() == [1, 2]
        assert exc_info.value.failures[0][0] == 9
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_clear_disposes_all_despite_failures(self) -> None:
        """clear() keeps going and reports every failure."""
        policy = _Exploding({1, 3})
        ranking: Ranking[int] = Ranking(5, disposal=policy, metrics=RankingMetrics())
        for value in [1, 2, 3, 4]:
            ranking.insert(value)

        with pytest.raises(DisposalError) as exc_info:
            ranking.clear()

        assert ranking.empty()
        assert policy.seen == [1, 2, 3, 4]
        assert [element for element, _ in exc_info.value.failures] == [1, 3]

    def test_failures_are_counted(self) -> None:
        """Metrics separate successful and failed disposals."""
        metrics = RankingMetrics()
        ranking: Ranking[int] = Ranking(
            5, disposal=_Exploding({2}), metrics=metrics
        )
        for value in [1, 2, 3]:
            ranking.insert(value)

        with pytest.raises(DisposalError):
            ranking.remove_all(2)

        assert metrics.disposal_failures == 1
        assert metrics.removed == 1
        assert ranking.to_list() == [1, 3]
