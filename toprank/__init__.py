"""toprank: keep the best N elements of a stream without re-sorting."""

from toprank.ranking import (
    CallbackDisposal,
    CloseDisposal,
    DisposalError,
    EmptyRankingError,
    Ranking,
    RankingClosedError,
    RankingConfig,
    RankingError,
    SameValueBehavior,
    null_disposal,
)


__all__ = [
    "CallbackDisposal",
    "CloseDisposal",
    "DisposalError",
    "EmptyRankingError",
    "Ranking",
    "RankingClosedError",
    "RankingConfig",
    "RankingError",
    "SameValueBehavior",
    "null_disposal",
]
