"""Bounded top-N ranking container.

This module provides a ranking that retains only its best elements under a
caller-supplied ordering, evicting the bottom element on overflow and
handing every departing element to a disposal policy.
"""

from toprank.ranking.disposal import (
    CallbackDisposal,
    CloseDisposal,
    DisposalPolicy,
    null_disposal,
)
from toprank.ranking.errors import (
    DisposalError,
    EmptyRankingError,
    RankingClosedError,
    RankingError,
)
from toprank.ranking.metrics import RankingMetrics
from toprank.ranking.models import RankingConfig, SameValueBehavior
from toprank.ranking.ranking import Ranking


__all__ = [
    "CallbackDisposal",
    "CloseDisposal",
    "DisposalError",
    "DisposalPolicy",
    "EmptyRankingError",
    "Ranking",
    "RankingClosedError",
    "RankingConfig",
    "RankingError",
    "RankingMetrics",
    "SameValueBehavior",
    "null_disposal",
]
