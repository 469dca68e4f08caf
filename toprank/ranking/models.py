"""Data models for the ranking container."""

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class SameValueBehavior(str, Enum):
    """Placement of a new element among elements that rank equal to it.

    - ADD_BEFORE_EQUAL: before the first equal element (newest first)
    - ADD_AFTER_EQUAL: after the last equal element (oldest first)
    """

    ADD_BEFORE_EQUAL = "ADD_BEFORE_EQUAL"
    ADD_AFTER_EQUAL = "ADD_AFTER_EQUAL"


class RankingConfig(BaseModel):
    """Construction parameters for a Ranking.

    Attributes:
        capacity: Maximum number of retained elements.
        behavior: Tie-break placement for equal-ranked elements.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    capacity: Annotated[int, Field(ge=0, description="Maximum retained elements")]
    behavior: SameValueBehavior = SameValueBehavior.ADD_AFTER_EQUAL
