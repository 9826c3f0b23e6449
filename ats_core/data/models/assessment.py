"""
Assessment result models for ats-core.
"""

from datetime import datetime
from typing import Any

from pydantic import Field

from ats_core.utils.constants import PERCENTILE_LABELS, AssessmentType

from .base import EntityModel, utc_now


class AssessmentResult(EntityModel):
    """
    Outcome of one assessment taken by a candidate.

    ``percentile`` is supplied by the assessment provider and is not
    computed here.
    """

    id: str = Field(..., min_length=1)
    candidate_id: str
    application_id: str
    type: AssessmentType
    score: float
    max_score: float
    percentile: int = Field(default=0, ge=0, le=100)
    completed_at: datetime = Field(default_factory=utc_now)
    summary: str = ""
    breakdown: dict[str, Any] = Field(default_factory=dict)

    @property
    def score_percent(self) -> float:
        """Score as a percentage of the maximum, 0 when the maximum is not positive."""
        if self.max_score <= 0:
            return 0.0
        return self.score / self.max_score * 100

    @property
    def percentile_label(self) -> str:
        return interpret_percentile(self.percentile)


def interpret_percentile(percentile: int) -> str:
    """Plain-language reading of a percentile rank."""
    for floor, label in PERCENTILE_LABELS:
        if percentile >= floor:
            return label
    return PERCENTILE_LABELS[-1][1]
