"""
Assessment repository for ats-core.
"""

from typing import Optional

from ats_core.data.models.assessment import AssessmentResult
from ats_core.data.store import ASSESSMENTS
from ats_core.utils.constants import AssessmentType

from .base import BaseRepository


class AssessmentRepository(BaseRepository[AssessmentResult]):
    """Repository for assessment results."""

    @property
    def collection_name(self) -> str:
        return ASSESSMENTS

    @property
    def model_class(self) -> type[AssessmentResult]:
        return AssessmentResult

    def get_by_candidate(self, candidate_id: str) -> list[AssessmentResult]:
        """Results of a candidate, most recently completed first."""
        return self.find(
            lambda r: r.candidate_id == candidate_id,
            sort_key=lambda r: r.completed_at,
            reverse=True,
        )

    def get_by_application(self, application_id: str) -> list[AssessmentResult]:
        """Results attached to an application, most recently completed first."""
        return self.find(
            lambda r: r.application_id == application_id,
            sort_key=lambda r: r.completed_at,
            reverse=True,
        )

    def get_latest_by_type(
        self, candidate_id: str, assessment_type: AssessmentType
    ) -> Optional[AssessmentResult]:
        """Most recent result of one type for a candidate."""
        for result in self.get_by_candidate(candidate_id):
            if result.type == assessment_type:
                return result
        return None

    def average_score_percent(self, candidate_id: str) -> Optional[float]:
        """Mean score percent over a candidate's results, or None when there are none."""
        results = self.get_by_candidate(candidate_id)
        if not results:
            return None
        return sum(r.score_percent for r in results) / len(results)
