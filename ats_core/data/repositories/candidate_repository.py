"""
Candidate repository for ats-core.

Provides data access operations for candidates, including search and
filtering capabilities.
"""

from typing import Optional

from ats_core.data.models.candidate import Candidate
from ats_core.data.store import CANDIDATES
from ats_core.utils.constants import CandidateStatus
from ats_core.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)


class CandidateRepository(BaseRepository[Candidate]):
    """Repository for candidate operations."""

    @property
    def collection_name(self) -> str:
        return CANDIDATES

    @property
    def model_class(self) -> type[Candidate]:
        return Candidate

    # -------------------------------------------------------------------------
    # Update Operations
    # -------------------------------------------------------------------------

    def update_status(self, id_value: str, status: CandidateStatus) -> Optional[Candidate]:
        """Replace the candidate with a copy carrying the new status."""
        return self.update(id_value, lambda c: c.model_copy(update={"status": status}))

    # -------------------------------------------------------------------------
    # Query Operations
    # -------------------------------------------------------------------------

    def get_by_status(self, status: CandidateStatus) -> list[Candidate]:
        """Get candidates by status, ordered by id."""
        return self.find(lambda c: c.status == status)

    # -------------------------------------------------------------------------
    # Search Operations
    # -------------------------------------------------------------------------

    def search(
        self,
        query_text: Optional[str] = None,
        skills: Optional[list[str]] = None,
        min_experience_years: Optional[int] = None,
        location: Optional[str] = None,
    ) -> list[Candidate]:
        """
        Search candidates with multiple filters.

        Every filter that is given must match; omitted or blank filters are
        ignored.

        Args:
            query_text: Case-insensitive substring of name, current role or summary
            skills: Skill names; a candidate matches if it has any of them
            min_experience_years: Minimum years of experience
            location: Case-insensitive substring of the location

        Returns:
            Matching candidates ordered by id
        """
        text = (query_text or "").strip().lower()
        wanted_skills = {s.strip().lower() for s in skills or [] if s and s.strip()}
        place = (location or "").strip().lower()

        def matches(c: Candidate) -> bool:
            if text and not (
                text in c.name.lower()
                or text in c.current_role.lower()
                or text in c.summary.lower()
            ):
                return False
            if wanted_skills and not (wanted_skills & c.skill_set):
                return False
            if min_experience_years is not None and c.years_of_experience < min_experience_years:
                return False
            if place and place not in c.location.lower():
                return False
            return True

        return self.find(matches)

    # -------------------------------------------------------------------------
    # Aggregation Operations
    # -------------------------------------------------------------------------

    def get_status_counts(self) -> dict[str, int]:
        """Get count of candidates by status."""
        counts: dict[str, int] = {}
        for candidate in self.get_all():
            counts[candidate.status.value] = counts.get(candidate.status.value, 0) + 1
        return counts

    def all_skills(self) -> list[str]:
        """Distinct skill names across all candidates, sorted."""
        return sorted({skill for c in self.get_all() for skill in c.skills})
