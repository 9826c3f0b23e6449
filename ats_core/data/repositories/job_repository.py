"""
Job repository for ats-core.

Provides data access operations for job requisitions.
"""

from typing import Optional

from ats_core.data.models.job import Job
from ats_core.data.store import JOBS
from ats_core.utils.constants import JobStatus
from ats_core.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)


class JobRepository(BaseRepository[Job]):
    """Repository for job requisition operations."""

    @property
    def collection_name(self) -> str:
        return JOBS

    @property
    def model_class(self) -> type[Job]:
        return Job

    # -------------------------------------------------------------------------
    # Query Operations
    # -------------------------------------------------------------------------

    def get_open_jobs(self, department: Optional[str] = None) -> list[Job]:
        """Get OPEN jobs, optionally limited to one department (case-insensitive)."""
        dept = (department or "").strip().lower()
        return self.find(
            lambda j: j.status == JobStatus.OPEN and (not dept or j.department.lower() == dept)
        )

    def get_by_department(self, department: str) -> list[Job]:
        """Get jobs of a department regardless of status (case-insensitive)."""
        dept = department.strip().lower()
        return self.find(lambda j: j.department.lower() == dept)

    def search(
        self,
        skills: Optional[list[str]] = None,
        location: Optional[str] = None,
        department: Optional[str] = None,
    ) -> list[Job]:
        """
        Search OPEN jobs.

        Args:
            skills: A job matches if any of its required or preferred skills
                is in this list (case-insensitive)
            location: Case-insensitive substring of the job location
            department: Exact department name (case-insensitive)

        Returns:
            Matching open jobs ordered by id
        """
        wanted = {s.strip().lower() for s in skills or [] if s and s.strip()}
        place = (location or "").strip().lower()

        def matches(j: Job) -> bool:
            if wanted and not any(s.lower() in wanted for s in j.all_skills):
                return False
            if place and place not in j.location.lower():
                return False
            return True

        return [j for j in self.get_open_jobs(department) if matches(j)]
