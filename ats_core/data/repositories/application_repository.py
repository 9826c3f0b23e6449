"""
Application repository for ats-core.

Read access to applications. Status, history and round changes go through
the WorkflowEngine, which uses ``update`` for its copy-on-write swaps.
"""

from ats_core.data.models.application import Application
from ats_core.data.store import APPLICATIONS
from ats_core.utils.constants import ApplicationStatus

from .base import BaseRepository


class ApplicationRepository(BaseRepository[Application]):
    """Repository for application operations."""

    @property
    def collection_name(self) -> str:
        return APPLICATIONS

    @property
    def model_class(self) -> type[Application]:
        return Application

    def get_by_candidate(self, candidate_id: str) -> list[Application]:
        """Applications of a candidate, most recently applied first."""
        return self.find(
            lambda a: a.candidate_id == candidate_id,
            sort_key=lambda a: a.applied_at,
            reverse=True,
        )

    def get_by_job(self, job_id: str) -> list[Application]:
        """Applications to a job, most recently applied first."""
        return self.find(
            lambda a: a.job_id == job_id,
            sort_key=lambda a: a.applied_at,
            reverse=True,
        )

    def get_by_status(self, status: ApplicationStatus) -> list[Application]:
        return self.find(lambda a: a.status == status)

    def get_status_counts(self) -> dict[ApplicationStatus, int]:
        """Number of applications per current status; absent statuses are omitted."""
        counts: dict[ApplicationStatus, int] = {}
        for application in self.get_all():
            counts[application.status] = counts.get(application.status, 0) + 1
        return counts
