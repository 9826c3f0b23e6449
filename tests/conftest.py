"""
Shared test fixtures for the ats-core test suite.

Sets environment variables before any ats_core imports so settings load in
testing mode, then provides a fixed clock, services with and without the demo
data, and factory fixtures for entities.
"""

import os

# === Set environment BEFORE any ats_core imports ===
os.environ.setdefault("APP_ENVIRONMENT", "testing")
os.environ.setdefault("STORE_SEED_DEMO_DATA", "false")

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import pytest

from ats_core.services import ATSService, build_service
from ats_core.data.models import (
    Application,
    AssessmentResult,
    Candidate,
    Job,
    StatusHistoryEntry,
)
from ats_core.data.store import EntityStore
from ats_core.utils.config import AppSettings, WorkflowSettings
from ats_core.utils.constants import ApplicationStatus, AssessmentType, JobStatus
from ats_core.utils.logger import log

FIXED_NOW = datetime(2024, 6, 3, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Clock that stays put until a test moves it."""

    def __init__(self, now: datetime = FIXED_NOW) -> None:
        self.current = now

    def __call__(self) -> datetime:
        return self.current

    def advance(self, days: int = 0, hours: int = 0) -> None:
        self.current += timedelta(days=days, hours=hours)


def days_ago(days: float) -> datetime:
    return FIXED_NOW - timedelta(days=days)


# ---------------------------------------------------------------------------
# Clock, store and services
# ---------------------------------------------------------------------------


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def ago():
    """Callable turning a number of days into a timestamp before FIXED_NOW."""
    return days_ago


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return EntityStore()


@pytest.fixture
def service(clock) -> ATSService:
    """Service over an empty store, enforcing transitions."""
    return build_service(seed=False, clock=clock)


@pytest.fixture
def seeded_service(clock) -> ATSService:
    """Service loaded with the demo data, dated relative to FIXED_NOW."""
    return build_service(seed=True, clock=clock)


@pytest.fixture
def permissive_service(clock) -> ATSService:
    """Seeded service that applies any transition."""
    settings = AppSettings(workflow=WorkflowSettings(enforce_transitions=False))
    return build_service(settings=settings, seed=True, clock=clock)


@pytest.fixture
def audit_records():
    """Collect audit entries written while the test runs."""
    records: list[dict[str, Any]] = []
    handler_id = log.add(
        lambda message: records.append(message.record),
        filter=lambda record: "audit_type" in record["extra"],
        level="INFO",
    )
    yield records
    log.remove(handler_id)


# ---------------------------------------------------------------------------
# Entity factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_candidate():
    """Factory that returns a callable to build Candidate entities."""

    def _factory(
        id: str = "C100",
        name: str = "Jane Smith",
        skills: Optional[list[str]] = None,
        years_of_experience: int = 5,
        **kwargs,
    ) -> Candidate:
        if skills is None:
            skills = ["Python", "Django", "PostgreSQL"]
        kwargs.setdefault("email", "jane.smith@example.com")
        kwargs.setdefault("location", "San Francisco, CA")
        kwargs.setdefault("current_role", "Software Engineer")
        kwargs.setdefault("created_at", days_ago(30))
        return Candidate(
            id=id,
            name=name,
            skills=skills,
            years_of_experience=years_of_experience,
            **kwargs,
        )

    return _factory


@pytest.fixture
def make_job():
    """Factory that returns a callable to build Job entities."""

    def _factory(
        id: str = "J100",
        title: str = "Backend Engineer",
        required_skills: Optional[list[str]] = None,
        preferred_skills: Optional[list[str]] = None,
        status: JobStatus = JobStatus.OPEN,
        **kwargs,
    ) -> Job:
        if required_skills is None:
            required_skills = ["Python", "Django"]
        if preferred_skills is None:
            preferred_skills = ["Docker"]
        kwargs.setdefault("department", "Engineering")
        kwargs.setdefault("location", "Remote")
        kwargs.setdefault("opened_at", days_ago(60))
        return Job(
            id=id,
            title=title,
            required_skills=required_skills,
            preferred_skills=preferred_skills,
            status=status,
            **kwargs,
        )

    return _factory


@pytest.fixture
def make_application():
    """
    Factory that returns a callable to build Application entities.

    ``steps`` is a sequence of (status, days_ago) pairs, oldest first; the
    last one becomes the current status.
    """

    def _factory(
        id: str = "A100",
        candidate_id: str = "C100",
        job_id: str = "J100",
        steps: Optional[list[tuple[ApplicationStatus, float]]] = None,
        current_interview_round: int = 0,
        **kwargs,
    ) -> Application:
        if steps is None:
            steps = [(ApplicationStatus.RECEIVED, 1)]
        history = [
            StatusHistoryEntry(status=status, changed_at=days_ago(days), changed_by="recruiter-1")
            for status, days in steps
        ]
        kwargs.setdefault("applied_at", days_ago(steps[0][1]))
        return Application(
            id=id,
            candidate_id=candidate_id,
            job_id=job_id,
            status=steps[-1][0],
            status_history=history,
            current_interview_round=current_interview_round,
            **kwargs,
        )

    return _factory


@pytest.fixture
def make_assessment():
    """Factory that returns a callable to build AssessmentResult entities."""

    def _factory(
        id: str = "AS100",
        candidate_id: str = "C100",
        application_id: str = "A100",
        type: AssessmentType = AssessmentType.CODING_CHALLENGE,
        score: float = 80,
        max_score: float = 100,
        percentile: int = 60,
        completed_days_ago: float = 3,
        **kwargs,
    ) -> AssessmentResult:
        return AssessmentResult(
            id=id,
            candidate_id=candidate_id,
            application_id=application_id,
            type=type,
            score=score,
            max_score=max_score,
            percentile=percentile,
            completed_at=days_ago(completed_days_ago),
            **kwargs,
        )

    return _factory
