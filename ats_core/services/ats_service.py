"""
Service facade for ats-core.

ATSService is the single entry point the CLI (or any other transport) calls.
It owns one EntityStore and wires the query layer, the workflow engine and
the matching engine around it. ``build_service`` constructs a ready-to-use
instance from settings.
"""

from typing import Any, Optional

from pydantic import ValidationError

from ats_core.core.matching import MatchingEngine, MatchResult
from ats_core.core.workflow import WorkflowEngine
from ats_core.core.workflow.workflow_engine import Clock
from ats_core.data.models import (
    Application,
    AssessmentResult,
    Candidate,
    CandidateCreate,
    Job,
    utc_now,
)
from ats_core.data.seed import load_demo_data
from ats_core.data.store import EntityStore
from ats_core.utils.config import AppSettings, get_settings
from ats_core.utils.constants import (
    ApplicationStatus,
    AssessmentType,
    AuditAction,
    CandidateStatus,
    parse_enum,
)
from ats_core.utils.exceptions import InvalidArgumentError, NotFoundError
from ats_core.utils.logger import LoggerMixin, audit_log

from ats_core.core.query import PipelineStats, QueryService


class ATSService(LoggerMixin):
    """
    Operations over candidates, jobs, applications and assessments.

    Lookups return None (or an empty list) for absent ids. The ``require_*``
    helpers raise NotFoundError instead, for callers that want to stop on a
    missing entity.
    """

    def __init__(
        self,
        store: EntityStore,
        settings: Optional[AppSettings] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.store = store
        self.workflow = WorkflowEngine(store, self.settings.workflow, clock=clock)
        self.matching = MatchingEngine(self.settings.matching)
        self.queries = QueryService(store, self.workflow)

    # -------------------------------------------------------------------------
    # Candidates
    # -------------------------------------------------------------------------

    def get_candidate(self, candidate_id: str) -> Optional[Candidate]:
        return self.queries.get_candidate(candidate_id)

    def list_candidates(self) -> list[Candidate]:
        return self.queries.list_candidates()

    def find_page(self, after_id: Optional[str] = None, page_size: Optional[int] = None) -> list[Candidate]:
        """Page of candidates ordered by id, starting after the ``after_id`` cursor."""
        return self.queries.candidates_page(after_id, page_size)

    def find_candidates_by_status(self, status: CandidateStatus | str) -> list[Candidate]:
        return self.queries.candidates_by_status(status)

    def search_candidates(
        self,
        query: Optional[str] = None,
        skills: Optional[list[str]] = None,
        min_experience: Optional[int] = None,
        location: Optional[str] = None,
    ) -> list[Candidate]:
        return self.queries.search_candidates(query, skills, min_experience, location)

    def all_skills(self) -> list[str]:
        return self.queries.all_skills()

    def count_candidates(self) -> int:
        return self.queries.count_candidates()

    def add_candidate(self, record: CandidateCreate | Candidate | dict[str, Any]) -> Candidate:
        """
        Add a new candidate.

        Args:
            record: A Candidate, a CandidateCreate or a plain mapping of fields

        Raises:
            InvalidArgumentError: if the record is invalid or the id is taken
        """
        try:
            if isinstance(record, Candidate):
                candidate = record
            else:
                data = record if isinstance(record, CandidateCreate) else CandidateCreate.model_validate(record)
                if data.created_at is None:
                    data = data.model_copy(update={"created_at": self.workflow.now()})
                candidate = data.to_candidate()
        except ValidationError as e:
            raise InvalidArgumentError(f"Invalid candidate record: {e}", argument="record") from e

        created = self.queries.candidates.create(candidate)
        self.logger.info(f"Added candidate {created.id}")
        audit_log(
            AuditAction.CANDIDATE_ADDED.value,
            {"candidate_id": created.id, "status": created.status.value},
            audit_type="CANDIDATE",
        )
        return created

    def update_candidate_status(self, candidate_id: str, status: CandidateStatus | str) -> Optional[Candidate]:
        """Replace the candidate's status. Returns None for an unknown id."""
        new_status = parse_enum(CandidateStatus, status, "status")
        updated = self.queries.candidates.update_status(candidate_id, new_status)
        if updated is None:
            return None
        audit_log(
            AuditAction.CANDIDATE_STATUS_CHANGED.value,
            {"candidate_id": candidate_id, "status": new_status.value},
            audit_type="CANDIDATE",
        )
        return updated

    # -------------------------------------------------------------------------
    # Jobs and Matching
    # -------------------------------------------------------------------------

    def get_job(self, job_id: str) -> Optional[Job]:
        return self.queries.get_job(job_id)

    def list_jobs(self) -> list[Job]:
        return self.queries.list_jobs()

    def list_open_jobs(self, department: Optional[str] = None) -> list[Job]:
        return self.queries.list_open_jobs(department)

    def find_jobs_by_department(self, department: str) -> list[Job]:
        return self.queries.jobs_by_department(department)

    def search_jobs(
        self,
        skills: Optional[list[str]] = None,
        location: Optional[str] = None,
        department: Optional[str] = None,
    ) -> list[Job]:
        return self.queries.search_jobs(skills, location, department)

    def match_score(self, candidate_id: str, job_id: str) -> Optional[MatchResult]:
        """Score a candidate against a job; None if either id is unknown."""
        candidate = self.queries.get_candidate(candidate_id)
        job = self.queries.get_job(job_id)
        if candidate is None or job is None:
            return None
        return self.matching.match(candidate, job)

    def find_matching_jobs(self, candidate_id: str, min_score: Optional[int] = None) -> Optional[list[MatchResult]]:
        """Open jobs scoring at least ``min_score``; None for an unknown candidate."""
        candidate = self.queries.get_candidate(candidate_id)
        if candidate is None:
            return None
        return self.matching.find_matching_jobs(candidate, self.queries.list_jobs(), min_score)

    # -------------------------------------------------------------------------
    # Applications and Workflow
    # -------------------------------------------------------------------------

    def get_application(self, application_id: str) -> Optional[Application]:
        return self.queries.get_application(application_id)

    def list_applications(self) -> list[Application]:
        return self.queries.list_applications()

    def list_applications_by_candidate(self, candidate_id: str) -> list[Application]:
        return self.queries.applications_by_candidate(candidate_id)

    def list_applications_by_job(self, job_id: str) -> list[Application]:
        return self.queries.applications_by_job(job_id)

    def find_applications_by_status(self, status: ApplicationStatus | str) -> list[Application]:
        return self.queries.applications_by_status(status)

    def apply_transition(
        self,
        application_id: str,
        new_status: ApplicationStatus | str,
        actor: Optional[str] = None,
        reason: str = "",
    ) -> Optional[Application]:
        return self.workflow.apply_transition(application_id, new_status, actor, reason)

    def add_note(
        self,
        application_id: str,
        body: str,
        author_id: str,
        author_name: str,
    ) -> Optional[Application]:
        return self.workflow.add_note(application_id, body, author_id, author_name)

    def days_in_current_stage(self, application_id: str) -> Optional[int]:
        return self.queries.days_in_current_stage(application_id)

    def find_stuck(self, threshold_days: Optional[int] = None) -> list[Application]:
        return self.workflow.find_stuck(threshold_days)

    def pipeline_stats(self) -> PipelineStats:
        return self.queries.pipeline_stats()

    def describe_transitions(self, from_status: Optional[ApplicationStatus | str] = None) -> dict[str, Any]:
        return self.workflow.describe_transitions(from_status)

    def entity_schema(self, name: str) -> dict[str, Any]:
        return self.queries.entity_schema(name)

    # -------------------------------------------------------------------------
    # Assessments
    # -------------------------------------------------------------------------

    def get_assessment(self, assessment_id: str) -> Optional[AssessmentResult]:
        return self.queries.get_assessment(assessment_id)

    def get_assessment_results(self, candidate_id: str) -> list[AssessmentResult]:
        return self.queries.assessment_results(candidate_id)

    def find_assessments_by_application(self, application_id: str) -> list[AssessmentResult]:
        return self.queries.assessments_by_application(application_id)

    def get_assessment_by_type(
        self, candidate_id: str, assessment_type: AssessmentType | str
    ) -> Optional[AssessmentResult]:
        return self.queries.assessment_by_type(candidate_id, assessment_type)

    def average_score_percent(self, candidate_id: str) -> Optional[float]:
        return self.queries.average_score_percent(candidate_id)

    def compare_to_percentile(self, candidate_id: str, assessment_id: str) -> Optional[dict[str, Any]]:
        return self.queries.compare_to_percentile(candidate_id, assessment_id)

    # -------------------------------------------------------------------------
    # Required Lookups
    # -------------------------------------------------------------------------

    def require_candidate(self, candidate_id: str) -> Candidate:
        candidate = self.get_candidate(candidate_id)
        if candidate is None:
            raise NotFoundError("Candidate", candidate_id)
        return candidate

    def require_job(self, job_id: str) -> Job:
        job = self.get_job(job_id)
        if job is None:
            raise NotFoundError("Job", job_id)
        return job

    def require_application(self, application_id: str) -> Application:
        application = self.get_application(application_id)
        if application is None:
            raise NotFoundError("Application", application_id)
        return application


def build_service(
    settings: Optional[AppSettings] = None,
    seed: Optional[bool] = None,
    clock: Optional[Clock] = None,
) -> ATSService:
    """
    Create a service with its own empty store.

    Args:
        settings: Application settings; defaults to the global settings
        seed: Load the demo data; defaults to ``StoreSettings.seed_demo_data``
        clock: Current-time source shared by the workflow engine and the
            demo data; defaults to UTC wall-clock time

    Returns:
        A ready ATSService
    """
    settings = settings or get_settings()
    clock = clock or utc_now
    store = EntityStore()
    if settings.store.seed_demo_data if seed is None else seed:
        load_demo_data(store, now=clock())
    return ATSService(store, settings=settings, clock=clock)
