"""
Query layer over the entity store.

Pure reads: lookups by id, filters by foreign key and status, text and skill
search, cursor pagination, aggregates, and the report views built from them.
Lookups of absent ids return None (or an empty list); nothing here raises
for a missing entity.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from ats_core.core.workflow import WorkflowEngine
from ats_core.data.models import (
    Application,
    AssessmentResult,
    Candidate,
    Job,
    RecruiterNote,
    StatusHistoryEntry,
)
from ats_core.data.repositories import (
    ApplicationRepository,
    AssessmentRepository,
    CandidateRepository,
    JobRepository,
)
from ats_core.data.store import EntityStore
from ats_core.utils.constants import (
    STAGE_SLA_DAYS,
    ApplicationStatus,
    AssessmentType,
    CandidateStatus,
    parse_enum,
)
from ats_core.utils.exceptions import InvalidArgumentError
from ats_core.utils.logger import get_logger

logger = get_logger(__name__)

# Statuses that no longer count as an open application in a candidate journey
CLOSED_JOURNEY_STATUSES = frozenset(
    {ApplicationStatus.REJECTED, ApplicationStatus.WITHDRAWN, ApplicationStatus.HIRED}
)

UNKNOWN_JOB_TITLE = "Unknown"

ENTITY_MODELS: dict[str, type] = {
    "candidate": Candidate,
    "job": Job,
    "application": Application,
    "status_history_entry": StatusHistoryEntry,
    "recruiter_note": RecruiterNote,
    "assessment": AssessmentResult,
}


@dataclass(frozen=True)
class PipelineStats:
    """Distribution of applications over workflow statuses."""

    total: int
    by_status: dict[ApplicationStatus, int] = field(default_factory=dict)

    @property
    def active(self) -> int:
        """Applications in a non-terminal status."""
        return sum(
            count for status, count in self.by_status.items()
            if not WorkflowEngine.is_terminal(status)
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "active": self.active,
            "by_status": {status.value: count for status, count in self.by_status.items()},
        }


class QueryService:
    """Read operations and report views over one EntityStore."""

    def __init__(self, store: EntityStore, workflow: WorkflowEngine) -> None:
        self.candidates = CandidateRepository(store)
        self.jobs = JobRepository(store)
        self.applications = ApplicationRepository(store)
        self.assessments = AssessmentRepository(store)
        self.workflow = workflow

    # -------------------------------------------------------------------------
    # Candidates
    # -------------------------------------------------------------------------

    def get_candidate(self, candidate_id: str) -> Optional[Candidate]:
        return self.candidates.get_by_id(candidate_id)

    def list_candidates(self) -> list[Candidate]:
        return self.candidates.get_all()

    def candidates_page(self, after_id: Optional[str] = None, page_size: Optional[int] = None) -> list[Candidate]:
        return self.candidates.find_page(after_id, page_size)

    def candidates_by_status(self, status: CandidateStatus | str) -> list[Candidate]:
        return self.candidates.get_by_status(parse_enum(CandidateStatus, status, "status"))

    def search_candidates(
        self,
        query: Optional[str] = None,
        skills: Optional[list[str]] = None,
        min_experience: Optional[int] = None,
        location: Optional[str] = None,
    ) -> list[Candidate]:
        if min_experience is not None and min_experience < 0:
            raise InvalidArgumentError(
                "min_experience must not be negative",
                argument="min_experience",
                value=min_experience,
            )
        return self.candidates.search(query, skills, min_experience, location)

    def all_skills(self) -> list[str]:
        return self.candidates.all_skills()

    def count_candidates(self) -> int:
        return self.candidates.count()

    # -------------------------------------------------------------------------
    # Jobs
    # -------------------------------------------------------------------------

    def get_job(self, job_id: str) -> Optional[Job]:
        return self.jobs.get_by_id(job_id)

    def list_jobs(self) -> list[Job]:
        return self.jobs.get_all()

    def list_open_jobs(self, department: Optional[str] = None) -> list[Job]:
        return self.jobs.get_open_jobs(department)

    def jobs_by_department(self, department: str) -> list[Job]:
        return self.jobs.get_by_department(department)

    def search_jobs(
        self,
        skills: Optional[list[str]] = None,
        location: Optional[str] = None,
        department: Optional[str] = None,
    ) -> list[Job]:
        return self.jobs.search(skills, location, department)

    def job_title(self, job_id: str) -> str:
        job = self.jobs.get_by_id(job_id)
        return job.title if job else UNKNOWN_JOB_TITLE

    # -------------------------------------------------------------------------
    # Applications
    # -------------------------------------------------------------------------

    def get_application(self, application_id: str) -> Optional[Application]:
        return self.applications.get_by_id(application_id)

    def list_applications(self) -> list[Application]:
        return self.applications.get_all()

    def applications_by_candidate(self, candidate_id: str) -> list[Application]:
        return self.applications.get_by_candidate(candidate_id)

    def applications_by_job(self, job_id: str) -> list[Application]:
        return self.applications.get_by_job(job_id)

    def applications_by_status(self, status: ApplicationStatus | str) -> list[Application]:
        return self.applications.get_by_status(parse_enum(ApplicationStatus, status, "status"))

    def days_in_current_stage(self, application_id: str) -> Optional[int]:
        application = self.applications.get_by_id(application_id)
        if application is None:
            return None
        return self.workflow.days_in_current_stage(application)

    def days_in_pipeline(self, application: Application) -> int:
        return max(0, (self.workflow.now() - application.applied_at).days)

    def pipeline_stats(self) -> PipelineStats:
        """Application count per status, every status listed in workflow order."""
        counts = self.applications.get_status_counts()
        by_status = {status: counts.get(status, 0) for status in ApplicationStatus}
        return PipelineStats(total=sum(by_status.values()), by_status=by_status)

    # -------------------------------------------------------------------------
    # Application Views
    # -------------------------------------------------------------------------

    def application_status(self, application_id: str) -> Optional[dict[str, Any]]:
        """Where an application stands: stage, time in stage, SLA and latest note."""
        application = self.applications.get_by_id(application_id)
        if application is None:
            return None
        sla = self.workflow.sla_status(application)
        latest = application.latest_note
        return {
            "application_id": application.id,
            "candidate_id": application.candidate_id,
            "job_id": application.job_id,
            "current_status": application.status.value,
            "current_interview_round": application.current_interview_round,
            "source": application.source.value,
            "applied_at": application.applied_at.isoformat(),
            "days_in_current_stage": sla.days_in_stage,
            "sla_status": sla.label,
            "total_stages": len(application.status_history),
            "latest_note": latest.note if latest else None,
        }

    def next_steps(self, application_id: str) -> Optional[dict[str, Any]]:
        """Candidate-facing guidance for the application's current stage."""
        application = self.applications.get_by_id(application_id)
        if application is None:
            return None
        view = self.workflow.stage_guidance(application.status)
        view.update(
            {
                "application_id": application.id,
                "days_in_stage": self.workflow.days_in_current_stage(application),
                "sla_days": STAGE_SLA_DAYS.get(application.status, 0),
            }
        )
        return view

    def interview_feedback(self, application_id: str) -> Optional[dict[str, Any]]:
        """Recruiter notes on an application, oldest first."""
        application = self.applications.get_by_id(application_id)
        if application is None:
            return None
        feedback = [
            {
                "from": note.author_name,
                "date": note.created_at.isoformat(),
                "observation": note.note,
            }
            for note in application.notes
        ]
        return {
            "application_id": application.id,
            "stage": application.status.value,
            "feedback_count": len(feedback),
            "feedback": feedback,
        }

    def stage_duration(self, application_id: str) -> Optional[dict[str, Any]]:
        application = self.applications.get_by_id(application_id)
        if application is None:
            return None
        return self.workflow.stage_duration(application).to_dict()

    def candidate_applications(self, candidate_id: str) -> Optional[list[dict[str, Any]]]:
        """Summary rows of a candidate's applications, or None for an unknown candidate."""
        if not self.candidates.exists(candidate_id):
            return None
        return [
            {
                "application_id": a.id,
                "job_id": a.job_id,
                "job_title": self.job_title(a.job_id),
                "status": a.status.value,
                "applied_at": a.applied_at.isoformat(),
                "days_in_pipeline": self.days_in_pipeline(a),
            }
            for a in self.applications.get_by_candidate(candidate_id)
        ]

    def candidate_journey(self, candidate_id: str) -> Optional[dict[str, Any]]:
        """Every application of a candidate with its history and assessments."""
        candidate = self.candidates.get_by_id(candidate_id)
        if candidate is None:
            return None

        applications = self.applications.get_by_candidate(candidate_id)
        views = []
        for a in applications:
            views.append(
                {
                    "application_id": a.id,
                    "job_id": a.job_id,
                    "job_title": self.job_title(a.job_id),
                    "status": a.status.value,
                    "source": a.source.value,
                    "applied_at": a.applied_at.isoformat(),
                    "days_in_pipeline": self.days_in_pipeline(a),
                    "days_in_current_stage": self.workflow.days_in_current_stage(a),
                    "current_interview_round": a.current_interview_round,
                    "status_history": [
                        {
                            "status": entry.status.value,
                            "changed_at": entry.changed_at.isoformat(),
                            "changed_by": entry.changed_by,
                            "reason": entry.reason,
                        }
                        for entry in a.status_history
                    ],
                    "assessments": [
                        {
                            "id": r.id,
                            "type": r.type.value,
                            "score": r.score,
                            "max_score": r.max_score,
                            "percentile": r.percentile,
                            "completed_at": r.completed_at.isoformat(),
                        }
                        for r in self.assessments.get_by_application(a.id)
                    ],
                    "recruiter_notes": len(a.notes),
                }
            )

        return {
            "candidate_id": candidate.id,
            "name": candidate.name,
            "status": candidate.status.value,
            "total_applications": len(applications),
            "active_applications": sum(
                1 for a in applications if a.status not in CLOSED_JOURNEY_STATUSES
            ),
            "applications": views,
        }

    def stuck_report(self, threshold_days: Optional[int] = None) -> list[dict[str, Any]]:
        """Report rows for stuck applications, ordered by id."""
        rows = []
        for a in self.workflow.find_stuck(threshold_days):
            rows.append(
                {
                    "application_id": a.id,
                    "candidate_id": a.candidate_id,
                    "job_id": a.job_id,
                    "current_status": a.status.value,
                    "days_in_stage": self.workflow.days_in_current_stage(a),
                    "sla_threshold": STAGE_SLA_DAYS.get(a.status, 0),
                    "last_changed_at": a.last_status_change.isoformat(),
                }
            )
        return rows

    # -------------------------------------------------------------------------
    # Assessments
    # -------------------------------------------------------------------------

    def get_assessment(self, assessment_id: str) -> Optional[AssessmentResult]:
        return self.assessments.get_by_id(assessment_id)

    def assessment_results(self, candidate_id: str) -> list[AssessmentResult]:
        return self.assessments.get_by_candidate(candidate_id)

    def assessments_by_application(self, application_id: str) -> list[AssessmentResult]:
        return self.assessments.get_by_application(application_id)

    def assessment_by_type(
        self, candidate_id: str, assessment_type: AssessmentType | str
    ) -> Optional[AssessmentResult]:
        kind = parse_enum(AssessmentType, assessment_type, "assessment_type")
        return self.assessments.get_latest_by_type(candidate_id, kind)

    def average_score_percent(self, candidate_id: str) -> Optional[float]:
        return self.assessments.average_score_percent(candidate_id)

    def compare_to_percentile(self, candidate_id: str, assessment_id: str) -> Optional[dict[str, Any]]:
        """Plain-language reading of one of the candidate's assessment percentiles."""
        result = self.assessments.get_by_id(assessment_id)
        if result is None or result.candidate_id != candidate_id:
            return None
        return {
            "assessment_id": result.id,
            "type": result.type.value,
            "score": result.score,
            "max_score": result.max_score,
            "score_percent": round(result.score_percent, 1),
            "percentile": result.percentile,
            "interpretation": result.percentile_label,
            "beat_candidates": f"{result.percentile}% of all candidates who attempted this assessment",
            "summary": result.summary,
        }

    # -------------------------------------------------------------------------
    # Knowledge
    # -------------------------------------------------------------------------

    @staticmethod
    def entity_schema(name: str) -> dict[str, Any]:
        """JSON schema of an entity model, by name (e.g. "candidate")."""
        key = name.strip().lower().replace("-", "_")
        model = ENTITY_MODELS.get(key)
        if model is None:
            raise InvalidArgumentError(
                f"Unknown entity: {name!r} (expected one of {', '.join(ENTITY_MODELS)})",
                argument="name",
                value=name,
            )
        return model.model_json_schema()
