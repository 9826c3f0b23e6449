"""
Application workflow engine.

Validates and applies application status transitions, keeps the append-only
status history and recruiter notes, and tracks how long an application has
been in its current stage against the stage SLA.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Optional

from ats_core.data.models import Application, RecruiterNote, StatusHistoryEntry, utc_now
from ats_core.data.repositories import ApplicationRepository
from ats_core.data.store import EntityStore
from ats_core.utils.config import WorkflowSettings, get_settings
from ats_core.utils.constants import (
    DEFAULT_STAGE_GUIDANCE,
    INTERVIEW_ROUND_STATUSES,
    STAGE_GUIDANCE,
    STAGE_SLA_DAYS,
    SYSTEM_ACTOR,
    TERMINAL_STATUSES,
    WORKFLOW_TRANSITIONS,
    ApplicationStatus,
    AuditAction,
    SlaState,
    parse_enum,
)
from ats_core.utils.exceptions import (
    InvalidArgumentError,
    InvalidTransitionError,
    InvariantViolationError,
)
from ats_core.utils.logger import LoggerMixin, audit_log

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class SlaStatus:
    """Where an application stands against the SLA of its current stage."""

    status: ApplicationStatus
    state: SlaState
    days_in_stage: int
    sla_days: Optional[int] = None

    @property
    def overdue_by(self) -> int:
        if self.sla_days is None:
            return 0
        return max(0, self.days_in_stage - self.sla_days)

    @property
    def days_remaining(self) -> Optional[int]:
        if self.sla_days is None:
            return None
        return max(0, self.sla_days - self.days_in_stage)

    @property
    def label(self) -> str:
        if self.state == SlaState.OVERDUE:
            return f"OVERDUE by {self.overdue_by} days"
        if self.state == SlaState.AT_LIMIT:
            return "AT_LIMIT"
        if self.sla_days is None:
            return "ON_TRACK (no SLA)"
        return f"ON_TRACK ({self.days_remaining} days remaining)"


@dataclass(frozen=True)
class StageDuration:
    """Time-in-stage report row for one application."""

    application_id: str
    status: ApplicationStatus
    days_in_stage: int
    expected_days: int
    sla_breached: bool
    breach_by_days: int
    last_changed_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "application_id": self.application_id,
            "current_status": self.status.value,
            "days_in_current_stage": self.days_in_stage,
            "expected_days": self.expected_days,
            "sla_breached": self.sla_breached,
            "breach_by_days": self.breach_by_days,
            "last_changed_at": self.last_changed_at.isoformat(),
        }


class WorkflowEngine(LoggerMixin):
    """
    State machine over ApplicationStatus.

    The engine is the only writer of an application's status, history and
    interview round. Each write builds a new Application and swaps it into
    the store under that application's lock.
    """

    def __init__(
        self,
        store: EntityStore,
        settings: Optional[WorkflowSettings] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        """
        Initialize the workflow engine.

        Args:
            store: Store holding the applications
            settings: Workflow settings; defaults to the global settings
            clock: Returns the current time; defaults to UTC wall-clock time
        """
        self._applications = ApplicationRepository(store)
        self._store = store
        self.settings = settings or get_settings().workflow
        self._clock = clock or utc_now

    def now(self) -> datetime:
        return self._clock()

    # -------------------------------------------------------------------------
    # Transition Table
    # -------------------------------------------------------------------------

    @staticmethod
    def valid_next_states(status: ApplicationStatus | str) -> tuple[ApplicationStatus, ...]:
        """Statuses reachable in one step; empty for terminal statuses."""
        status = parse_enum(ApplicationStatus, status, "status")
        return WORKFLOW_TRANSITIONS.get(status, ())

    @staticmethod
    def can_transition(from_status: ApplicationStatus | str, to_status: ApplicationStatus | str) -> bool:
        to_status = parse_enum(ApplicationStatus, to_status, "to_status")
        return to_status in WorkflowEngine.valid_next_states(from_status)

    @staticmethod
    def is_terminal(status: ApplicationStatus | str) -> bool:
        return parse_enum(ApplicationStatus, status, "status") in TERMINAL_STATUSES

    @staticmethod
    def describe_transitions(from_status: Optional[ApplicationStatus | str] = None) -> dict[str, Any]:
        """
        Describe the transition graph.

        With ``from_status`` this describes one state: its valid next states,
        whether it is terminal and its expected SLA days. Without it, the
        full graph is returned.
        """
        if from_status is not None:
            status = parse_enum(ApplicationStatus, from_status, "from_status")
            return {
                "from_status": status.value,
                "valid_next_states": [s.value for s in WORKFLOW_TRANSITIONS.get(status, ())],
                "is_terminal": status in TERMINAL_STATUSES,
                "expected_days_in_stage": STAGE_SLA_DAYS.get(status),
            }
        return {
            "transitions": {
                status.value: [s.value for s in WORKFLOW_TRANSITIONS.get(status, ())]
                for status in ApplicationStatus
            },
            "terminal_states": sorted(s.value for s in TERMINAL_STATUSES),
            "sla_days": {status.value: days for status, days in STAGE_SLA_DAYS.items()},
        }

    @staticmethod
    def stage_guidance(status: ApplicationStatus | str) -> dict[str, Any]:
        """Candidate-facing description of a stage and what usually comes next."""
        status = parse_enum(ApplicationStatus, status, "status")
        guidance = STAGE_GUIDANCE.get(status)
        if guidance is None:
            guidance = {
                "what_is_happening": f"Your application is in status: {status.value}",
                **DEFAULT_STAGE_GUIDANCE,
            }
        return {
            "status": status.value,
            "what_is_happening": guidance["what_is_happening"],
            "candidate_action": guidance["candidate_action"],
            "typical_wait": guidance["typical_wait"],
            "possible_next": list(guidance["possible_next"]),  # type: ignore[call-overload]
        }

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def apply_transition(
        self,
        application_id: str,
        new_status: ApplicationStatus | str,
        actor: Optional[str] = None,
        reason: str = "",
    ) -> Optional[Application]:
        """
        Move an application to a new status.

        Appends a history entry, sets the status and bumps the interview round
        when entering TECHNICAL_INTERVIEW or FINAL_INTERVIEW.

        Args:
            application_id: Application to change
            new_status: Target status (member or name)
            actor: User id recorded on the history entry; "system" when blank
            reason: Free-text reason

        Returns:
            The updated application, or None if it does not exist

        Raises:
            InvalidArgumentError: if ``new_status`` is not a valid status name
            InvalidTransitionError: if enforcement is on and the table does
                not allow the move; the application is left unchanged
        """
        target = parse_enum(ApplicationStatus, new_status, "new_status")
        changed_by = (actor or "").strip() or SYSTEM_ACTOR

        previous: dict[str, ApplicationStatus] = {}

        def change(app: Application) -> Application:
            previous["status"] = app.status
            if self.settings.enforce_transitions and not self.can_transition(app.status, target):
                audit_log(
                    AuditAction.TRANSITION_REJECTED.value,
                    {
                        "application_id": app.id,
                        "from_status": app.status.value,
                        "to_status": target.value,
                        "actor": changed_by,
                    },
                )
                raise InvalidTransitionError(app.id, app.status, target)

            entry = StatusHistoryEntry(
                status=target,
                changed_at=self.now(),
                changed_by=changed_by,
                reason=reason,
            )
            round_bump = 1 if target in INTERVIEW_ROUND_STATUSES else 0
            updated = app.model_copy(
                update={
                    "status": target,
                    "status_history": app.status_history + (entry,),
                    "current_interview_round": app.current_interview_round + round_bump,
                }
            )
            problem = updated.history_problem()
            if problem:
                raise InvariantViolationError(f"Application {app.id}: {problem}")
            return updated

        updated = self._applications.update(application_id, change)
        if updated is None:
            self.logger.debug(f"Transition skipped, application not found: {application_id}")
            return None

        from_status = previous["status"].value
        self.logger.info(f"Application {application_id}: {from_status} -> {target.value}")
        audit_log(
            AuditAction.APPLICATION_TRANSITIONED.value,
            {
                "application_id": application_id,
                "from_status": from_status,
                "to_status": target.value,
                "actor": changed_by,
                "reason": reason,
                "interview_round": updated.current_interview_round,
            },
        )
        return updated

    def add_note(
        self,
        application_id: str,
        body: str,
        author_id: str,
        author_name: str,
    ) -> Optional[Application]:
        """
        Append a recruiter note to an application.

        Returns:
            The updated application, or None if it does not exist
        """
        if not body or not body.strip():
            raise InvalidArgumentError("Note body must not be empty", argument="body", value=body)

        def change(app: Application) -> Application:
            note = RecruiterNote(
                id=self._store.next_note_id(),
                application_id=app.id,
                note=body.strip(),
                author_id=author_id,
                author_name=author_name,
                created_at=self.now(),
            )
            return app.model_copy(update={"notes": app.notes + (note,)})

        updated = self._applications.update(application_id, change)
        if updated is None:
            self.logger.debug(f"Note skipped, application not found: {application_id}")
            return None

        note = updated.notes[-1]
        audit_log(
            AuditAction.NOTE_ADDED.value,
            {"application_id": application_id, "note_id": note.id, "author_id": author_id},
            audit_type="NOTE",
        )
        return updated

    # -------------------------------------------------------------------------
    # Time in Stage
    # -------------------------------------------------------------------------

    def days_in_current_stage(self, application: Application) -> int:
        """Whole days since the last status change."""
        elapsed = self.now() - application.last_status_change
        return max(0, elapsed.days)

    def sla_status(self, application: Application) -> SlaStatus:
        days = self.days_in_current_stage(application)
        sla_days = STAGE_SLA_DAYS.get(application.status)
        if sla_days is None or days < sla_days:
            state = SlaState.ON_TRACK
        elif days == sla_days:
            state = SlaState.AT_LIMIT
        else:
            state = SlaState.OVERDUE
        return SlaStatus(
            status=application.status,
            state=state,
            days_in_stage=days,
            sla_days=sla_days,
        )

    def stage_duration(self, application: Application) -> StageDuration:
        """Time-in-stage report row; statuses without an SLA expect 0 days and never breach."""
        sla = self.sla_status(application)
        return StageDuration(
            application_id=application.id,
            status=application.status,
            days_in_stage=sla.days_in_stage,
            expected_days=sla.sla_days or 0,
            sla_breached=sla.state == SlaState.OVERDUE,
            breach_by_days=sla.overdue_by,
            last_changed_at=application.last_status_change,
        )

    def find_stuck(self, threshold_days: Optional[int] = None) -> list[Application]:
        """
        Non-terminal applications whose last status change is older than the threshold.

        Args:
            threshold_days: Days without a status change; defaults to the
                configured ``default_stuck_threshold_days``

        Returns:
            Stuck applications ordered by id
        """
        if threshold_days is None:
            threshold_days = self.settings.default_stuck_threshold_days
        if threshold_days < 0:
            raise InvalidArgumentError(
                "threshold_days must not be negative",
                argument="threshold_days",
                value=threshold_days,
            )
        cutoff = self.now() - timedelta(days=threshold_days)
        return self._applications.find(
            lambda a: not a.is_terminal and a.last_status_change < cutoff
        )
