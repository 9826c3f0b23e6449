"""
Application data models for ats-core.

An application links a candidate to a job and carries the workflow state:
the current status, an append-only status history and append-only recruiter
notes.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from ats_core.utils.constants import (
    INITIAL_STATUS,
    SYSTEM_ACTOR,
    TERMINAL_STATUSES,
    ApplicationSource,
    ApplicationStatus,
)

from .base import EmbeddedModel, EntityModel, utc_now


class StatusHistoryEntry(EmbeddedModel):
    """One status change in an application's history."""

    status: ApplicationStatus
    changed_at: datetime
    changed_by: str = SYSTEM_ACTOR
    reason: str = ""


class RecruiterNote(EmbeddedModel):
    """A recruiter observation attached to an application. Never edited."""

    id: str
    application_id: str
    note: str
    author_id: str
    author_name: str
    created_at: datetime


class Application(EntityModel):
    """
    A candidate's application to a job.

    ``candidate_id`` and ``job_id`` are plain references; the referenced
    entities may be missing and that is reported rather than rejected.

    History invariants, checked on validation:
    - entries are ordered by ``changed_at`` ascending
    - the first entry's status is RECEIVED
    - the last entry's status equals ``status``
    """

    id: str = Field(..., min_length=1)
    candidate_id: str
    job_id: str
    status: ApplicationStatus = INITIAL_STATUS
    source: ApplicationSource = ApplicationSource.DIRECT
    applied_at: datetime = Field(default_factory=utc_now)
    current_interview_round: int = Field(default=0, ge=0)

    status_history: tuple[StatusHistoryEntry, ...] = ()
    notes: tuple[RecruiterNote, ...] = ()

    @model_validator(mode="after")
    def validate_history(self) -> "Application":
        problem = self.history_problem()
        if problem:
            raise ValueError(problem)
        return self

    def history_problem(self) -> Optional[str]:
        """Describe the first broken history invariant, or None when consistent."""
        history = self.status_history
        if not history:
            return None
        if history[0].status != INITIAL_STATUS:
            return f"first history entry must be {INITIAL_STATUS.value}, got {history[0].status.value}"
        for prev, entry in zip(history, history[1:]):
            if entry.changed_at < prev.changed_at:
                return f"history out of order at {entry.status.value} ({entry.changed_at.isoformat()})"
        if history[-1].status != self.status:
            return (
                f"last history status {history[-1].status.value} "
                f"does not match current status {self.status.value}"
            )
        return None

    @property
    def last_status_change(self) -> datetime:
        """Latest history timestamp, or the applied time when there is no history."""
        if not self.status_history:
            return self.applied_at
        return max(entry.changed_at for entry in self.status_history)

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def latest_note(self) -> Optional[RecruiterNote]:
        return self.notes[-1] if self.notes else None
