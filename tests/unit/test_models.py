"""
Tests for Pydantic data models in ats_core.data.models.
"""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from ats_core.data.models import (
    Application,
    AssessmentResult,
    Candidate,
    CandidateCreate,
    Job,
    StatusHistoryEntry,
    interpret_percentile,
)
from ats_core.utils.constants import (
    ApplicationStatus,
    AssessmentType,
    CandidateStatus,
    JobStatus,
)


# ── Candidate ───────────────────────────────────────────────────────────────


class TestCandidate:
    def test_skills_are_stripped_and_blank_entries_dropped(self, make_candidate):
        candidate = make_candidate(skills=["  Java ", "", "AWS", "   "])
        assert candidate.skills == ("Java", "AWS")

    def test_has_skill_is_case_insensitive(self, make_candidate):
        candidate = make_candidate(skills=["PostgreSQL"])
        assert candidate.has_skill("postgresql")
        assert candidate.has_skill(" POSTGRESQL ")
        assert not candidate.has_skill("mysql")

    def test_defaults(self):
        candidate = Candidate(id="C1", name="Sam Lee")
        assert candidate.status == CandidateStatus.ACTIVE
        assert candidate.skills == ()
        assert candidate.years_of_experience == 0
        assert candidate.created_at.tzinfo is not None

    def test_negative_experience_rejected(self):
        with pytest.raises(ValidationError):
            Candidate(id="C1", name="Sam Lee", years_of_experience=-1)

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            Candidate(id="C1", name="   ")

    def test_frozen(self, make_candidate):
        candidate = make_candidate()
        with pytest.raises(ValidationError):
            candidate.name = "Someone Else"  # type: ignore[misc]

    def test_model_copy_leaves_original_untouched(self, make_candidate):
        candidate = make_candidate()
        hired = candidate.model_copy(update={"status": CandidateStatus.HIRED})
        assert candidate.status == CandidateStatus.ACTIVE
        assert hired.status == CandidateStatus.HIRED


class TestCandidateCreate:
    def test_to_candidate(self, fixed_now):
        data = CandidateCreate(
            id="C200",
            name="Priya Patel",
            skills=["Go", " Rust "],
            years_of_experience=3,
            created_at=fixed_now,
        )
        candidate = data.to_candidate()
        assert isinstance(candidate, Candidate)
        assert candidate.skills == ("Go", "Rust")
        assert candidate.created_at == fixed_now

    def test_missing_created_at_uses_default(self):
        candidate = CandidateCreate(id="C201", name="Lee Chen").to_candidate()
        assert candidate.created_at is not None


# ── Job ─────────────────────────────────────────────────────────────────────


class TestJob:
    def test_all_skills_required_first(self, make_job):
        job = make_job(required_skills=["Python"], preferred_skills=["Docker", "AWS"])
        assert job.all_skills == ("Python", "Docker", "AWS")

    def test_is_open(self, make_job):
        assert make_job().is_open
        assert not make_job(status=JobStatus.FILLED).is_open

    def test_skill_lists_become_tuples(self):
        job = Job(id="J1", title="SRE", required_skills=["Linux", ""], preferred_skills=[])
        assert job.required_skills == ("Linux",)
        assert job.preferred_skills == ()


# ── Application ─────────────────────────────────────────────────────────────


class TestApplicationHistory:
    def test_consistent_history_is_accepted(self, make_application):
        application = make_application(
            steps=[(ApplicationStatus.RECEIVED, 5), (ApplicationStatus.SCREENING, 2)]
        )
        assert application.status == ApplicationStatus.SCREENING
        assert application.history_problem() is None

    def test_first_entry_must_be_received(self, ago):
        with pytest.raises(ValidationError, match="first history entry"):
            Application(
                id="A1",
                candidate_id="C1",
                job_id="J1",
                status=ApplicationStatus.SCREENING,
                status_history=[StatusHistoryEntry(status=ApplicationStatus.SCREENING, changed_at=ago(1))],
            )

    def test_out_of_order_rejected(self, ago):
        with pytest.raises(ValidationError, match="out of order"):
            Application(
                id="A1",
                candidate_id="C1",
                job_id="J1",
                status=ApplicationStatus.SCREENING,
                status_history=[
                    StatusHistoryEntry(status=ApplicationStatus.RECEIVED, changed_at=ago(1)),
                    StatusHistoryEntry(status=ApplicationStatus.SCREENING, changed_at=ago(3)),
                ],
            )

    def test_last_entry_must_match_status(self, ago):
        with pytest.raises(ValidationError, match="does not match"):
            Application(
                id="A1",
                candidate_id="C1",
                job_id="J1",
                status=ApplicationStatus.PHONE_INTERVIEW,
                status_history=[StatusHistoryEntry(status=ApplicationStatus.RECEIVED, changed_at=ago(1))],
            )

    def test_empty_history_is_allowed(self):
        application = Application(id="A1", candidate_id="C1", job_id="J1")
        assert application.status == ApplicationStatus.RECEIVED
        assert application.status_history == ()

    def test_last_status_change_falls_back_to_applied_at(self, ago):
        application = Application(id="A1", candidate_id="C1", job_id="J1", applied_at=ago(4))
        assert application.last_status_change == ago(4)

    def test_last_status_change_uses_latest_entry(self, make_application, ago):
        application = make_application(
            steps=[(ApplicationStatus.RECEIVED, 9), (ApplicationStatus.SCREENING, 6)]
        )
        assert application.last_status_change == ago(6)

    def test_is_terminal(self, make_application):
        rejected = make_application(
            steps=[(ApplicationStatus.RECEIVED, 3), (ApplicationStatus.REJECTED, 1)]
        )
        assert rejected.is_terminal
        assert not make_application().is_terminal

    def test_negative_round_rejected(self, make_application):
        with pytest.raises(ValidationError):
            make_application(current_interview_round=-1)

    def test_latest_note_none_without_notes(self, make_application):
        assert make_application().latest_note is None


# ── AssessmentResult ────────────────────────────────────────────────────────


class TestAssessmentResult:
    def test_score_percent(self, make_assessment):
        assert make_assessment(score=45, max_score=60).score_percent == pytest.approx(75.0)

    def test_score_percent_zero_max(self, make_assessment):
        assert make_assessment(score=10, max_score=0).score_percent == 0.0

    def test_percentile_bounds(self, make_assessment):
        with pytest.raises(ValidationError):
            make_assessment(percentile=101)
        with pytest.raises(ValidationError):
            make_assessment(percentile=-1)

    def test_breakdown_is_free_form(self, make_assessment):
        result = make_assessment(breakdown={"problemsSolved": 3, "languages": ["Java"]})
        assert result.breakdown["languages"] == ["Java"]

    def test_percentile_label(self, make_assessment):
        result = make_assessment(type=AssessmentType.BEHAVIORAL, percentile=92)
        assert result.percentile_label == "Top 10%, exceptional"


class TestInterpretPercentile:
    @pytest.mark.parametrize(
        "percentile,expected",
        [
            (100, "Top 10%, exceptional"),
            (90, "Top 10%, exceptional"),
            (89, "Top 25%, strong"),
            (75, "Top 25%, strong"),
            (50, "Above average"),
            (25, "Below average, room to grow"),
            (24, "Bottom 25%, significant improvement needed"),
            (0, "Bottom 25%, significant improvement needed"),
        ],
    )
    def test_labels(self, percentile, expected):
        assert interpret_percentile(percentile) == expected


class TestTimestamps:
    def test_history_entries_compare_by_time(self, ago):
        earlier = StatusHistoryEntry(status=ApplicationStatus.RECEIVED, changed_at=ago(2))
        later = StatusHistoryEntry(status=ApplicationStatus.SCREENING, changed_at=ago(2) + timedelta(hours=1))
        assert later.changed_at > earlier.changed_at
        assert earlier.changed_by == "system"
