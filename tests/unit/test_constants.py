"""
Tests for ats_core.utils.constants: enums, workflow tables, scoring constants.
"""

import pytest

from ats_core.utils.constants import (
    INITIAL_STATUS,
    INTERVIEW_ROUND_STATUSES,
    SCORING_WEIGHTS,
    STAGE_GUIDANCE,
    STAGE_SLA_DAYS,
    TERMINAL_STATUSES,
    WORKFLOW_TRANSITIONS,
    ApplicationStatus,
    CandidateStatus,
    MatchRecommendation,
    parse_enum,
)
from ats_core.utils.exceptions import InvalidArgumentError


# ── MatchRecommendation.from_score() ────────────────────────────────────────


class TestMatchRecommendationFromScore:
    def test_strong_at_threshold(self):
        assert MatchRecommendation.from_score(70) == MatchRecommendation.STRONG_MATCH

    def test_strong_at_max(self):
        assert MatchRecommendation.from_score(100) == MatchRecommendation.STRONG_MATCH

    def test_partial_just_below_strong(self):
        assert MatchRecommendation.from_score(69) == MatchRecommendation.PARTIAL_MATCH

    def test_partial_at_threshold(self):
        assert MatchRecommendation.from_score(50) == MatchRecommendation.PARTIAL_MATCH

    def test_weak_just_below_partial(self):
        assert MatchRecommendation.from_score(49) == MatchRecommendation.WEAK_MATCH

    def test_weak_at_zero(self):
        assert MatchRecommendation.from_score(0) == MatchRecommendation.WEAK_MATCH


# ── Workflow tables ─────────────────────────────────────────────────────────


class TestWorkflowTransitions:
    def test_initial_status_is_received(self):
        assert INITIAL_STATUS == ApplicationStatus.RECEIVED

    def test_terminal_statuses_have_no_outgoing_edges(self):
        for status in TERMINAL_STATUSES:
            assert WORKFLOW_TRANSITIONS.get(status, ()) == ()

    def test_offer_accepted_only_leads_to_hired(self):
        assert WORKFLOW_TRANSITIONS[ApplicationStatus.OFFER_ACCEPTED] == (ApplicationStatus.HIRED,)

    def test_every_interview_stage_can_withdraw(self):
        for status in (
            ApplicationStatus.RECEIVED,
            ApplicationStatus.SCREENING,
            ApplicationStatus.PHONE_INTERVIEW,
            ApplicationStatus.TECHNICAL_INTERVIEW,
            ApplicationStatus.FINAL_INTERVIEW,
            ApplicationStatus.OFFER_EXTENDED,
        ):
            assert ApplicationStatus.WITHDRAWN in WORKFLOW_TRANSITIONS[status]

    def test_offer_extended_cannot_be_rejected(self):
        assert ApplicationStatus.REJECTED not in WORKFLOW_TRANSITIONS[ApplicationStatus.OFFER_EXTENDED]

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            WORKFLOW_TRANSITIONS[ApplicationStatus.HIRED] = (ApplicationStatus.RECEIVED,)  # type: ignore[index]

    def test_interview_round_statuses(self):
        assert INTERVIEW_ROUND_STATUSES == {
            ApplicationStatus.TECHNICAL_INTERVIEW,
            ApplicationStatus.FINAL_INTERVIEW,
        }


class TestStageSla:
    def test_expected_days(self):
        assert STAGE_SLA_DAYS[ApplicationStatus.RECEIVED] == 2
        assert STAGE_SLA_DAYS[ApplicationStatus.SCREENING] == 5
        assert STAGE_SLA_DAYS[ApplicationStatus.PHONE_INTERVIEW] == 3
        assert STAGE_SLA_DAYS[ApplicationStatus.TECHNICAL_INTERVIEW] == 7
        assert STAGE_SLA_DAYS[ApplicationStatus.FINAL_INTERVIEW] == 5
        assert STAGE_SLA_DAYS[ApplicationStatus.OFFER_EXTENDED] == 5

    def test_terminal_statuses_have_no_sla(self):
        for status in TERMINAL_STATUSES:
            assert status not in STAGE_SLA_DAYS

    def test_guidance_lists_possible_next_as_tuple(self):
        assert STAGE_GUIDANCE[ApplicationStatus.HIRED]["possible_next"] == ()


# ── SCORING_WEIGHTS ─────────────────────────────────────────────────────────


class TestScoringWeights:
    def test_weights_sum_to_hundred(self):
        assert sum(SCORING_WEIGHTS.values()) == 100

    def test_required_skills_is_largest(self):
        assert SCORING_WEIGHTS["required_skills"] == max(SCORING_WEIGHTS.values())


# ── parse_enum() ────────────────────────────────────────────────────────────


class TestParseEnum:
    def test_member_passes_through(self):
        assert parse_enum(ApplicationStatus, ApplicationStatus.SCREENING) is ApplicationStatus.SCREENING

    def test_case_insensitive_name(self):
        assert parse_enum(ApplicationStatus, "screening") == ApplicationStatus.SCREENING

    def test_dashes_and_spaces(self):
        assert parse_enum(ApplicationStatus, "phone-interview") == ApplicationStatus.PHONE_INTERVIEW
        assert parse_enum(ApplicationStatus, " final interview ") == ApplicationStatus.FINAL_INTERVIEW

    def test_unknown_name_raises(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            parse_enum(CandidateStatus, "retired", "status")
        assert exc_info.value.argument == "status"
        assert exc_info.value.value == "retired"
        assert "ACTIVE" in str(exc_info.value)

    def test_non_string_raises(self):
        with pytest.raises(InvalidArgumentError):
            parse_enum(ApplicationStatus, 3)  # type: ignore[arg-type]

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            parse_enum(ApplicationStatus, "")
