"""
Tests for ats_core.cli using Typer's CliRunner.

Every invocation builds a fresh service over the demo data, dated relative to
the wall clock.
"""

import pytest
from rich.console import Console
from typer.testing import CliRunner

from ats_core import cli
from ats_core.utils import logger as logger_module
from ats_core.utils.config import LoggingSettings

runner = CliRunner()


@pytest.fixture(autouse=True)
def wide_quiet_cli(monkeypatch):
    """Render tables without wrapping and keep log output off the captured streams."""
    monkeypatch.setattr(cli, "console", Console(width=200))
    real_setup = logger_module.setup_logging
    monkeypatch.setattr(
        logger_module,
        "setup_logging",
        lambda log_settings=None: real_setup(LoggingSettings(console_output=False)),
    )


def invoke(*args: str):
    return runner.invoke(cli.app, list(args))


class TestInfoCommands:
    def test_version(self):
        result = invoke("version")
        assert result.exit_code == 0
        assert "ats-core" in result.output
        assert "0.1.0" in result.output

    def test_info(self):
        result = invoke("info")
        assert result.exit_code == 0
        assert "Enforce Transitions" in result.output

    def test_workflow_graph(self):
        result = invoke("workflow")
        assert result.exit_code == 0
        assert "OFFER_ACCEPTED" in result.output

    def test_workflow_single_status(self):
        result = invoke("workflow", "received")
        assert result.exit_code == 0
        assert "SCREENING, REJECTED, WITHDRAWN" in result.output
        assert "SLA: 2 days" in result.output

    def test_workflow_unknown_status(self):
        result = invoke("workflow", "promoted")
        assert result.exit_code == 1
        assert "Error" in result.output


class TestCandidateCommands:
    def test_list_page(self):
        result = invoke("list-candidates", "--after", "C002", "--limit", "2")
        assert result.exit_code == 0
        assert "C003" in result.output
        assert "C004" in result.output
        assert "C001" not in result.output
        assert "C005" not in result.output

    def test_list_by_status(self):
        result = invoke("list-candidates", "--status", "hired")
        assert result.exit_code == 0
        assert "Emma Davis" in result.output
        assert "Alice Johnson" not in result.output

    def test_list_bad_status(self):
        result = invoke("list-candidates", "--status", "retired")
        assert result.exit_code == 1
        assert "Invalid status" in result.output

    def test_list_bad_page_size(self):
        result = invoke("list-candidates", "--limit", "0")
        assert result.exit_code == 1
        assert "page_size" in result.output

    def test_list_past_end(self):
        result = invoke("list-candidates", "--after", "C999")
        assert result.exit_code == 0
        assert "No candidates found" in result.output

    def test_show_candidate(self):
        result = invoke("show-candidate", "C001")
        assert result.exit_code == 0
        assert "Alice Johnson" in result.output
        assert "Average assessment score" in result.output

    def test_show_unknown_candidate(self):
        result = invoke("show-candidate", "C404")
        assert result.exit_code == 1
        assert "Candidate not found: C404" in result.output

    def test_search(self):
        result = invoke("search-candidates", "--skill", "java", "--min-exp", "8")
        assert result.exit_code == 0
        assert "C001" in result.output
        assert "C004" in result.output
        assert "C006" not in result.output

    def test_search_negative_experience(self):
        result = invoke("search-candidates", "--min-exp", "-3")
        assert result.exit_code == 1


class TestJobCommands:
    def test_list_open(self):
        result = invoke("list-jobs", "--open")
        assert result.exit_code == 0
        assert "J001" in result.output
        assert "J003" not in result.output

    def test_list_department(self):
        result = invoke("list-jobs", "--department", "infrastructure")
        assert result.exit_code == 0
        assert "Platform Engineer" in result.output

    def test_match(self):
        result = invoke("match", "C001", "J001")
        assert result.exit_code == 0
        assert "Overall: 85" in result.output
        assert "STRONG_MATCH" in result.output

    def test_match_unknown_job(self):
        result = invoke("match", "C001", "J404")
        assert result.exit_code == 1
        assert "Job not found: J404" in result.output

    def test_matching_jobs(self):
        result = invoke("matching-jobs", "C001", "--min-score", "0")
        assert result.exit_code == 0
        assert "J001" in result.output
        assert "J002" in result.output

    def test_matching_jobs_bad_min_score(self):
        result = invoke("matching-jobs", "C001", "--min-score", "150")
        assert result.exit_code == 1
        assert "min_score" in result.output


class TestApplicationCommands:
    def test_show_application(self):
        result = invoke("show-application", "A001")
        assert result.exit_code == 0
        assert "FINAL_INTERVIEW" in result.output
        assert "ON_TRACK (2 days remaining)" in result.output
        assert "Jane Smith" in result.output

    def test_show_unknown_application(self):
        result = invoke("show-application", "A404")
        assert result.exit_code == 1
        assert "Application not found: A404" in result.output

    def test_journey(self):
        result = invoke("journey", "C001")
        assert result.exit_code == 0
        assert "2 applications, 1 active" in result.output
        assert "A006" in result.output

    def test_transition(self):
        result = invoke("transition", "A003", "phone_interview", "--actor", "recruiter-1")
        assert result.exit_code == 0
        assert "A003 is now PHONE_INTERVIEW (interview round 0)" in result.output

    def test_transition_bumps_round(self):
        result = invoke("transition", "A007", "FINAL_INTERVIEW")
        assert result.exit_code == 0
        assert "interview round 3" in result.output

    def test_invalid_transition(self):
        result = invoke("transition", "A003", "hired")
        assert result.exit_code == 1
        assert "Invalid transition for application A003: SCREENING -> HIRED" in result.output

    def test_note(self):
        result = invoke("note", "A001", "Strong follow-up call", "--author-name", "Jane Smith")
        assert result.exit_code == 0
        assert "Added note N101 to A001" in result.output

    def test_blank_note(self):
        result = invoke("note", "A001", "   ")
        assert result.exit_code == 1

    def test_stuck(self):
        result = invoke("stuck", "--days", "6")
        assert result.exit_code == 0
        assert "A002" in result.output
        assert "A003" in result.output
        assert "A001" not in result.output

    def test_nothing_stuck(self):
        result = invoke("stuck", "--days", "30")
        assert result.exit_code == 0
        assert "No stuck applications" in result.output

    def test_negative_stuck_days(self):
        result = invoke("stuck", "--days", "-1")
        assert result.exit_code == 1

    def test_stats(self):
        result = invoke("stats")
        assert result.exit_code == 0
        assert "TECHNICAL_INTERVIEW" in result.output
        assert "OFFER_DECLINED" in result.output


class TestAssessmentCommands:
    def test_assessments(self):
        result = invoke("assessments", "C004")
        assert result.exit_code == 0
        for assessment_id in ("AS005", "AS006", "AS007"):
            assert assessment_id in result.output
        assert "Average score: 91.3%" in result.output

    def test_assessments_by_type(self):
        result = invoke("assessments", "C004", "--type", "system_design")
        assert result.exit_code == 0
        assert "AS006" in result.output
        assert "AS005" not in result.output

    def test_no_assessments_of_type(self):
        result = invoke("assessments", "C002", "--type", "behavioral")
        assert result.exit_code == 0
        assert "No assessments found" in result.output

    def test_unknown_candidate(self):
        result = invoke("assessments", "C404")
        assert result.exit_code == 1
