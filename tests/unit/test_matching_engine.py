"""
Tests for ats_core.core.matching.matching_engine: MatchingEngine business logic.

The engine is pure, so every test builds its own Candidate and Job.
"""

import pytest

from ats_core.core.matching import MatchingEngine, MatchResult, round_half_up
from ats_core.utils.config import MatchingSettings
from ats_core.utils.constants import JobStatus, MatchRecommendation
from ats_core.utils.exceptions import InvalidArgumentError


@pytest.fixture
def matching_engine():
    return MatchingEngine(MatchingSettings())


# ── round_half_up ───────────────────────────────────────────────────────────


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value,expected",
        [(0.0, 0), (62.5, 63), (62.49, 62), (84.67, 85), (14.5, 15), (100.0, 100)],
    )
    def test_values(self, value, expected):
        assert round_half_up(value) == expected


# ── match ───────────────────────────────────────────────────────────────────


class TestMatch:
    def test_reference_example(self, matching_engine, make_candidate, make_job):
        candidate = make_candidate(skills=["Java", "AWS"], years_of_experience=8)
        job = make_job(required_skills=["Java", "Kubernetes"], preferred_skills=["AWS"])

        result = matching_engine.match(candidate, job)

        assert result.required_score == pytest.approx(35.0)
        assert result.preferred_score == pytest.approx(20.0)
        assert result.experience_score == pytest.approx(8.0)
        assert result.overall_score == 63
        assert result.recommendation == MatchRecommendation.PARTIAL_MATCH
        assert result.required_matched == ("Java",)
        assert result.required_missing == ("Kubernetes",)
        assert result.preferred_matched == ("AWS",)
        assert result.missing_skills == ["Kubernetes"]
        assert result.matched_skills == ["Java", "AWS"]
        assert result.years_of_experience == 8

    def test_case_insensitive_keeps_job_spelling(self, matching_engine, make_candidate, make_job):
        candidate = make_candidate(skills=["python", "DJANGO"])
        job = make_job(required_skills=["Python", "Django"], preferred_skills=[])
        result = matching_engine.match(candidate, job)
        assert result.required_matched == ("Python", "Django")
        assert result.required_score == pytest.approx(70.0)

    def test_empty_required_scores_hundred(self, matching_engine, make_candidate, make_job):
        candidate = make_candidate(skills=[], years_of_experience=0)
        job = make_job(required_skills=[], preferred_skills=[])
        result = matching_engine.match(candidate, job)
        assert result.required_score == 100.0
        assert result.overall_score == 100
        assert result.recommendation == MatchRecommendation.STRONG_MATCH

    def test_empty_preferred_scores_zero(self, matching_engine, make_candidate, make_job):
        job = make_job(required_skills=["Python"], preferred_skills=[])
        result = matching_engine.match(make_candidate(skills=["Python"], years_of_experience=0), job)
        assert result.preferred_score == 0.0
        assert result.overall_score == 70

    def test_overall_clamped_to_hundred(self, matching_engine, make_candidate, make_job):
        candidate = make_candidate(skills=["Docker"], years_of_experience=15)
        job = make_job(required_skills=[], preferred_skills=["Docker"])
        result = matching_engine.match(candidate, job)
        assert result.required_score + result.preferred_score + result.experience_score == pytest.approx(130.0)
        assert result.overall_score == 100

    def test_unclamped_when_disabled(self, make_candidate, make_job):
        engine = MatchingEngine(MatchingSettings(clamp_score=False))
        candidate = make_candidate(skills=["Docker"], years_of_experience=15)
        job = make_job(required_skills=[], preferred_skills=["Docker"])
        assert engine.match(candidate, job).overall_score == 130

    def test_no_overlap(self, matching_engine, make_candidate, make_job):
        candidate = make_candidate(skills=["Rust"], years_of_experience=0)
        job = make_job(required_skills=["Java", "Spring"], preferred_skills=["Kafka"])
        result = matching_engine.match(candidate, job)
        assert result.overall_score == 0
        assert result.recommendation == MatchRecommendation.WEAK_MATCH
        assert result.missing_skills == ["Java", "Spring"]

    def test_deterministic(self, matching_engine, make_candidate, make_job):
        candidate = make_candidate(skills=["Python", "Go"], years_of_experience=4)
        job = make_job(required_skills=["Python", "Django", "Go"], preferred_skills=["Docker", "Go"])
        assert matching_engine.match(candidate, job) == matching_engine.match(candidate, job)

    def test_inputs_untouched(self, matching_engine, make_candidate, make_job):
        candidate = make_candidate()
        job = make_job()
        before = (candidate.model_dump(), job.model_dump())
        matching_engine.match(candidate, job)
        assert (candidate.model_dump(), job.model_dump()) == before

    def test_custom_weights(self, make_candidate, make_job):
        engine = MatchingEngine(
            MatchingSettings(),
            weights={"required_skills": 50.0, "preferred_skills": 30.0, "experience": 20.0},
        )
        candidate = make_candidate(skills=["Python", "Docker"], years_of_experience=5)
        job = make_job(required_skills=["Python", "Django"], preferred_skills=["Docker"])
        assert engine.match(candidate, job).overall_score == 25 + 30 + 10

    def test_to_dict(self, matching_engine, make_candidate, make_job):
        result = matching_engine.match(make_candidate(), make_job())
        data = result.to_dict()
        assert data["candidate_id"] == "C100"
        assert data["job_id"] == "J100"
        assert data["recommendation"] == result.recommendation.value
        assert data["required_skills_matched"] == ["Python", "Django"]


class TestExperienceScore:
    @pytest.mark.parametrize(
        "years,expected",
        [(0, 0.0), (1, 1.0), (5, 5.0), (10, 10.0), (12, 10.0), (40, 10.0)],
    )
    def test_capped_at_ten(self, matching_engine, years, expected):
        assert matching_engine._experience_score(years) == pytest.approx(expected)


# ── find_matching_jobs ──────────────────────────────────────────────────────


class TestFindMatchingJobs:
    @pytest.fixture
    def jobs(self, make_job):
        return [
            make_job(id="J3", required_skills=["Python"], preferred_skills=[]),
            make_job(id="J1", required_skills=["Python", "Django"], preferred_skills=["Docker"]),
            make_job(id="J2", required_skills=["Python"], preferred_skills=[]),
            make_job(id="J4", required_skills=["Java"], preferred_skills=[]),
            make_job(id="J5", required_skills=["Python"], preferred_skills=[], status=JobStatus.FILLED),
        ]

    def test_sorted_by_score_then_id(self, matching_engine, make_candidate, jobs):
        candidate = make_candidate(skills=["Python", "Django", "Docker"], years_of_experience=5)
        results = matching_engine.find_matching_jobs(candidate, jobs, min_score=50)
        assert [r.job_id for r in results] == ["J1", "J2", "J3"]
        assert [r.overall_score for r in results] == [95, 75, 75]
        assert all(isinstance(r, MatchResult) for r in results)

    def test_non_open_jobs_skipped(self, matching_engine, make_candidate, jobs):
        candidate = make_candidate(skills=["Python"], years_of_experience=5)
        results = matching_engine.find_matching_jobs(candidate, jobs, min_score=0)
        assert "J5" not in {r.job_id for r in results}
        assert len(results) == 4

    def test_min_score_filters(self, matching_engine, make_candidate, jobs):
        candidate = make_candidate(skills=["Python", "Django", "Docker"], years_of_experience=5)
        results = matching_engine.find_matching_jobs(candidate, jobs, min_score=80)
        assert [r.job_id for r in results] == ["J1"]

    def test_default_min_score(self, matching_engine, make_candidate, jobs):
        candidate = make_candidate(skills=["Python", "Django", "Docker"], years_of_experience=5)
        results = matching_engine.find_matching_jobs(candidate, jobs)
        assert all(r.overall_score >= 50 for r in results)
        assert "J4" not in {r.job_id for r in results}

    @pytest.mark.parametrize("min_score", [-1, 101])
    def test_min_score_range(self, matching_engine, make_candidate, jobs, min_score):
        with pytest.raises(InvalidArgumentError):
            matching_engine.find_matching_jobs(make_candidate(), jobs, min_score=min_score)

    def test_no_jobs(self, matching_engine, make_candidate):
        assert matching_engine.find_matching_jobs(make_candidate(), [], min_score=0) == []
