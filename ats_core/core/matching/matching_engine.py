"""
Candidate-Job matching engine.

Scores a candidate against a job from required-skill coverage, preferred-skill
coverage and years of experience. The engine is pure: it reads Candidate and
Job entities and never changes them.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Optional

from ats_core.data.models import Candidate, Job
from ats_core.utils.config import MatchingSettings, get_settings
from ats_core.utils.constants import (
    EMPTY_REQUIRED_SCORE,
    EXPERIENCE_CAP_YEARS,
    MAX_MATCH_SCORE,
    SCORING_WEIGHTS,
    JobStatus,
    MatchRecommendation,
)
from ats_core.utils.exceptions import InvalidArgumentError
from ats_core.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class MatchResult:
    """Complete result of matching a candidate to a job."""

    # Basic info
    candidate_id: str = ""
    candidate_name: str = ""
    job_id: str = ""
    job_title: str = ""

    # Scores
    overall_score: int = 0
    recommendation: MatchRecommendation = MatchRecommendation.WEAK_MATCH

    # Component scores (unrounded)
    required_score: float = 0.0
    preferred_score: float = 0.0
    experience_score: float = 0.0

    # Skill breakdown, in the job's spelling and order
    required_matched: tuple[str, ...] = field(default_factory=tuple)
    required_missing: tuple[str, ...] = field(default_factory=tuple)
    preferred_matched: tuple[str, ...] = field(default_factory=tuple)
    preferred_missing: tuple[str, ...] = field(default_factory=tuple)

    years_of_experience: int = 0

    @property
    def matched_skills(self) -> list[str]:
        """Required and preferred skills the candidate has."""
        return list(self.required_matched + self.preferred_matched)

    @property
    def missing_skills(self) -> list[str]:
        """Required skills the candidate lacks."""
        return list(self.required_missing)

    def to_dict(self) -> dict[str, Any]:
        return {
            "candidate_id": self.candidate_id,
            "candidate_name": self.candidate_name,
            "job_id": self.job_id,
            "job_title": self.job_title,
            "overall_score": self.overall_score,
            "recommendation": self.recommendation.value,
            "required_score": round(self.required_score, 2),
            "preferred_score": round(self.preferred_score, 2),
            "experience_score": round(self.experience_score, 2),
            "required_skills_matched": list(self.required_matched),
            "required_skills_missing": list(self.required_missing),
            "preferred_skills_matched": list(self.preferred_matched),
            "preferred_skills_missing": list(self.preferred_missing),
            "years_of_experience": self.years_of_experience,
        }


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for non-negative values."""
    return int(math.floor(value + 0.5))


class MatchingEngine:
    """
    Engine for scoring candidates against job requirements.

    Uses three components:
    - Required skills (up to 70 points; 100 when the job lists none)
    - Preferred skills (up to 20 points; 0 when the job lists none)
    - Experience (1 point per year, capped at 10)
    """

    def __init__(
        self,
        settings: Optional[MatchingSettings] = None,
        weights: Optional[dict[str, float]] = None,
    ):
        """
        Initialize the matching engine.

        Args:
            settings: Matching settings; defaults to the global settings
            weights: Optional custom component weights
        """
        self.settings = settings or get_settings().matching
        self.weights = dict(weights or SCORING_WEIGHTS)

    def match(self, candidate: Candidate, job: Job) -> MatchResult:
        """
        Match a candidate against a job.

        Args:
            candidate: Candidate to score
            job: Job to score against

        Returns:
            MatchResult with component scores and the skill breakdown
        """
        skills = candidate.skill_set

        required_matched, required_missing = self._split_skills(job.required_skills, skills)
        preferred_matched, preferred_missing = self._split_skills(job.preferred_skills, skills)

        if job.required_skills:
            required_score = self.weights["required_skills"] * len(required_matched) / len(job.required_skills)
        else:
            required_score = EMPTY_REQUIRED_SCORE

        if job.preferred_skills:
            preferred_score = self.weights["preferred_skills"] * len(preferred_matched) / len(job.preferred_skills)
        else:
            preferred_score = 0.0

        experience_score = self._experience_score(candidate.years_of_experience)

        overall = round_half_up(required_score + preferred_score + experience_score)
        if self.settings.clamp_score:
            overall = min(overall, MAX_MATCH_SCORE)

        return MatchResult(
            candidate_id=candidate.id,
            candidate_name=candidate.name,
            job_id=job.id,
            job_title=job.title,
            overall_score=overall,
            recommendation=MatchRecommendation.from_score(overall),
            required_score=required_score,
            preferred_score=preferred_score,
            experience_score=experience_score,
            required_matched=required_matched,
            required_missing=required_missing,
            preferred_matched=preferred_matched,
            preferred_missing=preferred_missing,
            years_of_experience=candidate.years_of_experience,
        )

    def _experience_score(self, years: int) -> float:
        cap = self.weights["experience"]
        return min(years / EXPERIENCE_CAP_YEARS * cap, cap)

    @staticmethod
    def _split_skills(
        job_skills: tuple[str, ...], candidate_skills: frozenset[str]
    ) -> tuple[tuple[str, ...], tuple[str, ...]]:
        """Partition job skills into (matched, missing), keeping the job's order."""
        matched = tuple(s for s in job_skills if s.lower() in candidate_skills)
        missing = tuple(s for s in job_skills if s.lower() not in candidate_skills)
        return matched, missing

    def find_matching_jobs(
        self,
        candidate: Candidate,
        jobs: Iterable[Job],
        min_score: Optional[int] = None,
    ) -> list[MatchResult]:
        """
        Score a candidate against every OPEN job and keep the good fits.

        Args:
            candidate: Candidate to place
            jobs: Jobs to consider; non-OPEN jobs are skipped
            min_score: Minimum overall score (0-100); defaults to the
                configured ``default_min_score``

        Returns:
            Results ordered by overall score descending, then job id
        """
        if min_score is None:
            min_score = self.settings.default_min_score
        if not 0 <= min_score <= MAX_MATCH_SCORE:
            raise InvalidArgumentError(
                f"min_score must be between 0 and {MAX_MATCH_SCORE}",
                argument="min_score",
                value=min_score,
            )

        results = [
            self.match(candidate, job)
            for job in jobs
            if job.status == JobStatus.OPEN
        ]
        results = [r for r in results if r.overall_score >= min_score]
        results.sort(key=lambda r: (-r.overall_score, r.job_id))

        logger.debug(
            f"Candidate {candidate.id}: {len(results)} open jobs at or above {min_score}"
        )
        return results

