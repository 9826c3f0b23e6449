"""
Application-wide constants for ats-core.

This module contains the enums and fixed lookup tables used throughout the
application: workflow transitions, stage SLAs, scoring weights and
candidate-facing stage guidance. The tables are read-only mappings built once
at import time.
"""

from enum import Enum
from types import MappingProxyType
from typing import Final, Mapping, TypeVar

from ats_core.utils.exceptions import InvalidArgumentError


# =============================================================================
# Application Constants
# =============================================================================

APP_NAME: Final[str] = "ats-core"
VERSION: Final[str] = "0.1.0"

# Actor recorded on history entries written by the service itself
SYSTEM_ACTOR: Final[str] = "system"


# =============================================================================
# Enums
# =============================================================================


class CandidateStatus(str, Enum):
    """Lifecycle status of a candidate record."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    HIRED = "HIRED"
    BLACKLISTED = "BLACKLISTED"


class JobStatus(str, Enum):
    """Status of a job requisition."""

    OPEN = "OPEN"
    ON_HOLD = "ON_HOLD"
    FILLED = "FILLED"
    CLOSED = "CLOSED"


class EmploymentType(str, Enum):
    """Type of employment for the position."""

    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    CONTRACT = "CONTRACT"
    INTERNSHIP = "INTERNSHIP"


class ApplicationStatus(str, Enum):
    """Workflow status of an application."""

    RECEIVED = "RECEIVED"
    SCREENING = "SCREENING"
    PHONE_INTERVIEW = "PHONE_INTERVIEW"
    TECHNICAL_INTERVIEW = "TECHNICAL_INTERVIEW"
    FINAL_INTERVIEW = "FINAL_INTERVIEW"
    OFFER_EXTENDED = "OFFER_EXTENDED"
    OFFER_ACCEPTED = "OFFER_ACCEPTED"
    OFFER_DECLINED = "OFFER_DECLINED"
    HIRED = "HIRED"
    REJECTED = "REJECTED"
    WITHDRAWN = "WITHDRAWN"


class ApplicationSource(str, Enum):
    """Channel an application came in through."""

    LINKEDIN = "LINKEDIN"
    REFERRAL = "REFERRAL"
    DIRECT = "DIRECT"
    AGENCY = "AGENCY"
    JOB_BOARD = "JOB_BOARD"
    CAREER_SITE = "CAREER_SITE"


class AssessmentType(str, Enum):
    """Kinds of assessment a candidate can complete."""

    CODING_CHALLENGE = "CODING_CHALLENGE"
    SYSTEM_DESIGN = "SYSTEM_DESIGN"
    TECHNICAL_SCREENING = "TECHNICAL_SCREENING"
    BEHAVIORAL = "BEHAVIORAL"
    COGNITIVE = "COGNITIVE"
    TAKE_HOME_PROJECT = "TAKE_HOME_PROJECT"


class SlaState(str, Enum):
    """Position of an application relative to its stage SLA."""

    ON_TRACK = "ON_TRACK"
    AT_LIMIT = "AT_LIMIT"
    OVERDUE = "OVERDUE"


class AuditAction(str, Enum):
    """Types of actions that are written to the audit log."""

    CANDIDATE_ADDED = "candidate_added"
    CANDIDATE_STATUS_CHANGED = "candidate_status_changed"
    APPLICATION_TRANSITIONED = "application_transitioned"
    TRANSITION_REJECTED = "transition_rejected"
    NOTE_ADDED = "note_added"


E = TypeVar("E", bound=Enum)


def parse_enum(enum_cls: type[E], value: "E | str", argument: str = "value") -> E:
    """
    Accept an enum member or its name (case-insensitive).

    Raises:
        InvalidArgumentError: if the name is not a member of ``enum_cls``
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        key = value.strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return enum_cls[key]
        except KeyError:
            pass
    allowed = ", ".join(member.name for member in enum_cls)
    raise InvalidArgumentError(
        f"Invalid {argument}: {value!r} (expected one of {allowed})",
        argument=argument,
        value=value,
    )


# =============================================================================
# Workflow
# =============================================================================

INITIAL_STATUS: Final[ApplicationStatus] = ApplicationStatus.RECEIVED

TERMINAL_STATUSES: Final[frozenset[ApplicationStatus]] = frozenset(
    {
        ApplicationStatus.HIRED,
        ApplicationStatus.REJECTED,
        ApplicationStatus.WITHDRAWN,
        ApplicationStatus.OFFER_DECLINED,
    }
)

# Statuses that move an application into a new interview round
INTERVIEW_ROUND_STATUSES: Final[frozenset[ApplicationStatus]] = frozenset(
    {
        ApplicationStatus.TECHNICAL_INTERVIEW,
        ApplicationStatus.FINAL_INTERVIEW,
    }
)

_S = ApplicationStatus

WORKFLOW_TRANSITIONS: Final[Mapping[ApplicationStatus, tuple[ApplicationStatus, ...]]] = MappingProxyType(
    {
        _S.RECEIVED: (_S.SCREENING, _S.REJECTED, _S.WITHDRAWN),
        _S.SCREENING: (_S.PHONE_INTERVIEW, _S.REJECTED, _S.WITHDRAWN),
        _S.PHONE_INTERVIEW: (_S.TECHNICAL_INTERVIEW, _S.REJECTED, _S.WITHDRAWN),
        _S.TECHNICAL_INTERVIEW: (_S.FINAL_INTERVIEW, _S.REJECTED, _S.WITHDRAWN),
        _S.FINAL_INTERVIEW: (_S.OFFER_EXTENDED, _S.REJECTED, _S.WITHDRAWN),
        _S.OFFER_EXTENDED: (_S.OFFER_ACCEPTED, _S.OFFER_DECLINED, _S.WITHDRAWN),
        _S.OFFER_ACCEPTED: (_S.HIRED,),
    }
)

# Expected maximum days per stage; statuses not listed have no SLA
STAGE_SLA_DAYS: Final[Mapping[ApplicationStatus, int]] = MappingProxyType(
    {
        _S.RECEIVED: 2,
        _S.SCREENING: 5,
        _S.PHONE_INTERVIEW: 3,
        _S.TECHNICAL_INTERVIEW: 7,
        _S.FINAL_INTERVIEW: 5,
        _S.OFFER_EXTENDED: 5,
    }
)

# Candidate-facing guidance per stage
STAGE_GUIDANCE: Final[Mapping[ApplicationStatus, Mapping[str, object]]] = MappingProxyType(
    {
        _S.RECEIVED: MappingProxyType({
            "what_is_happening": "Your application has been submitted and is queued for recruiter review.",
            "candidate_action": "No action needed, sit tight.",
            "typical_wait": "3-5 business days",
            "possible_next": ("Move to Screening", "Rejection if not a profile fit"),
        }),
        _S.SCREENING: MappingProxyType({
            "what_is_happening": "A recruiter is reviewing your profile against the job requirements.",
            "candidate_action": "Ensure your profile is current. You may receive an email to schedule a call.",
            "typical_wait": "5-7 business days",
            "possible_next": ("Phone Interview invitation", "Rejection with feedback"),
        }),
        _S.PHONE_INTERVIEW: MappingProxyType({
            "what_is_happening": "You are in or have completed a phone screen with the recruiter.",
            "candidate_action": "Prepare a concise pitch: role motivation, key highlights, availability.",
            "typical_wait": "3-5 business days after call",
            "possible_next": ("Technical Interview / Assessment", "Rejection"),
        }),
        _S.TECHNICAL_INTERVIEW: MappingProxyType({
            "what_is_happening": "You are in the technical evaluation phase.",
            "candidate_action": "Review fundamentals relevant to the job's required skills.",
            "typical_wait": "7-10 business days",
            "possible_next": ("Final Interview with hiring team", "Rejection with technical feedback"),
        }),
        _S.FINAL_INTERVIEW: MappingProxyType({
            "what_is_happening": "You are meeting the hiring team and leadership stakeholders.",
            "candidate_action": "Prepare STAR stories, questions about the team, and salary expectations.",
            "typical_wait": "5-7 business days",
            "possible_next": ("Offer Extended", "Rejection"),
        }),
        _S.OFFER_EXTENDED: MappingProxyType({
            "what_is_happening": "A formal offer has been made.",
            "candidate_action": "Review compensation and benefits. Respond within the deadline.",
            "typical_wait": "Your decision",
            "possible_next": ("Accept, then Hired", "Decline, process closes"),
        }),
        _S.HIRED: MappingProxyType({
            "what_is_happening": "Offer accepted and position filled.",
            "candidate_action": "Complete onboarding paperwork and prepare for your start date.",
            "typical_wait": "N/A",
            "possible_next": (),
        }),
        _S.REJECTED: MappingProxyType({
            "what_is_happening": "Your application was not selected to move forward at this time.",
            "candidate_action": "Request feedback if not provided. You may reapply after 6 months.",
            "typical_wait": "N/A",
            "possible_next": ("Reapply after 6 months", "Apply to a different role"),
        }),
    }
)

DEFAULT_STAGE_GUIDANCE: Final[Mapping[str, object]] = MappingProxyType(
    {
        "candidate_action": "Contact your recruiter for details.",
        "typical_wait": "Varies",
        "possible_next": (),
    }
)

del _S


# =============================================================================
# Scoring Constants
# =============================================================================

# Maximum points contributed by each component of the match score
SCORING_WEIGHTS: Final[Mapping[str, float]] = MappingProxyType(
    {
        "required_skills": 70.0,
        "preferred_skills": 20.0,
        "experience": 10.0,
    }
)

# Required-skill component when the job lists no required skills
EMPTY_REQUIRED_SCORE: Final[float] = 100.0

# Years of experience at which the experience component saturates
EXPERIENCE_CAP_YEARS: Final[int] = 10

MAX_MATCH_SCORE: Final[int] = 100

RECOMMENDATION_THRESHOLDS: Final[Mapping[str, int]] = MappingProxyType(
    {
        "strong": 70,
        "partial": 50,
    }
)


class MatchRecommendation(str, Enum):
    """Categorical recommendation derived from the overall match score."""

    STRONG_MATCH = "STRONG_MATCH"
    PARTIAL_MATCH = "PARTIAL_MATCH"
    WEAK_MATCH = "WEAK_MATCH"

    @classmethod
    def from_score(cls, score: int) -> "MatchRecommendation":
        """Convert an overall score to a recommendation."""
        if score >= RECOMMENDATION_THRESHOLDS["strong"]:
            return cls.STRONG_MATCH
        elif score >= RECOMMENDATION_THRESHOLDS["partial"]:
            return cls.PARTIAL_MATCH
        return cls.WEAK_MATCH


# Percentile floors and their plain-language reading, highest first
PERCENTILE_LABELS: Final[tuple[tuple[int, str], ...]] = (
    (90, "Top 10%, exceptional"),
    (75, "Top 25%, strong"),
    (50, "Above average"),
    (25, "Below average, room to grow"),
    (0, "Bottom 25%, significant improvement needed"),
)
