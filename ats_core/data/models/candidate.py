"""
Candidate data models for ats-core.

Defines the candidate record and the schema used to create one.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ats_core.utils.constants import CandidateStatus

from .base import EntityModel, utc_now


def _clean_skills(skills: list[str] | tuple[str, ...]) -> tuple[str, ...]:
    """Strip skill names and drop blanks, keeping the given order and spelling."""
    return tuple(s.strip() for s in skills if s and s.strip())


class Candidate(EntityModel):
    """
    A person in the talent pool.

    Skills keep their original spelling and order; matching compares them
    case-insensitively.
    """

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    email: str = ""
    phone: Optional[str] = None
    location: str = ""

    skills: tuple[str, ...] = ()
    years_of_experience: int = Field(default=0, ge=0)
    current_role: str = ""
    current_company: str = ""

    status: CandidateStatus = CandidateStatus.ACTIVE
    summary: str = ""
    linkedin_url: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("skills", mode="before")
    @classmethod
    def normalize_skills(cls, v: object) -> object:
        """Accept any list of skill names and store them as a tuple."""
        if isinstance(v, (list, tuple)):
            return _clean_skills(v)
        return v

    @property
    def skill_set(self) -> frozenset[str]:
        """Lowercase skill names for case-insensitive comparison."""
        return frozenset(s.lower() for s in self.skills)

    def has_skill(self, skill: str) -> bool:
        """Check whether the candidate lists a skill (case-insensitive)."""
        return skill.strip().lower() in self.skill_set


class CandidateCreate(BaseModel):
    """Schema for adding a new candidate."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    email: str = ""
    phone: Optional[str] = None
    location: str = ""
    skills: list[str] = Field(default_factory=list)
    years_of_experience: int = Field(default=0, ge=0)
    current_role: str = ""
    current_company: str = ""
    status: CandidateStatus = CandidateStatus.ACTIVE
    summary: str = ""
    linkedin_url: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_candidate(self) -> Candidate:
        """Build the stored entity from this request."""
        data = self.model_dump(exclude_none=True)
        return Candidate(**data)
