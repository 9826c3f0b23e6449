"""
Job requisition data models for ats-core.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from ats_core.utils.constants import EmploymentType, JobStatus

from .base import EntityModel, utc_now
from .candidate import _clean_skills


class Job(EntityModel):
    """
    An open or historical job requisition.

    Required skills gate the bulk of the match score; preferred skills add a
    smaller bonus.
    """

    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=200)
    department: str = ""
    location: str = ""
    employment_type: EmploymentType = EmploymentType.FULL_TIME
    status: JobStatus = JobStatus.OPEN
    description: str = ""

    required_skills: tuple[str, ...] = ()
    preferred_skills: tuple[str, ...] = ()

    salary_range: str = ""
    hiring_manager_id: Optional[str] = None
    hiring_manager_name: Optional[str] = None
    opened_at: datetime = Field(default_factory=utc_now)

    @field_validator("required_skills", "preferred_skills", mode="before")
    @classmethod
    def normalize_skills(cls, v: object) -> object:
        if isinstance(v, (list, tuple)):
            return _clean_skills(v)
        return v

    @property
    def is_open(self) -> bool:
        return self.status == JobStatus.OPEN

    @property
    def all_skills(self) -> tuple[str, ...]:
        """Required skills followed by preferred skills."""
        return self.required_skills + self.preferred_skills
