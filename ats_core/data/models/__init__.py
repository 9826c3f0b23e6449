"""
Pydantic data models for ats-core.

All entity models are immutable; the store swaps whole instances on update.
"""

# Base models
from .base import EmbeddedModel, EntityModel, utc_now

# Candidate models
from .candidate import Candidate, CandidateCreate

# Job models
from .job import Job

# Application models
from .application import Application, RecruiterNote, StatusHistoryEntry

# Assessment models
from .assessment import AssessmentResult, interpret_percentile

__all__ = [
    # Base
    "EmbeddedModel",
    "EntityModel",
    "utc_now",
    # Candidate
    "Candidate",
    "CandidateCreate",
    # Job
    "Job",
    # Application
    "Application",
    "RecruiterNote",
    "StatusHistoryEntry",
    # Assessment
    "AssessmentResult",
    "interpret_percentile",
]
