"""
Repositories for ats-core data access.

This module provides repository classes for all store collections,
implementing the repository pattern over a shared EntityStore.
"""

# Base repository
from .base import BaseRepository

# Entity repositories
from .candidate_repository import CandidateRepository
from .job_repository import JobRepository
from .application_repository import ApplicationRepository
from .assessment_repository import AssessmentRepository

__all__ = [
    "BaseRepository",
    "CandidateRepository",
    "JobRepository",
    "ApplicationRepository",
    "AssessmentRepository",
]
