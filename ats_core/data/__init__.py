"""
Data layer for ats-core.

Provides the in-memory entity store, data models and repository classes
for data access throughout the application.

Submodules:
- store: Thread-safe keyed collections
- models: Pydantic data models
- repositories: Read/write operations and queries per collection
- seed: Demo data
"""

from .store import (
    APPLICATIONS,
    ASSESSMENTS,
    CANDIDATES,
    JOBS,
    EntityStore,
)
from .seed import load_demo_data

__all__ = [
    "APPLICATIONS",
    "ASSESSMENTS",
    "CANDIDATES",
    "JOBS",
    "EntityStore",
    "load_demo_data",
]
