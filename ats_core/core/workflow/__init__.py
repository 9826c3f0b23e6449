"""Application workflow state machine and SLA tracking."""

from .workflow_engine import (
    SlaStatus,
    StageDuration,
    WorkflowEngine,
)

__all__ = [
    "SlaStatus",
    "StageDuration",
    "WorkflowEngine",
]
