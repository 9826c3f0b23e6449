"""
Utility modules for ats-core.

This package contains shared utilities used across the application:
- config: Configuration management
- constants: Enums and workflow/scoring tables
- exceptions: Error hierarchy
- logger: Logging infrastructure
"""

from ats_core.utils.config import (
    AppSettings,
    LoggingSettings,
    MatchingSettings,
    StoreSettings,
    WorkflowSettings,
    get_settings,
    reload_settings,
)
from ats_core.utils.constants import (
    APP_NAME,
    VERSION,
    ApplicationSource,
    ApplicationStatus,
    AssessmentType,
    AuditAction,
    CandidateStatus,
    EmploymentType,
    JobStatus,
    MatchRecommendation,
    SlaState,
    parse_enum,
)
from ats_core.utils.exceptions import (
    ATSError,
    InvalidArgumentError,
    InvalidTransitionError,
    InvariantViolationError,
    NotFoundError,
)
from ats_core.utils.logger import (
    setup_logging,
    get_logger,
    audit_log,
    LoggerMixin,
    log,
)

__all__ = [
    # Config
    "AppSettings",
    "LoggingSettings",
    "MatchingSettings",
    "StoreSettings",
    "WorkflowSettings",
    "get_settings",
    "reload_settings",
    # Constants
    "APP_NAME",
    "VERSION",
    "ApplicationSource",
    "ApplicationStatus",
    "AssessmentType",
    "AuditAction",
    "CandidateStatus",
    "EmploymentType",
    "JobStatus",
    "MatchRecommendation",
    "SlaState",
    "parse_enum",
    # Exceptions
    "ATSError",
    "InvalidArgumentError",
    "InvalidTransitionError",
    "InvariantViolationError",
    "NotFoundError",
    # Logger
    "setup_logging",
    "get_logger",
    "audit_log",
    "LoggerMixin",
    "log",
]
