"""
Exception hierarchy for ats-core.

Lookups in the hot query paths return ``None`` for absent ids; these
exceptions cover argument validation, rejected workflow transitions and
internal consistency failures.
"""

from typing import Any, Optional


class ATSError(Exception):
    """Base class for all ats-core errors."""


class NotFoundError(ATSError):
    """A referenced entity does not exist."""

    def __init__(self, entity: str, entity_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class InvalidArgumentError(ATSError, ValueError):
    """An argument is malformed or out of range."""

    def __init__(self, message: str, argument: Optional[str] = None, value: Any = None) -> None:
        self.argument = argument
        self.value = value
        super().__init__(message)


class InvalidTransitionError(InvalidArgumentError):
    """A status change is not permitted by the workflow table."""

    def __init__(self, application_id: str, from_status: Any, to_status: Any) -> None:
        self.application_id = application_id
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Invalid transition for application {application_id}: "
            f"{_name(from_status)} -> {_name(to_status)}",
            argument="new_status",
            value=to_status,
        )


class InvariantViolationError(ATSError):
    """Internal state is inconsistent; indicates a bug in the core."""


def _name(value: Any) -> str:
    return getattr(value, "value", str(value))
