"""
Loguru setup for ats-core.

Application messages go to stderr and, when ``LOG_FILE_PATH`` is set, to a
rotating file. Records bound with an ``audit_type`` (transitions, rejected
transitions, notes, candidate changes) additionally land in ``audit.log``
beside that file.
"""

import re
import sys
from typing import Any, Optional

from loguru import logger

from ats_core.utils.config import LoggingSettings, get_settings

REDACTED = "***REDACTED***"

# Matched against whole key tokens: "db_password" and "auth_token" are
# redacted, "author_id" is not.
SENSITIVE_KEYS: frozenset[str] = frozenset({
    "password", "passwd", "pwd", "secret", "token", "api_key", "apikey",
    "auth", "authorization", "credential", "credentials", "private_key",
    "access_token", "refresh_token", "ssn", "social_security",
})

_KEY_SPLIT = re.compile(r"[^a-z0-9]+")


def setup_logging(log_settings: Optional[LoggingSettings] = None) -> None:
    """Replace every loguru sink with the ones configured in ``log_settings``."""
    settings = get_settings()
    log_settings = log_settings or settings.logging

    logger.remove()

    # Variable values in tracebacks only while developing
    enable_diagnose = settings.debug and settings.environment == "development"

    if log_settings.console_output:
        logger.add(
            sys.stderr,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>",
            level=log_settings.level,
            colorize=True,
            backtrace=True,
            diagnose=enable_diagnose,
        )

    log_file = log_settings.file_path
    if log_file is None:
        logger.debug(f"Console logging at {log_settings.level}, no log file")
        return

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        format=log_settings.format,
        level=log_settings.level,
        rotation=log_settings.rotation,
        retention=log_settings.retention,
        compression="zip",
        backtrace=True,
        diagnose=enable_diagnose,
        enqueue=True,
    )
    logger.add(
        log_file.parent / "audit.log",
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {extra[audit_type]} | {message}",
        level="INFO",
        filter=lambda record: "audit_type" in record["extra"],
        rotation="1 week",
        retention="1 year",
        compression="zip",
        enqueue=True,
    )
    logger.debug(f"Logging to {log_file} at {log_settings.level}")


def get_logger(name: str) -> Any:
    """Logger bound to a component name (usually ``__name__``)."""
    return logger.bind(name=name)


def _is_sensitive(key: str) -> bool:
    tokens = [t for t in _KEY_SPLIT.split(key.lower()) if t]
    return any(
        "_".join(tokens[start:end]) in SENSITIVE_KEYS
        for start in range(len(tokens))
        for end in range(start + 1, len(tokens) + 1)
    )


def _sanitize_for_logging(data: Any) -> Any:
    """Copy of ``data`` with credential-like values replaced by REDACTED."""
    if isinstance(data, dict):
        return {
            k: REDACTED if isinstance(k, str) and _is_sensitive(k) else _sanitize_for_logging(v)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [_sanitize_for_logging(item) for item in data]
    return data


def audit_log(
    action: str,
    details: dict[str, Any],
    audit_type: str = "WORKFLOW",
) -> None:
    """
    Record one audit entry as ``"<action> | <details>"``.

    Args:
        action: AuditAction value, e.g. "application_transitioned"
        details: Facts about the change; credential-like keys are redacted
        audit_type: WORKFLOW, NOTE or CANDIDATE
    """
    logger.bind(audit_type=audit_type).info(f"{action} | {_sanitize_for_logging(details)}")


class LoggerMixin:
    """Gives engines and services a ``self.logger`` named after their class."""

    @property
    def logger(self) -> Any:
        if not hasattr(self, "_logger"):
            self._logger = get_logger(self.__class__.__name__)
        return self._logger


log = logger
