"""
Configuration management for ats-core.

Uses Pydantic Settings for type-safe configuration with environment variable support.
"""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class WorkflowSettings(BaseSettings):
    """Application workflow configuration."""

    model_config = SettingsConfigDict(env_prefix="WORKFLOW_")

    # Reject transitions that are not in the workflow table
    enforce_transitions: bool = True

    default_stuck_threshold_days: int = Field(default=7, ge=0)


class MatchingSettings(BaseSettings):
    """Candidate-job matching configuration."""

    model_config = SettingsConfigDict(env_prefix="MATCH_")

    clamp_score: bool = True
    default_min_score: int = Field(default=50, ge=0, le=100)


class StoreSettings(BaseSettings):
    """In-memory entity store configuration."""

    model_config = SettingsConfigDict(env_prefix="STORE_")

    seed_demo_data: bool = False
    default_page_size: int = Field(default=20, ge=1)
    max_page_size: int = Field(default=100, ge=1)

    @field_validator("max_page_size")
    @classmethod
    def validate_max_page_size(cls, v: int, info: ValidationInfo) -> int:
        """Ensure the page size bound is not below the default page size."""
        default = info.data.get("default_page_size")
        if default is not None and v < default:
            raise ValueError("max_page_size must be >= default_page_size")
        return v


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
    file_path: Optional[Path] = None
    rotation: str = "10 MB"
    retention: str = "30 days"
    console_output: bool = True


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    name: str = "ats-core"
    version: str = "0.1.0"
    description: str = "Hiring pipeline domain service"
    debug: bool = False

    # Environment
    environment: Literal["development", "production", "testing"] = "development"

    # Nested settings
    workflow: WorkflowSettings = Field(default_factory=WorkflowSettings)
    matching: MatchingSettings = Field(default_factory=MatchingSettings)
    store: StoreSettings = Field(default_factory=StoreSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# Global settings instance (singleton pattern)
_settings: AppSettings | None = None


def get_settings() -> AppSettings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings


def reload_settings() -> AppSettings:
    """Force reload settings from environment."""
    global _settings
    _settings = AppSettings()
    return _settings
