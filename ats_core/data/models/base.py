"""
Base model classes for ats-core data models.

Provides the shared configuration for all entity models. Entities are
immutable; updates build a new instance with ``model_copy(update=...)`` and
swap it into the store.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class EntityModel(BaseModel):
    """
    Base model for stored entities.

    Frozen so that a reader holding a reference never observes a later
    write; collections are stored as tuples for the same reason.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class EmbeddedModel(BaseModel):
    """
    Base model for records embedded in an entity.

    History entries and notes live inside an Application rather than in a
    collection of their own.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
    )
