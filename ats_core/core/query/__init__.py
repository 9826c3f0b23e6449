"""Read operations and reports over the entity store."""

from .query_service import PipelineStats, QueryService

__all__ = [
    "PipelineStats",
    "QueryService",
]
