"""Candidate-job matching engine module."""

from .matching_engine import (
    MatchingEngine,
    MatchResult,
    round_half_up,
)

__all__ = [
    "MatchingEngine",
    "MatchResult",
    "round_half_up",
]
