"""Candidate-job matching engine."""

from talent_match.errors import (
    CacheUnavailable,
    DimensionMismatch,
    MatchingDeadlineExceeded,
    MatchingUnavailable,
    ProviderError,
    ProviderTimeout,
    ProviderUnavailable,
)
from talent_match.ranking import MatchingOrchestrator, build_orchestrator
from talent_match.schemas import CandidateMatch, CandidateProfile, Job, MatchOptions, MatchWeightings

__version__ = "0.1.0"

__all__ = [
    "CacheUnavailable",
    "CandidateMatch",
    "CandidateProfile",
    "DimensionMismatch",
    "Job",
    "MatchOptions",
    "MatchWeightings",
    "MatchingDeadlineExceeded",
    "MatchingOrchestrator",
    "MatchingUnavailable",
    "ProviderError",
    "ProviderTimeout",
    "ProviderUnavailable",
    "build_orchestrator",
]
