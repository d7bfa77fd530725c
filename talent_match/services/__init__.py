"""Service exports."""

from .cache_service import CacheService, InMemoryCacheService, ResultCache, VectorCache
from .candidate_source import CandidateSource, InMemoryCandidateSource, JsonlCandidateSource

__all__ = [
    "CacheService",
    "InMemoryCacheService",
    "VectorCache",
    "ResultCache",
    "CandidateSource",
    "InMemoryCandidateSource",
    "JsonlCandidateSource",
]
