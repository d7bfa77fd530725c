"""Utility exports."""

from .date_parser import to_date, total_experience_years, years_between
from .helpers import (
    candidate_embedding_text,
    canonical_json,
    embedding_cache_key,
    fingerprint,
    job_embedding_text,
    match_cache_key,
    normalize_terms,
)
from .logger import get_logger

__all__ = [
    "get_logger",
    "canonical_json",
    "fingerprint",
    "embedding_cache_key",
    "match_cache_key",
    "normalize_terms",
    "job_embedding_text",
    "candidate_embedding_text",
    "to_date",
    "years_between",
    "total_experience_years",
]
