"""Configuration loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env: try package dir then project root
_base = Path(__file__).resolve().parent
for _env_path in (_base / ".env", _base.parent / ".env"):
    if load_dotenv(_env_path):
        break
load_dotenv()  # also allow process env


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    return float(raw) if raw not in (None, "") else default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    return int(raw) if raw not in (None, "") else default


# API keys – never hardcode
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")

# Embedding provider: "openai" | "http" | "sentence_transformers"
EMBEDDING_PROVIDER: str = os.getenv("EMBEDDING_PROVIDER", "openai")
OPENAI_EMBEDDING_MODEL: str = os.getenv("OPENAI_EMBEDDING_MODEL", "text-embedding-ada-002")
SENTENCE_TRANSFORMERS_MODEL: str = os.getenv("SENTENCE_TRANSFORMERS_MODEL", "all-MiniLM-L6-v2")
EMBEDDING_ENDPOINT_URL: str = os.getenv("EMBEDDING_ENDPOINT_URL", "")

# Embedding gateway: per-call timeout, retries and cache
EMBEDDING_TIMEOUT_SECONDS: float = _env_float("EMBEDDING_TIMEOUT_SECONDS", 10.0)
EMBEDDING_MAX_RETRIES: int = _env_int("EMBEDDING_MAX_RETRIES", 3)
EMBEDDING_RETRY_BACKOFF_SECONDS: float = _env_float("EMBEDDING_RETRY_BACKOFF_SECONDS", 1.0)
EMBEDDING_CACHE_TTL_SECONDS: int = _env_int("EMBEDDING_CACHE_TTL_SECONDS", 3600)

# Circuit breaker
CIRCUIT_FAILURE_THRESHOLD: int = _env_int("CIRCUIT_FAILURE_THRESHOLD", 5)
CIRCUIT_RESET_TIMEOUT_SECONDS: float = _env_float("CIRCUIT_RESET_TIMEOUT_SECONDS", 30.0)

# Matching defaults (overridable per request through MatchOptions)
MATCH_SIMILARITY_THRESHOLD: float = _env_float("MATCH_SIMILARITY_THRESHOLD", 0.85)
MATCH_MAX_RESULTS: int = _env_int("MATCH_MAX_RESULTS", 50)
MATCH_CACHE_TTL_SECONDS: int = _env_int("MATCH_CACHE_TTL_SECONDS", 3600)

# In-process cache: upper bound on stored entries (vectors and result lists)
CACHE_MAX_ENTRIES: int = _env_int("CACHE_MAX_ENTRIES", 10000)

# Concurrency
MATCH_CONCURRENCY: int = _env_int("MATCH_CONCURRENCY", 5)  # Max candidates scored at once

# Weights for the composite score; not normalized, callers own the sum
DEFAULT_WEIGHTINGS: dict = {
    "skills": 0.4,
    "experience": 0.3,
    "education": 0.2,
    "description": 0.1,
}

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
