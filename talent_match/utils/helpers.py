"""Helper utilities: fingerprints, term normalization and embedding texts."""

import hashlib
import json
from typing import Any, Iterable, Set

from talent_match.schemas.candidate import CandidateProfile
from talent_match.schemas.job import Job
from talent_match.schemas.match import MatchOptions

EMBEDDING_KEY_PREFIX = "embedding"
MATCH_KEY_PREFIX = "job_matches"


def canonical_json(payload: Any) -> str:
    """Compact, key-sorted JSON so equal payloads always serialize identically."""
    return json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def fingerprint(text: str) -> str:
    """SHA-256 hex digest of text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def embedding_cache_key(text: str) -> str:
    return f"{EMBEDDING_KEY_PREFIX}:{fingerprint(text)}"


def match_cache_key(job: Job, options: MatchOptions) -> str:
    """Result-cache key over job id, requirements and options (force_refresh excluded)."""
    payload = {
        "job_id": job.id,
        "requirements": job.requirements.model_dump(mode="json"),
        "options": options.model_dump(mode="json", exclude={"force_refresh"}),
    }
    return f"{MATCH_KEY_PREFIX}:{fingerprint(canonical_json(payload))}"


def normalize_terms(terms: Iterable[str]) -> Set[str]:
    """Lowercased, stripped, non-empty set of skills or qualifications."""
    return set((t or "").strip().lower() for t in terms if (t or "").strip())


def job_embedding_text(job: Job) -> str:
    """Build a single text for embedding from job."""
    return canonical_json(
        {
            "description": job.description,
            "requirements": job.requirements.model_dump(mode="json"),
            "skills": list(job.skills),
        }
    )


def candidate_embedding_text(candidate: CandidateProfile) -> str:
    """Build a single text for embedding from candidate profile."""
    return canonical_json(
        {
            "experience": [e.model_dump(mode="json") for e in candidate.experience],
            "education": [e.model_dump(mode="json") for e in candidate.education],
            "skills": list(candidate.skills),
        }
    )
