"""Shared fixtures: fake clock, scripted embedding providers and sample records."""

import asyncio
from datetime import date
from typing import Callable, List, Optional

import pytest

from talent_match.embeddings.circuit_breaker import CircuitBreaker
from talent_match.embeddings.embedding_service import EmbeddingProvider
from talent_match.embeddings.gateway import EmbeddingGateway
from talent_match.errors import CacheUnavailable, ProviderError
from talent_match.schemas.candidate import CandidateProfile, Education, WorkExperience
from talent_match.schemas.job import Job, JobRequirements
from talent_match.services.cache_service import InMemoryCacheService, VectorCache

FIXED_TODAY = date(2024, 6, 1)


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class SpyProvider(EmbeddingProvider):
    """Counts calls; fails for texts matching `fail_when`, optionally sleeps first."""

    def __init__(
        self,
        vector: Optional[List[float]] = None,
        fail_when: Callable[[str], bool] = lambda text: False,
        delay: float = 0.0,
    ) -> None:
        self.vector = vector or [1.0, 0.0, 0.0]
        self.fail_when = fail_when
        self.delay = delay
        self.calls: List[str] = []

    async def embed_text(self, text: str) -> List[float]:
        self.calls.append(text)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_when(text):
            raise ProviderError("provider down")
        return list(self.vector)


class FailingCache(InMemoryCacheService):
    async def get(self, key):
        raise CacheUnavailable("connection refused")

    async def set_with_ttl(self, key, value, ttl_seconds):
        raise CacheUnavailable("connection refused")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_gateway(clock):
    def _make(provider, threshold=5, reset_timeout=30.0, max_attempts=1, timeout=1.0, cache=None, cache_ttl=3600):
        breaker = CircuitBreaker(failure_threshold=threshold, reset_timeout=reset_timeout, clock=clock)
        return EmbeddingGateway(
            provider,
            VectorCache(cache if cache is not None else InMemoryCacheService(clock=clock), ttl_seconds=cache_ttl),
            breaker=breaker,
            timeout=timeout,
            max_attempts=max_attempts,
            backoff_seconds=0.0,
        )

    return _make


@pytest.fixture
def react_job() -> Job:
    return Job(
        id="job-1",
        title="Frontend Engineer",
        description="Build React and TypeScript interfaces for the recruiting dashboard.",
        requirements=JobRequirements(
            years_experience=5,
            required_skills=["React", "TypeScript"],
            qualifications=["BSc Computer Science"],
        ),
        skills=["React", "TypeScript", "CSS"],
    )


@pytest.fixture
def candidate_a() -> CandidateProfile:
    return CandidateProfile(
        id="cand-a",
        full_name="Candidate A",
        experience=[
            WorkExperience(
                company="Acme",
                title="Frontend Developer",
                start_date=date(2019, 6, 1),
                end_date=None,
                skills_used=["React", "TypeScript"],
            )
        ],
        education=[Education(institution="State University", degree="BSc Computer Science")],
        skills=["React", "TypeScript", "Node.js"],
    )
