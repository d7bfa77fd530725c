"""Matching orchestrator: rank the candidates of one job.

Flow:
    job + options
      ├─ result cache hit (unless force_refresh)      → cached ranking
      ├─ gateway.embed(job text)                      → job vector (failure: MatchingUnavailable)
      ├─ candidate_source.iter_candidates(job.id)     → pulled one at a time, at most
      │       ↓                                          `concurrency` being scored at once
      ├─ gateway.embed(candidate text)                → skipped on EmbeddingError
      ├─ calculate_similarity + MatchScorer.score     → kept if score >= threshold
      ├─ sort (score desc, candidate id asc), truncate to max_results
      └─ result cache write                           → ranking
"""

import asyncio
from dataclasses import dataclass
from typing import List, Optional, Set

from talent_match.config import MATCH_CONCURRENCY
from talent_match.embeddings.gateway import EmbeddingGateway
from talent_match.errors import EmbeddingError, MatchingDeadlineExceeded, MatchingUnavailable
from talent_match.ranking.match_scorer import MatchScorer
from talent_match.ranking.similarity import calculate_similarity
from talent_match.schemas.candidate import CandidateProfile
from talent_match.schemas.job import Job
from talent_match.schemas.match import CandidateMatch, MatchOptions
from talent_match.services.cache_service import ResultCache
from talent_match.services.candidate_source import CandidateSource
from talent_match.utils.helpers import candidate_embedding_text, job_embedding_text, match_cache_key
from talent_match.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class _BatchStats:
    scanned: int = 0
    skipped: int = 0
    retained: int = 0


def rank_matches(matches: List[CandidateMatch], max_results: int) -> List[CandidateMatch]:
    """Sort by score descending, ties by candidate id ascending, then truncate."""
    return sorted(matches, key=lambda m: (-m.score, m.candidate_id))[:max_results]


class MatchingOrchestrator:
    def __init__(
        self,
        gateway: EmbeddingGateway,
        candidate_source: CandidateSource,
        result_cache: ResultCache,
        scorer: Optional[MatchScorer] = None,
        concurrency: int = MATCH_CONCURRENCY,
    ) -> None:
        self._gateway = gateway
        self._candidate_source = candidate_source
        self._result_cache = result_cache
        self._scorer = scorer or MatchScorer()
        self._concurrency = max(1, concurrency)

    async def find_matches(
        self,
        job: Job,
        options: Optional[MatchOptions] = None,
        timeout: Optional[float] = None,
    ) -> List[CandidateMatch]:
        """
        Return the ranked matches for job.
        timeout bounds the whole batch; on expiry nothing is returned and
        MatchingDeadlineExceeded is raised.
        """
        options = options or MatchOptions()
        cache_key = match_cache_key(job, options)

        if not options.force_refresh:
            cached = await self._result_cache.get(cache_key)
            if cached is not None:
                logger.info("Serving %s cached matches for job %s", len(cached), job.id)
                return cached

        try:
            matches = await asyncio.wait_for(self._compute(job, options), timeout=timeout)
        except asyncio.TimeoutError as e:
            logger.error("Matching for job %s exceeded deadline of %ss", job.id, timeout)
            raise MatchingDeadlineExceeded(f"Matching for job {job.id} exceeded {timeout}s") from e

        await self._result_cache.set(cache_key, matches)
        return matches

    async def _compute(self, job: Job, options: MatchOptions) -> List[CandidateMatch]:
        try:
            job_vector = await self._gateway.embed(job_embedding_text(job))
        except EmbeddingError as e:
            logger.error("Job embedding failed for %s: %s", job.id, e)
            raise MatchingUnavailable(f"Cannot embed job {job.id}: {e}") from e

        stats = _BatchStats()
        retained: List[CandidateMatch] = []
        pending: Set[asyncio.Task] = set()
        try:
            async for candidate in self._candidate_source.iter_candidates(job.id):
                if len(pending) >= self._concurrency:
                    done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
                    retained = self._collect(done, retained, options, stats)
                stats.scanned += 1
                pending.add(
                    asyncio.create_task(self._score_candidate(job, candidate, job_vector, options, stats))
                )
            if pending:
                done, pending = await asyncio.wait(pending)
                retained = self._collect(done, retained, options, stats)
        finally:
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        ranked = rank_matches(retained, options.max_results)
        logger.info(
            "Matching finished: job=%s scanned=%s skipped=%s retained=%s returned=%s",
            job.id,
            stats.scanned,
            stats.skipped,
            stats.retained,
            len(ranked),
        )
        return ranked

    def _collect(
        self,
        done: Set[asyncio.Task],
        retained: List[CandidateMatch],
        options: MatchOptions,
        stats: _BatchStats,
    ) -> List[CandidateMatch]:
        # Every finished task has its exception retrieved before the first is raised
        errors = [task.exception() for task in done if task.exception() is not None]
        if errors:
            raise errors[0]
        for task in done:
            match = task.result()
            if match is not None and match.score >= options.threshold:
                retained.append(match)
                stats.retained += 1
        # Keep memory bounded by the result size, not the candidate population
        if len(retained) > 2 * options.max_results:
            retained = rank_matches(retained, options.max_results)
        return retained

    async def _score_candidate(
        self,
        job: Job,
        candidate: CandidateProfile,
        job_vector: List[float],
        options: MatchOptions,
        stats: _BatchStats,
    ) -> Optional[CandidateMatch]:
        try:
            candidate_vector = await self._gateway.embed(candidate_embedding_text(candidate))
        except EmbeddingError as e:
            stats.skipped += 1
            logger.warning("Skipping candidate %s for job %s: %s", candidate.id, job.id, e)
            return None

        similarity = calculate_similarity(job_vector, candidate_vector)
        return self._scorer.score(
            job,
            candidate,
            similarity,
            options.weightings,
            required_skills=options.required_skills,
        )


def build_orchestrator(
    candidate_source: CandidateSource,
    provider: Optional[str] = None,
) -> MatchingOrchestrator:
    """Wire the configured provider, one shared in-memory cache and a fresh breaker."""
    from talent_match.embeddings.embedding_service import get_embedding_provider
    from talent_match.services.cache_service import InMemoryCacheService, VectorCache

    cache = InMemoryCacheService()
    gateway = EmbeddingGateway(get_embedding_provider(provider), VectorCache(cache))
    return MatchingOrchestrator(gateway, candidate_source, ResultCache(cache))
