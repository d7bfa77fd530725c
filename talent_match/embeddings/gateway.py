"""Embedding gateway: vector cache, circuit breaker, bounded retries and per-call timeout."""

import asyncio
from typing import List, Optional

from talent_match.config import (
    EMBEDDING_MAX_RETRIES,
    EMBEDDING_RETRY_BACKOFF_SECONDS,
    EMBEDDING_TIMEOUT_SECONDS,
)
from talent_match.embeddings.circuit_breaker import CircuitBreaker
from talent_match.embeddings.embedding_service import EmbeddingProvider
from talent_match.errors import ProviderError, ProviderTimeout
from talent_match.services.cache_service import VectorCache
from talent_match.utils.helpers import embedding_cache_key
from talent_match.utils.logger import get_logger

logger = get_logger(__name__)


class EmbeddingGateway:
    """
    The only way the engine obtains embeddings.

    embed(text):
      1. cache hit -> return, no provider call and no breaker interaction
      2. breaker admits the call or raises ProviderUnavailable
      3. provider call bounded by `timeout`; failures are recorded with the
         breaker and retried up to `max_attempts` with linear backoff
      4. success closes the breaker and populates the cache
    """

    def __init__(
        self,
        provider: EmbeddingProvider,
        vector_cache: VectorCache,
        breaker: Optional[CircuitBreaker] = None,
        timeout: float = EMBEDDING_TIMEOUT_SECONDS,
        max_attempts: int = EMBEDDING_MAX_RETRIES,
        backoff_seconds: float = EMBEDDING_RETRY_BACKOFF_SECONDS,
    ) -> None:
        self._provider = provider
        self._cache = vector_cache
        self._breaker = breaker or CircuitBreaker()
        self._timeout = timeout
        self._max_attempts = max(1, max_attempts)
        self._backoff = backoff_seconds

    @property
    def breaker(self) -> CircuitBreaker:
        return self._breaker

    async def embed(self, text: str) -> List[float]:
        key = embedding_cache_key(text)
        cached = await self._cache.get(key)
        if cached is not None:
            return cached

        vector = await self._call_provider(text)
        await self._cache.set(key, vector)
        return vector

    async def _call_provider(self, text: str) -> List[float]:
        last_error: Optional[ProviderError] = None
        for attempt in range(1, self._max_attempts + 1):
            is_trial = self._breaker.acquire()
            try:
                vector = await asyncio.wait_for(self._provider.embed_text(text), timeout=self._timeout)
            except asyncio.CancelledError:
                if is_trial:
                    self._breaker.release_trial()
                raise
            except asyncio.TimeoutError as e:
                last_error = ProviderTimeout(f"Embedding call exceeded {self._timeout}s", cause=e)
            except ProviderError as e:
                last_error = e
            except Exception as e:
                logger.exception("Unexpected embedding provider error")
                last_error = ProviderError(f"Unexpected embedding provider error: {e}", cause=e)
            else:
                self._breaker.record_success()
                return vector

            self._breaker.record_failure()
            logger.warning(
                "Embedding attempt %s/%s failed (%s chars): %s",
                attempt,
                self._max_attempts,
                len(text),
                last_error,
            )
            if attempt < self._max_attempts:
                await asyncio.sleep(self._backoff * attempt)  # Backoff

        raise last_error
