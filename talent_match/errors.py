"""Exception taxonomy for the matching engine.

Gateway failures (ProviderError, ProviderTimeout, ProviderUnavailable) are
recovered per candidate by the orchestrator. MatchingUnavailable and
MatchingDeadlineExceeded fail the whole call. CacheUnavailable never leaves
the cache adapters.
"""

from typing import Optional


class MatchEngineError(Exception):
    """Base class for all matching engine errors."""


class DimensionMismatch(MatchEngineError, ValueError):
    """Two embedding vectors of different length were compared."""

    def __init__(self, left: int, right: int) -> None:
        super().__init__(f"Embedding dimensions differ: {left} != {right}")
        self.left = left
        self.right = right


class EmbeddingError(MatchEngineError):
    """Base class for failures raised by the embedding gateway."""


class ProviderError(EmbeddingError):
    """The embedding provider call failed."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class ProviderTimeout(ProviderError):
    """The embedding provider call exceeded its time bound."""


class ProviderUnavailable(EmbeddingError):
    """The circuit is open; the provider was not called."""


class MatchingUnavailable(MatchEngineError):
    """The job's own embedding could not be obtained."""


class MatchingDeadlineExceeded(MatchEngineError):
    """The caller's deadline expired before the batch completed."""


class CacheUnavailable(MatchEngineError):
    """The cache service failed to read or write."""
