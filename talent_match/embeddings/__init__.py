"""Embedding layer: providers, circuit breaker and the caching gateway."""

from .circuit_breaker import CircuitBreaker, CircuitState
from .embedding_service import EmbeddingProvider, get_embedding_provider
from .gateway import EmbeddingGateway

__all__ = [
    "CircuitBreaker",
    "CircuitState",
    "EmbeddingGateway",
    "EmbeddingProvider",
    "get_embedding_provider",
]
