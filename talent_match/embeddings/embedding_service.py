"""Embedding providers: OpenAI, a generic HTTP inference endpoint, or local SentenceTransformers."""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, List, Optional

import httpx

from talent_match.config import (
    EMBEDDING_ENDPOINT_URL,
    EMBEDDING_PROVIDER,
    EMBEDDING_TIMEOUT_SECONDS,
    OPENAI_API_KEY,
    OPENAI_EMBEDDING_MODEL,
    SENTENCE_TRANSFORMERS_MODEL,
)
from talent_match.errors import ProviderError, ProviderTimeout
from talent_match.utils.logger import get_logger

logger = get_logger(__name__)


def _clean(text: str) -> str:
    return (text or "").strip() or " "


class EmbeddingProvider(ABC):
    """Remote or local text -> vector inference."""

    @abstractmethod
    async def embed_text(self, text: str) -> List[float]:
        """Embed a single text. Raises ProviderError on failure."""
        ...


class OpenAIEmbeddingProvider(EmbeddingProvider):
    """OpenAI embeddings API (e.g. text-embedding-ada-002)."""

    def __init__(
        self,
        api_key: str = OPENAI_API_KEY,
        model: str = OPENAI_EMBEDDING_MODEL,
        client: Any = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._client = client

    def _get_client(self):
        if self._client is None:
            from openai import AsyncOpenAI
            # Retries belong to the gateway, not the SDK
            self._client = AsyncOpenAI(api_key=self._api_key, max_retries=0)
        return self._client

    async def embed_text(self, text: str) -> List[float]:
        from openai import APITimeoutError, OpenAIError

        try:
            resp = await self._get_client().embeddings.create(model=self._model, input=[_clean(text)])
        except APITimeoutError as e:
            raise ProviderTimeout(f"OpenAI embedding request timed out: {e}", cause=e) from e
        except OpenAIError as e:
            raise ProviderError(f"OpenAI embedding request failed: {e}", cause=e) from e
        if not resp.data:
            raise ProviderError("OpenAI returned no embedding")
        return list(resp.data[0].embedding)


class HttpEmbeddingProvider(EmbeddingProvider):
    """
    Generic inference endpoint: POST {"input": text}.
    Accepts {"embedding": [...]} or OpenAI-style {"data": [{"embedding": [...]}]}.
    """

    def __init__(
        self,
        endpoint_url: str = EMBEDDING_ENDPOINT_URL,
        api_key: Optional[str] = None,
        timeout: float = EMBEDDING_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not endpoint_url:
            raise ValueError("HttpEmbeddingProvider requires an endpoint URL")
        self._endpoint_url = endpoint_url
        self._headers = {"Accept": "application/json"}
        if api_key:
            self._headers["Authorization"] = f"Bearer {api_key}"
        self._timeout = timeout
        self._transport = transport

    async def embed_text(self, text: str) -> List[float]:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                headers=self._headers,
                transport=self._transport,
            ) as client:
                response = await client.post(self._endpoint_url, json={"input": _clean(text)})
                response.raise_for_status()
                data = response.json()
        except httpx.TimeoutException as e:
            raise ProviderTimeout(f"Embedding endpoint timed out: {e}", cause=e) from e
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                f"Embedding endpoint returned HTTP {e.response.status_code}", cause=e
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise ProviderError(f"Embedding endpoint request failed: {e}", cause=e) from e
        return _parse_embedding_body(data)


def _parse_embedding_body(data: Any) -> List[float]:
    vector = None
    if isinstance(data, dict):
        if "embedding" in data:
            vector = data["embedding"]
        elif data.get("data"):
            vector = data["data"][0].get("embedding")
    if not isinstance(vector, list) or not vector:
        raise ProviderError("Embedding endpoint response has no embedding")
    try:
        return [float(x) for x in vector]
    except (TypeError, ValueError) as e:
        raise ProviderError("Embedding endpoint returned non-numeric values", cause=e) from e


class SentenceTransformersEmbeddingProvider(EmbeddingProvider):
    """Local embeddings via SentenceTransformers (e.g. all-MiniLM-L6-v2)."""

    def __init__(self, model_name: str = SENTENCE_TRANSFORMERS_MODEL) -> None:
        self._model_name = model_name
        self._model = None

    def _get_model(self):
        if self._model is None:
            try:
                from sentence_transformers import SentenceTransformer
                self._model = SentenceTransformer(self._model_name)
                logger.info("Loaded SentenceTransformer model: %s", self._model_name)
            except ImportError:
                raise ImportError(
                    "sentence-transformers not installed; pip install sentence-transformers"
                )
        return self._model

    def _encode(self, text: str) -> List[float]:
        return self._get_model().encode(_clean(text), convert_to_numpy=True).tolist()

    async def embed_text(self, text: str) -> List[float]:
        try:
            return await asyncio.to_thread(self._encode, text)
        except ImportError:
            raise
        except Exception as e:
            raise ProviderError(f"SentenceTransformer encoding failed: {e}", cause=e) from e


def get_embedding_provider(provider: Optional[str] = None) -> EmbeddingProvider:
    """
    Return the configured embedding provider (dependency injection).
    provider: override config; None uses EMBEDDING_PROVIDER.
    """
    p = (provider or EMBEDDING_PROVIDER).strip().lower()
    if p == "openai":
        if not OPENAI_API_KEY:
            logger.warning("OPENAI_API_KEY not set; falling back to sentence_transformers")
            return SentenceTransformersEmbeddingProvider()
        return OpenAIEmbeddingProvider()
    if p == "http":
        return HttpEmbeddingProvider(endpoint_url=EMBEDDING_ENDPOINT_URL, api_key=OPENAI_API_KEY or None)
    return SentenceTransformersEmbeddingProvider()
