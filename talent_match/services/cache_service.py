"""Keyed TTL cache service plus the vector and result caches built on it.

VectorCache and ResultCache are best-effort: any failure of the underlying
cache service is logged and treated as a miss (reads) or skipped (writes).
"""

import json
import time
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple

from cachetools import TLRUCache
from pydantic import TypeAdapter, ValidationError

from talent_match.config import CACHE_MAX_ENTRIES, EMBEDDING_CACHE_TTL_SECONDS, MATCH_CACHE_TTL_SECONDS
from talent_match.errors import CacheUnavailable
from talent_match.schemas.match import CandidateMatch
from talent_match.utils.logger import get_logger

logger = get_logger(__name__)

_MATCH_LIST = TypeAdapter(List[CandidateMatch])


def _entry_expiry(_key: str, entry: Tuple[str, float], now: float) -> float:
    return now + entry[1]


class CacheService(ABC):
    """Abstract string-valued cache (Redis-like get / setex)."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None on miss or expiry."""
        ...

    @abstractmethod
    async def set_with_ttl(self, key: str, value: str, ttl_seconds: float) -> None:
        """Store value under key for ttl_seconds."""
        ...


class InMemoryCacheService(CacheService):
    """
    Process-local cache on a cachetools TLRUCache; every entry carries its own TTL.
    Expired entries are purged on each write and at most max_entries are held,
    so a long stream of one-off keys cannot grow memory without bound.
    Entries are replaced whole, so concurrent writers resolve last-write-wins.
    """

    def __init__(self, max_entries: int = CACHE_MAX_ENTRIES, clock: Callable[[], float] = time.monotonic) -> None:
        self._entries: TLRUCache = TLRUCache(maxsize=max_entries, ttu=_entry_expiry, timer=clock)

    async def get(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        return entry[0] if entry is not None else None

    async def set_with_ttl(self, key: str, value: str, ttl_seconds: float) -> None:
        if ttl_seconds <= 0:
            raise CacheUnavailable(f"TTL must be positive, got {ttl_seconds}")
        self._entries[key] = (value, ttl_seconds)

    def __len__(self) -> int:
        self._entries.expire()
        return len(self._entries)


class VectorCache:
    """Content-addressed embedding store."""

    def __init__(self, cache: CacheService, ttl_seconds: float = EMBEDDING_CACHE_TTL_SECONDS) -> None:
        self._cache = cache
        self._ttl = ttl_seconds

    async def get(self, key: str) -> Optional[List[float]]:
        try:
            raw = await self._cache.get(key)
        except Exception as e:
            logger.warning("Vector cache unavailable on read %s: %s", key[:40], e)
            return None
        if raw is None:
            return None
        try:
            return [float(x) for x in json.loads(raw)]
        except (ValueError, TypeError) as e:
            logger.warning("Discarding corrupt vector cache entry %s: %s", key[:40], e)
            return None

    async def set(self, key: str, vector: List[float]) -> None:
        try:
            await self._cache.set_with_ttl(key, json.dumps(vector), self._ttl)
        except Exception as e:
            logger.warning("Vector cache unavailable on write %s: %s", key[:40], e)


class ResultCache:
    """Aggregate match results per job fingerprint."""

    def __init__(self, cache: CacheService, ttl_seconds: float = MATCH_CACHE_TTL_SECONDS) -> None:
        self._cache = cache
        self._ttl = ttl_seconds

    async def get(self, key: str) -> Optional[List[CandidateMatch]]:
        try:
            raw = await self._cache.get(key)
        except Exception as e:
            logger.warning("Result cache unavailable on read %s: %s", key[:40], e)
            return None
        if raw is None:
            return None
        try:
            return _MATCH_LIST.validate_json(raw)
        except ValidationError as e:
            logger.warning("Discarding corrupt result cache entry %s: %s", key[:40], e)
            return None

    async def set(self, key: str, matches: List[CandidateMatch]) -> None:
        try:
            await self._cache.set_with_ttl(key, _MATCH_LIST.dump_json(matches).decode("utf-8"), self._ttl)
        except Exception as e:
            logger.warning("Result cache unavailable on write %s: %s", key[:40], e)
