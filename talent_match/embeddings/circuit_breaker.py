"""Circuit breaker for the embedding provider.

Closed --(threshold consecutive failures)--> Open
Open --(reset timeout elapsed, next call admitted as trial)--> HalfOpen
HalfOpen --(trial succeeds)--> Closed
HalfOpen --(trial fails)--> Open

State is a tagged variant swapped under one lock; nothing else mutates it.
"""

import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Union

from talent_match.config import CIRCUIT_FAILURE_THRESHOLD, CIRCUIT_RESET_TIMEOUT_SECONDS
from talent_match.errors import ProviderUnavailable
from talent_match.utils.logger import get_logger

logger = get_logger(__name__)


class CircuitState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


@dataclass(frozen=True)
class Closed:
    failures: int = 0


@dataclass(frozen=True)
class Open:
    since: float
    failures: int


@dataclass(frozen=True)
class HalfOpen:
    """A single trial call is in flight. `since` is when the circuit opened."""

    since: float
    failures: int


Variant = Union[Closed, Open, HalfOpen]


class CircuitBreaker:
    def __init__(
        self,
        failure_threshold: int = CIRCUIT_FAILURE_THRESHOLD,
        reset_timeout: float = CIRCUIT_RESET_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if failure_threshold < 1:
            raise ValueError("failure_threshold must be >= 1")
        self._threshold = failure_threshold
        self._reset_timeout = reset_timeout
        self._clock = clock
        self._lock = threading.Lock()
        self._variant: Variant = Closed()

    @property
    def variant(self) -> Variant:
        return self._variant

    @property
    def state(self) -> CircuitState:
        v = self._variant
        if isinstance(v, Closed):
            return CircuitState.CLOSED
        if isinstance(v, Open):
            return CircuitState.OPEN
        return CircuitState.HALF_OPEN

    @property
    def failures(self) -> int:
        return self._variant.failures

    def acquire(self) -> bool:
        """
        Admit one provider call, or raise ProviderUnavailable without calling out.
        Returns True when the caller holds the half-open trial; only that caller
        may hand it back with release_trial().
        """
        with self._lock:
            v = self._variant
            if isinstance(v, Closed):
                return False
            if isinstance(v, HalfOpen):
                raise ProviderUnavailable("Embedding provider trial call in progress")
            remaining = self._reset_timeout - (self._clock() - v.since)
            if remaining > 0:
                raise ProviderUnavailable(
                    f"Embedding provider circuit open; retry in {remaining:.1f}s"
                )
            self._variant = HalfOpen(since=v.since, failures=v.failures)
            logger.info("Circuit half-open; admitting trial call")
            return True

    def record_success(self) -> None:
        with self._lock:
            if not isinstance(self._variant, Closed):
                logger.info("Circuit closed after successful trial call")
            self._variant = Closed()

    def record_failure(self) -> None:
        with self._lock:
            v = self._variant
            now = self._clock()
            failures = v.failures + 1
            if isinstance(v, HalfOpen):
                self._variant = Open(since=now, failures=failures)
                logger.warning("Circuit re-opened: trial call failed")
            elif isinstance(v, Open):
                # Late failure from a call admitted before the circuit opened
                self._variant = Open(since=now, failures=failures)
            elif failures >= self._threshold:
                self._variant = Open(since=now, failures=failures)
                logger.warning("Circuit opened after %s consecutive failures", failures)
            else:
                self._variant = Closed(failures=failures)

    def release_trial(self) -> None:
        """Undo the admitted trial when it never resolved (e.g. cancelled)."""
        with self._lock:
            v = self._variant
            if isinstance(v, HalfOpen):
                self._variant = Open(since=v.since, failures=v.failures)
