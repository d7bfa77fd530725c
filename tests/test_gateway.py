import asyncio
from typing import Dict, List

import pytest

from conftest import FailingCache, SpyProvider
from talent_match.embeddings.circuit_breaker import CircuitState
from talent_match.embeddings.embedding_service import EmbeddingProvider
from talent_match.errors import ProviderError, ProviderTimeout, ProviderUnavailable


@pytest.mark.asyncio
async def test_embed_twice_calls_provider_once(make_gateway):
    provider = SpyProvider(vector=[0.1, 0.2, 0.3])
    gateway = make_gateway(provider)

    first = await gateway.embed("senior react engineer")
    second = await gateway.embed("senior react engineer")

    assert first == second == [0.1, 0.2, 0.3]
    assert len(provider.calls) == 1


@pytest.mark.asyncio
async def test_cache_expiry_triggers_new_call(make_gateway, clock):
    provider = SpyProvider()
    gateway = make_gateway(provider, cache_ttl=60)

    await gateway.embed("text")
    clock.advance(61)
    await gateway.embed("text")
    assert len(provider.calls) == 2


@pytest.mark.asyncio
async def test_fifth_failure_opens_circuit(make_gateway):
    provider = SpyProvider(fail_when=lambda text: True)
    gateway = make_gateway(provider, threshold=5)

    for i in range(4):
        with pytest.raises(ProviderError):
            await gateway.embed(f"text {i}")
        assert gateway.breaker.state == CircuitState.CLOSED
    with pytest.raises(ProviderError):
        await gateway.embed("text 4")
    assert gateway.breaker.state == CircuitState.OPEN
    assert len(provider.calls) == 5


@pytest.mark.asyncio
async def test_open_circuit_fails_fast_then_allows_one_trial(make_gateway, clock):
    provider = SpyProvider(fail_when=lambda text: True)
    gateway = make_gateway(provider, threshold=5, reset_timeout=30.0)
    for i in range(5):
        with pytest.raises(ProviderError):
            await gateway.embed(f"text {i}")

    clock.advance(10)
    with pytest.raises(ProviderUnavailable):
        await gateway.embed("another text")
    assert len(provider.calls) == 5

    clock.advance(20)
    provider.fail_when = lambda text: False
    assert await gateway.embed("another text") == [1.0, 0.0, 0.0]
    assert len(provider.calls) == 6
    assert gateway.breaker.state == CircuitState.CLOSED


@pytest.mark.asyncio
async def test_failed_trial_invokes_provider_exactly_once(make_gateway, clock):
    provider = SpyProvider(fail_when=lambda text: True)
    gateway = make_gateway(provider, threshold=2, max_attempts=3)
    with pytest.raises(ProviderUnavailable):
        # two failed attempts open the circuit, the third fails fast
        await gateway.embed("text")
    assert len(provider.calls) == 2

    clock.advance(30)
    with pytest.raises(ProviderUnavailable):
        await gateway.embed("text")
    assert len(provider.calls) == 3
    assert gateway.breaker.state == CircuitState.OPEN


@pytest.mark.asyncio
async def test_cache_hit_bypasses_open_circuit(make_gateway):
    provider = SpyProvider()
    gateway = make_gateway(provider, threshold=1)
    await gateway.embed("cached text")

    provider.fail_when = lambda text: True
    with pytest.raises(ProviderError):
        await gateway.embed("uncached text")
    assert gateway.breaker.state == CircuitState.OPEN

    assert await gateway.embed("cached text") == [1.0, 0.0, 0.0]


@pytest.mark.asyncio
async def test_retries_until_success(make_gateway):
    attempts = {"n": 0}

    def flaky(text):
        attempts["n"] += 1
        return attempts["n"] < 3

    provider = SpyProvider(fail_when=flaky)
    gateway = make_gateway(provider, max_attempts=3)
    assert await gateway.embed("text") == [1.0, 0.0, 0.0]
    assert len(provider.calls) == 3
    assert gateway.breaker.failures == 0


@pytest.mark.asyncio
async def test_slow_provider_times_out(make_gateway):
    provider = SpyProvider(delay=0.5)
    gateway = make_gateway(provider, timeout=0.01)
    with pytest.raises(ProviderTimeout):
        await gateway.embed("text")
    assert gateway.breaker.failures == 1


@pytest.mark.asyncio
async def test_cache_failure_degrades_to_provider(make_gateway):
    provider = SpyProvider()
    gateway = make_gateway(provider, cache=FailingCache())
    assert await gateway.embed("text") == [1.0, 0.0, 0.0]
    assert await gateway.embed("text") == [1.0, 0.0, 0.0]
    assert len(provider.calls) == 2


class GatedProvider(EmbeddingProvider):
    """Texts listed in `gated` block until released; "fail" always errors."""

    def __init__(self, gated) -> None:
        self.calls: List[str] = []
        self.started: Dict[str, asyncio.Event] = {t: asyncio.Event() for t in gated}
        self.release: Dict[str, asyncio.Event] = {t: asyncio.Event() for t in gated}

    async def embed_text(self, text: str) -> List[float]:
        self.calls.append(text)
        if text == "fail":
            raise ProviderError("provider down")
        if text in self.started:
            self.started[text].set()
            await self.release[text].wait()
        return [1.0, 0.0, 0.0]


@pytest.mark.asyncio
async def test_cancelling_non_trial_call_keeps_single_trial(make_gateway, clock):
    provider = GatedProvider(gated=["A", "B"])
    gateway = make_gateway(provider, threshold=1, reset_timeout=30.0, timeout=5.0)

    # A is admitted while closed and stalls
    call_a = asyncio.create_task(gateway.embed("A"))
    await provider.started["A"].wait()

    with pytest.raises(ProviderError):
        await gateway.embed("fail")
    assert gateway.breaker.state == CircuitState.OPEN

    clock.advance(30)
    call_b = asyncio.create_task(gateway.embed("B"))
    await provider.started["B"].wait()
    assert gateway.breaker.state == CircuitState.HALF_OPEN

    call_a.cancel()
    with pytest.raises(asyncio.CancelledError):
        await call_a
    assert gateway.breaker.state == CircuitState.HALF_OPEN

    with pytest.raises(ProviderUnavailable):
        await gateway.embed("C")
    assert provider.calls == ["A", "fail", "B"]

    provider.release["B"].set()
    assert await call_b == [1.0, 0.0, 0.0]
    assert gateway.breaker.state == CircuitState.CLOSED


@pytest.mark.asyncio
async def test_cancelled_trial_hands_trial_back(make_gateway, clock):
    provider = GatedProvider(gated=["B"])
    gateway = make_gateway(provider, threshold=1, reset_timeout=30.0, timeout=5.0)
    with pytest.raises(ProviderError):
        await gateway.embed("fail")

    clock.advance(30)
    trial = asyncio.create_task(gateway.embed("B"))
    await provider.started["B"].wait()
    trial.cancel()
    with pytest.raises(asyncio.CancelledError):
        await trial

    assert gateway.breaker.state == CircuitState.OPEN
    assert await gateway.embed("C") == [1.0, 0.0, 0.0]
    assert gateway.breaker.state == CircuitState.CLOSED
