"""Tests for etherscan_sdk/core/ratelimit.py — limiter and shared registry."""

from __future__ import annotations

import asyncio
import time

import pytest

from etherscan_sdk.core.ratelimit import (
    LimiterStoppedError,
    RateLimiter,
    RateLimiterRegistry,
    hash_api_key,
)


async def _noop() -> str:
    return "ok"


# ── RateLimiter ───────────────────────────────────────────────────────────────


def test_min_interval_rounds_up_to_milliseconds() -> None:
    assert RateLimiter(3).min_interval == pytest.approx(0.334)
    assert RateLimiter(5).min_interval == pytest.approx(0.2)
    assert RateLimiter(1000).min_interval == pytest.approx(0.001)


def test_non_positive_rate_rejected() -> None:
    with pytest.raises(ValueError):
        RateLimiter(0)


@pytest.mark.asyncio
async def test_schedule_returns_result() -> None:
    limiter = RateLimiter(1000)
    assert await limiter.schedule(_noop) == "ok"
    assert limiter.queued == 0


@pytest.mark.asyncio
async def test_schedule_passes_arguments() -> None:
    async def add(a: int, b: int) -> int:
        return a + b

    assert await RateLimiter(1000).schedule(add, 2, 3) == 5


@pytest.mark.asyncio
async def test_request_starts_are_spaced() -> None:
    """At 20 req/s three starts span at least two 50ms gaps."""
    limiter = RateLimiter(20)
    started = time.monotonic()
    for _ in range(3):
        await limiter.schedule(_noop)
    assert time.monotonic() - started >= 0.08


@pytest.mark.asyncio
async def test_concurrency_is_capped() -> None:
    limiter = RateLimiter(1000, max_concurrent=2)
    active = 0
    peak = 0

    async def job() -> None:
        nonlocal active, peak
        active += 1
        peak = max(peak, active)
        await asyncio.sleep(0.01)
        active -= 1

    await asyncio.gather(*(limiter.schedule(job) for _ in range(6)))
    assert peak <= 2


@pytest.mark.asyncio
async def test_empty_reservoir_delays_until_refill() -> None:
    limiter = RateLimiter(1000, reservoir=2, reservoir_refresh_interval=0.05)
    started = time.monotonic()
    for _ in range(3):
        assert await limiter.schedule(_noop) == "ok"
    assert time.monotonic() - started >= 0.04


@pytest.mark.asyncio
async def test_reservoir_decrements_per_job() -> None:
    limiter = RateLimiter(1000, reservoir=10, reservoir_refresh_interval=3600)
    await limiter.schedule(_noop)
    await limiter.schedule(_noop)
    assert limiter.reservoir == 8


@pytest.mark.asyncio
async def test_stopped_limiter_refuses_new_work() -> None:
    limiter = RateLimiter(1000)
    limiter.stop()
    assert limiter.stopped
    with pytest.raises(LimiterStoppedError):
        await limiter.schedule(_noop)


# ── Registry ──────────────────────────────────────────────────────────────────


def test_same_key_shares_one_limiter() -> None:
    registry = RateLimiterRegistry()
    a = registry.acquire("key-one", 5)
    b = registry.acquire("key-one", 5)
    assert a is b
    assert registry.ref_count("key-one") == 2
    assert len(registry) == 1


def test_different_keys_get_different_limiters() -> None:
    registry = RateLimiterRegistry()
    assert registry.acquire("key-one", 5) is not registry.acquire("key-two", 5)
    assert len(registry) == 2


def test_release_stops_only_on_last_holder() -> None:
    registry = RateLimiterRegistry()
    limiter = registry.acquire("key-one", 5)
    registry.acquire("key-one", 5)

    registry.release("key-one")
    assert not limiter.stopped
    assert registry.ref_count("key-one") == 1

    registry.release("key-one")
    assert limiter.stopped
    assert "key-one" not in registry
    assert registry.get("key-one") is None


def test_release_unknown_key_is_noop() -> None:
    registry = RateLimiterRegistry()
    registry.release("never-acquired")
    assert len(registry) == 0


def test_reacquire_after_release_builds_fresh_limiter() -> None:
    registry = RateLimiterRegistry()
    old = registry.acquire("key-one", 5)
    registry.release("key-one")
    new = registry.acquire("key-one", 5)
    assert new is not old
    assert not new.stopped


def test_registry_logs_hash_not_key(caplog: pytest.LogCaptureFixture) -> None:
    registry = RateLimiterRegistry()
    with caplog.at_level("INFO", logger="etherscan_sdk.core.ratelimit"):
        registry.acquire("super-secret-key", 5)
    assert "super-secret-key" not in caplog.text
    assert hash_api_key("super-secret-key")[:8] in caplog.text


def test_hash_api_key_is_sha256_hex() -> None:
    digest = hash_api_key("abc")
    assert digest == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
