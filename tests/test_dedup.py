"""Tests for etherscan_sdk/core/dedup.py — in-flight request sharing."""

from __future__ import annotations

import asyncio

import pytest

from etherscan_sdk.core.dedup import RequestDeduplicator


@pytest.mark.asyncio
async def test_concurrent_calls_share_one_factory_run() -> None:
    dedup = RequestDeduplicator()
    calls = 0

    async def factory() -> str:
        nonlocal calls
        calls += 1
        await asyncio.sleep(0.01)
        return "value"

    results = await asyncio.gather(*(dedup.run("k", factory) for _ in range(5)))
    assert results == ["value"] * 5
    assert calls == 1


@pytest.mark.asyncio
async def test_entry_removed_after_settle() -> None:
    """A call after the first settles starts a fresh run."""
    dedup = RequestDeduplicator()
    calls = 0

    async def factory() -> int:
        nonlocal calls
        calls += 1
        return calls

    assert await dedup.run("k", factory) == 1
    await asyncio.sleep(0)
    assert len(dedup) == 0
    assert await dedup.run("k", factory) == 2


@pytest.mark.asyncio
async def test_different_keys_run_separately() -> None:
    dedup = RequestDeduplicator()
    seen: list[str] = []

    def make(key: str):
        async def factory() -> str:
            seen.append(key)
            await asyncio.sleep(0)
            return key

        return factory

    results = await asyncio.gather(dedup.run("a", make("a")), dedup.run("b", make("b")))
    assert results == ["a", "b"]
    assert sorted(seen) == ["a", "b"]


@pytest.mark.asyncio
async def test_failure_propagates_to_every_waiter() -> None:
    dedup = RequestDeduplicator()

    async def factory() -> None:
        await asyncio.sleep(0.01)
        raise RuntimeError("boom")

    results = await asyncio.gather(
        dedup.run("k", factory), dedup.run("k", factory), return_exceptions=True
    )
    assert all(isinstance(r, RuntimeError) for r in results)
    await asyncio.sleep(0)
    assert dedup.size() == 0


@pytest.mark.asyncio
async def test_cancelled_waiter_does_not_cancel_shared_call() -> None:
    dedup = RequestDeduplicator()
    release = asyncio.Event()

    async def factory() -> str:
        await release.wait()
        return "done"

    first = asyncio.ensure_future(dedup.run("k", factory))
    second = asyncio.ensure_future(dedup.run("k", factory))
    await asyncio.sleep(0)
    first.cancel()
    release.set()

    assert await second == "done"
    with pytest.raises(asyncio.CancelledError):
        await first


@pytest.mark.asyncio
async def test_caller_woken_as_shared_call_settles_starts_fresh() -> None:
    """A caller arriving in the same loop pass the task finishes gets a new run."""
    dedup = RequestDeduplicator()
    release = asyncio.Event()
    calls = 0

    async def factory() -> int:
        nonlocal calls
        calls += 1
        await release.wait()
        return calls

    async def late() -> int:
        await release.wait()
        return await dedup.run("k", factory)

    first = asyncio.ensure_future(dedup.run("k", factory))
    await asyncio.sleep(0.01)
    second = asyncio.ensure_future(late())
    await asyncio.sleep(0.01)
    release.set()

    assert await first == 1
    assert await second == 2
    assert calls == 2
