"""Tests for etherscan_sdk/core/cache.py — LRU cache with TTL."""

from __future__ import annotations

import pytest

from etherscan_sdk.core.cache import LRUCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# ── get / set ─────────────────────────────────────────────────────────────────


def test_get_returns_stored_value(clock: FakeClock) -> None:
    cache = LRUCache(max_size=3, default_ttl=10, clock=clock)
    cache.set("a", 1)
    assert cache.get("a") == 1
    assert "a" in cache
    assert len(cache) == 1


def test_get_miss_returns_default(clock: FakeClock) -> None:
    cache = LRUCache(clock=clock)
    sentinel = object()
    assert cache.get("nope") is None
    assert cache.get("nope", sentinel) is sentinel


def test_cached_none_is_distinguishable_from_miss(clock: FakeClock) -> None:
    """A stored None is a hit, not a miss."""
    cache = LRUCache(clock=clock)
    sentinel = object()
    cache.set("k", None)
    assert cache.get("k", sentinel) is None


def test_set_overwrites_existing_key(clock: FakeClock) -> None:
    cache = LRUCache(max_size=2, clock=clock)
    cache.set("a", 1)
    cache.set("a", 2)
    assert cache.get("a") == 2
    assert cache.size() == 1


# ── TTL ───────────────────────────────────────────────────────────────────────


def test_expired_entry_is_absent_and_removed(clock: FakeClock) -> None:
    cache = LRUCache(default_ttl=5, clock=clock)
    cache.set("a", 1)
    clock.now += 5.1
    assert cache.get("a") is None
    assert "a" not in cache


def test_entry_alive_until_ttl_elapses(clock: FakeClock) -> None:
    cache = LRUCache(default_ttl=5, clock=clock)
    cache.set("a", 1)
    clock.now += 5
    assert cache.get("a") == 1


def test_per_entry_ttl_overrides_default(clock: FakeClock) -> None:
    cache = LRUCache(default_ttl=100, clock=clock)
    cache.set("short", 1, ttl=1)
    cache.set("long", 2)
    clock.now += 2
    assert cache.get("short") is None
    assert cache.get("long") == 2


def test_cleanup_purges_only_expired(clock: FakeClock) -> None:
    cache = LRUCache(default_ttl=10, clock=clock)
    cache.set("old", 1, ttl=1)
    cache.set("older", 2, ttl=2)
    cache.set("fresh", 3)
    clock.now += 3
    assert cache.cleanup() == 2
    assert len(cache) == 1
    assert cache.get("fresh") == 3


# ── LRU eviction ──────────────────────────────────────────────────────────────


def test_full_cache_evicts_least_recently_used(clock: FakeClock) -> None:
    cache = LRUCache(max_size=2, clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("c", 3)
    assert "a" not in cache
    assert cache.get("b") == 2
    assert cache.get("c") == 3


def test_get_refreshes_recency(clock: FakeClock) -> None:
    """Reading 'a' makes 'b' the eviction candidate."""
    cache = LRUCache(max_size=2, clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.get("a")
    cache.set("c", 3)
    assert "a" in cache
    assert "b" not in cache


def test_size_never_exceeds_max(clock: FakeClock) -> None:
    cache = LRUCache(max_size=5, clock=clock)
    for i in range(50):
        cache.set(str(i), i)
        assert len(cache) <= 5


# ── Disabled / config ─────────────────────────────────────────────────────────


def test_disabled_cache_ignores_writes(clock: FakeClock) -> None:
    cache = LRUCache(enabled=False, clock=clock)
    cache.set("a", 1)
    assert cache.get("a") is None
    assert len(cache) == 0


def test_update_config_disable_clears(clock: FakeClock) -> None:
    cache = LRUCache(clock=clock)
    cache.set("a", 1)
    cache.update_config(enabled=False)
    assert len(cache) == 0
    assert cache.stats()["enabled"] is False


def test_update_config_shrink_evicts_oldest(clock: FakeClock) -> None:
    cache = LRUCache(max_size=4, clock=clock)
    for key in "abcd":
        cache.set(key, key)
    cache.update_config(max_size=2)
    assert len(cache) == 2
    assert "c" in cache and "d" in cache


def test_update_config_rejects_zero_size(clock: FakeClock) -> None:
    cache = LRUCache(clock=clock)
    with pytest.raises(ValueError):
        cache.update_config(max_size=0)


def test_delete_and_clear(clock: FakeClock) -> None:
    cache = LRUCache(clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)
    assert cache.delete("a") is True
    assert cache.delete("a") is False
    cache.clear()
    assert cache.stats() == {"size": 0, "max_size": 1000, "enabled": True}
