"""
Rate limiting shared across clients that use the same API key.

Etherscan enforces limits per API key, not per connection, so two client
objects built with the same key must share one limiter. The
``RateLimiterRegistry`` hands out one ``RateLimiter`` per key (keyed by the
SHA-256 of the key, never the key itself) and reference-counts it; the
limiter stops only when its last holder releases it.

Each limiter enforces:
- a minimum spacing between request starts (``ceil(1000 / rps)`` ms),
- at most ``max_concurrent`` requests in flight,
- a reservoir (daily quota) that refills to full every
  ``reservoir_refresh_interval`` seconds. An empty reservoir delays
  dispatch until the refill; it never fails the request.
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
import math
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

from etherscan_sdk.exceptions import EtherscanError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_CONCURRENT = 2
DEFAULT_RESERVOIR = 100_000
DEFAULT_RESERVOIR_REFRESH_INTERVAL = 24 * 60 * 60.0


def hash_api_key(api_key: str) -> str:
    """One-way digest used wherever a key needs to be identified."""
    return hashlib.sha256(api_key.encode("utf-8")).hexdigest()


class LimiterStoppedError(EtherscanError):
    """Work was scheduled on a limiter after its last holder released it."""

    code = "LIMITER_STOPPED"


class RateLimiter:
    """Spacing + concurrency + reservoir limiter for one API key."""

    def __init__(
        self,
        requests_per_second: float,
        max_concurrent: int = DEFAULT_MAX_CONCURRENT,
        reservoir: int = DEFAULT_RESERVOIR,
        reservoir_refresh_interval: float = DEFAULT_RESERVOIR_REFRESH_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if requests_per_second <= 0:
            raise ValueError(f"requests_per_second must be positive, got {requests_per_second}")
        self.requests_per_second = requests_per_second
        self.min_interval = math.ceil(1000 / requests_per_second) / 1000
        self.max_concurrent = max_concurrent
        self.reservoir_size = reservoir
        self.reservoir_refresh_interval = reservoir_refresh_interval
        self._clock = clock
        self._reservoir = reservoir
        self._refreshed_at = clock()
        self._next_start = 0.0
        self._semaphore = asyncio.Semaphore(max_concurrent)
        self._lock = asyncio.Lock()
        self._stopped = False
        self._queued = 0

    @property
    def stopped(self) -> bool:
        return self._stopped

    @property
    def reservoir(self) -> int:
        self._refill()
        return self._reservoir

    @property
    def queued(self) -> int:
        """Jobs accepted but not yet finished."""
        return self._queued

    async def schedule(self, fn: Callable[..., Awaitable[T]], *args: Any) -> T:
        """
        Wait for a slot, then run ``fn(*args)``.

        Work accepted before ``stop()`` still runs; work offered after is
        refused with LimiterStoppedError.
        """
        if self._stopped:
            raise LimiterStoppedError("Rate limiter has been stopped")
        self._queued += 1
        try:
            async with self._semaphore:
                await self._wait_for_slot()
                return await fn(*args)
        finally:
            self._queued -= 1

    def stop(self) -> None:
        self._stopped = True

    # ──────────────────────────────────────────────────────────────
    # Private helpers
    # ──────────────────────────────────────────────────────────────

    def _refill(self) -> None:
        now = self._clock()
        elapsed = now - self._refreshed_at
        if elapsed >= self.reservoir_refresh_interval:
            periods = int(elapsed // self.reservoir_refresh_interval)
            self._refreshed_at += periods * self.reservoir_refresh_interval
            self._reservoir = self.reservoir_size

    async def _wait_for_slot(self) -> None:
        async with self._lock:
            self._refill()
            while self._reservoir < 1:
                wait = self._refreshed_at + self.reservoir_refresh_interval - self._clock()
                logger.info("Reservoir exhausted; waiting %.1fs for refill", max(wait, 0))
                await asyncio.sleep(max(wait, 0))
                self._refill()

            now = self._clock()
            wait = self._next_start - now
            if wait > 0:
                await asyncio.sleep(wait)
                now = self._clock()
            self._next_start = max(now, self._next_start) + self.min_interval
            self._reservoir -= 1


@dataclass
class _RegistryEntry:
    limiter: RateLimiter
    ref_count: int = 0


class RateLimiterRegistry:
    """
    Reference-counted limiter registry keyed by hashed API key.

    Clients use ``default_registry`` unless one is injected; tests should
    build their own registry so limiters never leak across tests.
    """

    def __init__(self) -> None:
        self._entries: dict[str, _RegistryEntry] = {}

    def acquire(
        self,
        api_key: str,
        requests_per_second: float,
        reservoir: int = DEFAULT_RESERVOIR,
        reservoir_refresh_interval: float = DEFAULT_RESERVOIR_REFRESH_INTERVAL,
        max_concurrent: int = DEFAULT_MAX_CONCURRENT,
    ) -> RateLimiter:
        key_hash = hash_api_key(api_key)
        entry = self._entries.get(key_hash)
        if entry is None:
            limiter = RateLimiter(
                requests_per_second,
                max_concurrent=max_concurrent,
                reservoir=reservoir,
                reservoir_refresh_interval=reservoir_refresh_interval,
            )
            entry = _RegistryEntry(limiter)
            self._entries[key_hash] = entry
            logger.info(
                "Created rate limiter for key %s… (%s req/s, reservoir %s)",
                key_hash[:8],
                requests_per_second,
                reservoir,
            )
        entry.ref_count += 1
        return entry.limiter

    def release(self, api_key: str) -> None:
        key_hash = hash_api_key(api_key)
        entry = self._entries.get(key_hash)
        if entry is None:
            return
        entry.ref_count -= 1
        if entry.ref_count <= 0:
            entry.limiter.stop()
            del self._entries[key_hash]
            logger.info("Stopped rate limiter for key %s…", key_hash[:8])

    def ref_count(self, api_key: str) -> int:
        entry = self._entries.get(hash_api_key(api_key))
        return entry.ref_count if entry else 0

    def get(self, api_key: str) -> RateLimiter | None:
        entry = self._entries.get(hash_api_key(api_key))
        return entry.limiter if entry else None

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, api_key: object) -> bool:
        return isinstance(api_key, str) and hash_api_key(api_key) in self._entries


default_registry = RateLimiterRegistry()
