"""LRU cache with per-entry TTL for validated API results."""

from __future__ import annotations

import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")


@dataclass
class CacheEntry(Generic[T]):
    value: T
    stored_at: float
    ttl: float

    def expired(self, now: float) -> bool:
        return now - self.stored_at > self.ttl


class LRUCache(Generic[T]):
    """
    Bounded mapping from request signature to validated value.

    - ``get`` treats expired entries as absent and removes them.
    - A hit moves the key to the most-recently-used end.
    - ``set`` on a full cache evicts the least-recently-used key first.
    - A disabled cache ignores writes and always misses.
    """

    def __init__(
        self,
        max_size: int = 1000,
        default_ttl: float = 300.0,
        enabled: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_size = max_size
        self.default_ttl = default_ttl
        self.enabled = enabled
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry[T]] = OrderedDict()

    def get(self, key: str, default: Any = None) -> Any:
        if not self.enabled:
            return default
        entry = self._entries.get(key)
        if entry is None:
            return default
        if entry.expired(self._clock()):
            del self._entries[key]
            return default
        self._entries.move_to_end(key)
        return entry.value

    def set(self, key: str, value: T, ttl: float | None = None) -> None:
        if not self.enabled:
            return
        entry = CacheEntry(value, self._clock(), self.default_ttl if ttl is None else ttl)
        if key in self._entries:
            self._entries[key] = entry
            self._entries.move_to_end(key)
            return
        if len(self._entries) >= self.max_size:
            self._entries.popitem(last=False)
        self._entries[key] = entry

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        # membership does not touch recency or expiry
        return key in self._entries

    def cleanup(self) -> int:
        """Purge every expired entry. Returns the number removed."""
        now = self._clock()
        expired = [k for k, e in self._entries.items() if e.expired(now)]
        for k in expired:
            del self._entries[k]
        return len(expired)

    def stats(self) -> dict[str, Any]:
        return {
            "size": len(self._entries),
            "max_size": self.max_size,
            "enabled": self.enabled,
        }

    def update_config(
        self,
        max_size: int | None = None,
        default_ttl: float | None = None,
        enabled: bool | None = None,
    ) -> None:
        if max_size is not None:
            if max_size < 1:
                raise ValueError(f"max_size must be >= 1, got {max_size}")
            self.max_size = max_size
        if default_ttl is not None:
            self.default_ttl = default_ttl
        if enabled is not None:
            self.enabled = enabled

        if not self.enabled:
            self.clear()
        while len(self._entries) > self.max_size:
            self._entries.popitem(last=False)
