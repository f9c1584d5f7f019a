"""Collapse concurrent identical requests into one in-flight call."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RequestDeduplicator:
    """
    In-flight registry keyed by request signature.

    The first caller for a key starts ``factory()`` as a task; callers that
    arrive while it is pending await the same task. The entry is dropped as
    soon as the task settles, so the next call triggers a fresh request.
    """

    def __init__(self) -> None:
        self._pending: dict[str, asyncio.Task[Any]] = {}

    async def run(self, key: str, factory: Callable[[], Awaitable[T]]) -> T:
        task = self._pending.get(key)
        # a settled task lingers until its done-callback runs
        if task is None or task.done():
            task = asyncio.ensure_future(factory())
            self._pending[key] = task
            task.add_done_callback(lambda t, k=key: self._settle(k, t))
        else:
            logger.debug("Joining in-flight request %s", key)
        # one waiter being cancelled must not cancel the shared call
        return await asyncio.shield(task)

    def _settle(self, key: str, task: asyncio.Task[Any]) -> None:
        if self._pending.get(key) is task:
            del self._pending[key]
        if not task.cancelled():
            # mark the exception retrieved even if every waiter was cancelled
            task.exception()

    def clear(self) -> None:
        self._pending.clear()

    def size(self) -> int:
        return len(self._pending)

    def __len__(self) -> int:
        return len(self._pending)
