"""Revocable scope shared by every suspension point of one logical request."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from paintgen.errors.exceptions import CancellationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CancellationScope:
    """Cooperative cancellation token.

    ``cancel()`` aborts tasks started through ``run()`` and wakes any
    ``sleep()`` in progress; both then raise ``CancellationError``.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._tasks: set[asyncio.Future] = set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> bool:
        """Cancel the scope. Returns False if it was already cancelled."""
        if self._event.is_set():
            return False
        self._event.set()
        for task in list(self._tasks):
            task.cancel()
        logger.debug("Cancelled scope with %d in-flight task(s)", len(self._tasks))
        return True

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise CancellationError("Request was cancelled")

    async def run(self, fn: Callable[[], Awaitable[T]]) -> T:
        """Run one unit of work as a task bound to this scope."""
        self.raise_if_cancelled()
        task = asyncio.ensure_future(fn())
        self._tasks.add(task)
        try:
            result = await task
        except (asyncio.CancelledError, Exception):
            if self.cancelled:
                raise CancellationError("Request was cancelled") from None
            raise
        finally:
            self._tasks.discard(task)
        self.raise_if_cancelled()
        return result

    async def sleep(self, delay: float) -> None:
        """Wait ``delay`` seconds unless the scope is cancelled first."""
        self.raise_if_cancelled()
        try:
            await asyncio.wait_for(self._event.wait(), timeout=delay)
        except TimeoutError:
            return
        raise CancellationError("Request was cancelled during backoff")
