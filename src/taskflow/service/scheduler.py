# SPDX-License-Identifier: MIT

import asyncio
import heapq
import itertools
import logging
from typing import Callable, Optional, Protocol, TypeAlias

logger = logging.getLogger(__name__)

Callback: TypeAlias = Callable[[], None]


class Scheduler(Protocol):
    def schedule(self, delay_seconds: float, callback: Callback) -> None: ...


class QueuedScheduler:
    """
    Hold deferred callbacks until ``run_pending`` is called.

    One-shot CLI commands exit long before a real timer would fire, so they
    queue their alerts here and drain the queue before returning. Callbacks
    run in order of their delay; equal delays run in scheduling order.
    """

    def __init__(self, sleep: Optional[Callable[[float], None]] = None) -> None:
        self._queue: list[tuple[float, int, Callback]] = []
        self._counter = itertools.count()
        self._sleep = sleep

    def __len__(self) -> int:
        return len(self._queue)

    def schedule(self, delay_seconds: float, callback: Callback) -> None:
        heapq.heappush(
            self._queue, (max(0.0, delay_seconds), next(self._counter), callback)
        )

    def run_pending(self) -> int:
        """
        Run every queued callback and return how many ran.

        When a sleep function was supplied the gaps between delays are
        honoured; otherwise callbacks run back to back.
        """
        ran = 0
        elapsed = 0.0
        while self._queue:
            delay_seconds, _, callback = heapq.heappop(self._queue)
            if self._sleep is not None and delay_seconds > elapsed:
                self._sleep(delay_seconds - elapsed)
                elapsed = delay_seconds
            callback()
            ran += 1
        return ran


class AsyncioScheduler:
    """Run callbacks on the running event loop with ``loop.call_later``."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def schedule(self, delay_seconds: float, callback: Callback) -> None:
        loop = self._loop or asyncio.get_running_loop()
        loop.call_later(max(0.0, delay_seconds), callback)
        logger.debug("Scheduled callback in %.1fs", delay_seconds)
