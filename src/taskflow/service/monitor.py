# SPDX-License-Identifier: MIT

"""
Overdue monitor.

A small polling loop that asks the store to report tasks which crossed
their due instant since the previous check. The store remembers when it
last checked, so a late or skipped tick never double-reports a task and
never misses one.
"""

import asyncio
import logging
from typing import Protocol

from taskflow.model.task import Task

logger = logging.getLogger(__name__)

DEFAULT_INITIAL_DELAY_SECONDS = 5.0
DEFAULT_INTERVAL_SECONDS = 60.0


class OverdueChecker(Protocol):
    def check_overdue(self) -> list[Task]: ...


async def run_overdue_monitor(
    store: OverdueChecker,
    *,
    initial_delay_seconds: float = DEFAULT_INITIAL_DELAY_SECONDS,
    interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
) -> None:
    """
    Check for newly overdue tasks shortly after start, then on every interval.

    Runs until cancelled. A failing check is logged and the loop carries on.
    """
    sleep_s = max(0.01, float(interval_seconds))

    await asyncio.sleep(max(0.0, float(initial_delay_seconds)))
    while True:
        try:
            crossed = store.check_overdue()
            if crossed:
                logger.info("Overdue check found %s newly overdue tasks", len(crossed))
        except Exception:
            logger.exception("check_overdue failed")

        await asyncio.sleep(sleep_s)
