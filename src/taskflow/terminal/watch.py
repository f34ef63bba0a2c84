# SPDX-License-Identifier: MIT

import asyncio
import logging

from rich.console import Console

from taskflow.initialize import open_task_store
from taskflow.repository.configuration import CONFIGURATION_REPO
from taskflow.service.monitor import run_overdue_monitor
from taskflow.service.scheduler import AsyncioScheduler
from taskflow.view.alert import print_alert

logger = logging.getLogger(__name__)


async def _watch(initial_delay_seconds: float, interval_seconds: float) -> None:
    store = open_task_store(print_alert, AsyncioScheduler())
    await run_overdue_monitor(
        store,
        initial_delay_seconds=initial_delay_seconds,
        interval_seconds=interval_seconds,
    )


def watch() -> None:
    """Stay running and alert when tasks become overdue."""
    config = CONFIGURATION_REPO.get_config()
    console = Console()
    console.print(" Watching for overdue tasks, press Ctrl+C to stop.")
    try:
        asyncio.run(
            _watch(
                config["overdue_initial_delay_seconds"],
                config["overdue_check_interval_seconds"],
            )
        )
    except KeyboardInterrupt:
        logger.info("Overdue watch stopped")
