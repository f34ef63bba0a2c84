# tests/test_scheduler.py

from __future__ import annotations

import asyncio
import contextlib

import pytest

from taskflow.model.task import Task
from taskflow.repository.task import TaskStore
from taskflow.service.monitor import run_overdue_monitor
from taskflow.service.scheduler import AsyncioScheduler, QueuedScheduler

from .fakes import FakeClock, MemoryStorage, RecordingSink


def test_queued_scheduler_runs_in_delay_order() -> None:
    scheduler = QueuedScheduler()
    ran: list[str] = []

    scheduler.schedule(2.0, lambda: ran.append("due"))
    scheduler.schedule(1.5, lambda: ran.append("attention"))
    scheduler.schedule(2.0, lambda: ran.append("due second"))
    scheduler.schedule(-1.0, lambda: ran.append("immediate"))

    assert len(scheduler) == 4
    assert scheduler.run_pending() == 4
    assert ran == ["immediate", "attention", "due", "due second"]
    assert len(scheduler) == 0
    assert scheduler.run_pending() == 0


def test_queued_scheduler_sleeps_only_the_gaps() -> None:
    slept: list[float] = []
    scheduler = QueuedScheduler(sleep=slept.append)

    scheduler.schedule(1.5, lambda: None)
    scheduler.schedule(2.0, lambda: None)
    scheduler.schedule(2.0, lambda: None)

    scheduler.run_pending()

    assert slept == [1.5, 0.5]


def test_queued_scheduler_delivers_store_alerts(clock: FakeClock) -> None:
    sink = RecordingSink()
    scheduler = QueuedScheduler()
    store = TaskStore(MemoryStorage(), sink, scheduler, clock=clock)

    store.create({"title": "Launch", "priority": "high", "due_date": "2026-03-10"})
    assert len(sink.alerts) == 1

    scheduler.run_pending()

    assert [severity for _, severity in sink.alerts] == ["success", "warning", "warning"]


@pytest.mark.asyncio
async def test_asyncio_scheduler_fires_after_delay() -> None:
    fired = asyncio.Event()
    scheduler = AsyncioScheduler()

    scheduler.schedule(0.01, fired.set)

    assert not fired.is_set()
    await asyncio.wait_for(fired.wait(), timeout=1.0)


class CountingChecker:
    def __init__(self, fail_first: bool = False, stop_after: int = 3) -> None:
        self.calls = 0
        self.fail_first = fail_first
        self.stop_after = stop_after
        self.done = asyncio.Event()

    def check_overdue(self) -> list[Task]:
        self.calls += 1
        if self.calls >= self.stop_after:
            self.done.set()
        if self.fail_first and self.calls == 1:
            raise RuntimeError("storage unavailable")
        return []


async def run_until_done(checker: CountingChecker) -> None:
    task = asyncio.create_task(
        run_overdue_monitor(checker, initial_delay_seconds=0.0, interval_seconds=0.01)
    )
    try:
        await asyncio.wait_for(checker.done.wait(), timeout=2.0)
    finally:
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task


@pytest.mark.asyncio
async def test_monitor_checks_repeatedly() -> None:
    checker = CountingChecker(stop_after=3)

    await run_until_done(checker)

    assert checker.calls >= 3


@pytest.mark.asyncio
async def test_monitor_survives_failing_check() -> None:
    checker = CountingChecker(fail_first=True, stop_after=2)

    await run_until_done(checker)

    assert checker.calls >= 2
