# tests/conftest.py

from __future__ import annotations

import pendulum
import pytest

from taskflow.repository.task import TaskStore

from .fakes import FakeClock, MemoryStorage, RecordingScheduler, RecordingSink

TZ = "Europe/Berlin"


@pytest.fixture()
def clock() -> FakeClock:
    """
    Tuesday 2026-03-10 12:00 in a fixed zone.

    Due instants resolve in the clock's zone, so results do not depend on
    the machine running the tests.
    """
    return FakeClock(pendulum.datetime(2026, 3, 10, 12, 0, tz=TZ))


@pytest.fixture()
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def scheduler() -> RecordingScheduler:
    return RecordingScheduler()


@pytest.fixture()
def store(
    storage: MemoryStorage,
    sink: RecordingSink,
    scheduler: RecordingScheduler,
    clock: FakeClock,
) -> TaskStore:
    return TaskStore(storage, sink, scheduler, clock=clock)
