# tests/test_task_store.py

from __future__ import annotations

from pathlib import Path
from typing import Any, cast

import pendulum
import pytest

from taskflow.exceptions import PersistenceError
from taskflow.model.task import TaskPatch
from taskflow.repository.storage import YamlTaskStorage
from taskflow.repository.task import TaskStore
from taskflow.service.due import due_instant

from .conftest import TZ
from .fakes import (
    FailingStorage,
    FakeClock,
    MemoryStorage,
    RecordingScheduler,
    RecordingSink,
)


def test_create_fills_defaults_and_persists(
    store: TaskStore, storage: MemoryStorage, clock: FakeClock
) -> None:
    task = store.create({"title": "Write report"})

    assert task["description"] == ""
    assert task["priority"] == "medium"
    assert task["category"] == "personal"
    assert task["is_completed"] is False
    assert task["created_at"] == clock.now
    assert task["updated_at"] == clock.now
    assert task["due_date"] is None
    assert task["due_time"] is None
    assert len(storage.saves) == 1
    assert storage.saves[0][0]["id"] == task["id"]


def test_create_assigns_unique_ids(store: TaskStore) -> None:
    ids = {store.create({"title": f"task {n}"}, notify=False)["id"] for n in range(20)}

    assert len(ids) == 20


def test_create_without_notify_still_persists(
    store: TaskStore,
    storage: MemoryStorage,
    sink: RecordingSink,
    scheduler: RecordingScheduler,
) -> None:
    store.create(
        {"title": "Seed", "priority": "high", "due_date": "2026-03-10"}, notify=False
    )

    assert sink.alerts == []
    assert scheduler.scheduled == []
    assert len(storage.saves) == 1


def test_update_overwrites_given_fields_and_ignores_unknown(
    store: TaskStore, clock: FakeClock
) -> None:
    created = store.create({"title": "Old", "description": "keep me"}, notify=False)
    clock.advance(hours=1)

    patch: dict[str, Any] = {
        "title": "New",
        "priority": "low",
        "id": "hijack",
        "is_completed": True,
    }
    updated = store.update(created["id"], cast(TaskPatch, patch))

    assert updated is not None
    assert updated["id"] == created["id"]
    assert updated["title"] == "New"
    assert updated["priority"] == "low"
    assert updated["description"] == "keep me"
    assert updated["is_completed"] is False
    assert updated["created_at"] == created["created_at"]
    assert updated["updated_at"] == clock.now


def test_update_refreshes_updated_at_even_without_changes(
    store: TaskStore, clock: FakeClock
) -> None:
    created = store.create({"title": "Same"}, notify=False)
    clock.advance(minutes=5)

    updated = store.update(created["id"], {})

    assert updated is not None
    assert updated["updated_at"] == clock.now


def test_updated_at_never_precedes_created_at(store: TaskStore, clock: FakeClock) -> None:
    created = store.create({"title": "Clock skew"}, notify=False)
    clock.advance(hours=-2)

    updated = store.update(created["id"], {"title": "Still fine"})

    assert updated is not None
    assert updated["updated_at"] >= updated["created_at"]


def test_update_can_clear_due_date(store: TaskStore) -> None:
    created = store.create(
        {"title": "Due", "due_date": "2026-03-20", "due_time": "10:00"}, notify=False
    )

    updated = store.update(created["id"], {"due_date": "", "due_time": None})

    assert updated is not None
    assert updated["due_date"] is None
    assert updated["due_time"] is None


def test_due_time_is_dropped_with_its_due_date(
    store: TaskStore, clock: FakeClock
) -> None:
    created = store.create(
        {"title": "Dentist", "due_date": "2026-03-20", "due_time": "09:15"},
        notify=False,
    )

    cleared = store.update(created["id"], {"due_date": None})
    assert cleared is not None
    assert cleared["due_time"] is None

    readded = store.update(created["id"], {"due_date": "2026-03-25"})
    assert readded is not None
    assert readded["due_time"] is None
    assert due_instant(readded, clock.now) == pendulum.datetime(
        2026, 3, 25, 23, 59, 59, 999000, tz=TZ
    )


def test_create_ignores_due_time_without_due_date(store: TaskStore) -> None:
    created = store.create({"title": "Standup", "due_time": "10:00"}, notify=False)

    assert created["due_date"] is None
    assert created["due_time"] is None


def test_missing_ids_are_reported_not_raised(
    store: TaskStore, storage: MemoryStorage, sink: RecordingSink
) -> None:
    assert store.update("nope", {"title": "x"}) is None
    assert store.toggle_completion("nope") is None
    assert store.delete("nope") is False
    assert store.find_by_id("nope") is None
    assert storage.saves == []
    assert sink.alerts == []


def test_delete_removes_exactly_one(store: TaskStore, storage: MemoryStorage) -> None:
    first = store.create({"title": "one"}, notify=False)
    second = store.create({"title": "two"}, notify=False)

    assert store.delete(first["id"]) is True
    assert store.delete(first["id"]) is False
    assert [task["id"] for task in store.get_all_tasks()] == [second["id"]]
    assert [field_set["id"] for field_set in storage.field_sets] == [second["id"]]


def test_toggle_twice_restores_state_and_refreshes_updated_at(
    store: TaskStore, clock: FakeClock
) -> None:
    created = store.create({"title": "Toggle me"}, notify=False)

    clock.advance(minutes=1)
    completed = store.toggle_completion(created["id"])
    clock.advance(minutes=1)
    reactivated = store.toggle_completion(created["id"])

    assert completed is not None and reactivated is not None
    assert completed["is_completed"] is True
    assert reactivated["is_completed"] is False
    assert completed["updated_at"] == created["updated_at"].add(minutes=1)
    assert reactivated["updated_at"] == created["updated_at"].add(minutes=2)


def test_returned_records_are_copies(store: TaskStore) -> None:
    created = store.create({"title": "Original"}, notify=False)
    created["title"] = "Tampered"

    found = store.find_by_id(created["id"])
    assert found is not None
    found["is_completed"] = True

    stored = store.find_by_id(created["id"])
    assert stored is not None
    assert stored["title"] == "Original"
    assert stored["is_completed"] is False


def test_clear_completed_reports_count(
    store: TaskStore, storage: MemoryStorage, sink: RecordingSink
) -> None:
    ids = [store.create({"title": f"task {n}"}, notify=False)["id"] for n in range(5)]
    for task_id in ids[:3]:
        store.toggle_completion(task_id)
    saves_before = len(storage.saves)
    sink.clear()

    assert store.clear_completed() == 3

    remaining = store.get_all_tasks()
    assert [task["id"] for task in remaining] == ids[3:]
    assert all(not task["is_completed"] for task in remaining)
    assert len(storage.saves) == saves_before + 1
    assert sink.alerts == [("3 completed task(s) cleared!", "success")]

    assert store.clear_completed() == 0
    assert sink.alerts[-1] == ("No completed tasks to clear!", "info")


def test_statistics(store: TaskStore, clock: FakeClock) -> None:
    overdue = store.create({"title": "late", "due_date": "2026-03-01"}, notify=False)
    store.create({"title": "urgent", "priority": "high"}, notify=False)
    done_high = store.create({"title": "done", "priority": "high"}, notify=False)
    store.create({"title": "later", "due_date": "2026-04-01"}, notify=False)
    store.toggle_completion(done_high["id"])

    statistics = store.get_statistics()

    assert statistics == {
        "total": 4,
        "active": 3,
        "completed": 1,
        "overdue": 1,
        "high_priority": 1,
    }

    store.toggle_completion(overdue["id"])
    assert store.get_statistics()["overdue"] == 0


def test_statistics_ignore_filter(store: TaskStore) -> None:
    store.create({"title": "work", "category": "work"}, notify=False)
    store.create({"title": "home", "category": "personal"}, notify=False)
    store.set_filter("category", "work")

    assert len(store.get_filtered_list()) == 1
    assert store.get_statistics()["total"] == 2


def test_round_trip_preserves_identity_and_timestamps(
    tmp_path: Path, sink: RecordingSink, scheduler: RecordingScheduler, clock: FakeClock
) -> None:
    storage = YamlTaskStorage(tmp_path / "data" / "tasks.yaml")
    first = TaskStore(storage, sink, scheduler, clock=clock)
    first.create(
        {
            "title": "Dentist",
            "description": "bring card",
            "priority": "high",
            "category": "health",
            "due_date": "2026-03-12",
            "due_time": "09:15",
        }
    )
    clock.advance(minutes=3)
    second_id = first.create({"title": "Groceries: milk, eggs"})["id"]
    clock.advance(minutes=3)
    first.toggle_completion(second_id)

    reloaded = TaskStore(storage, sink, scheduler, clock=clock)

    assert reloaded.get_all_tasks() == first.get_all_tasks()
    restored = reloaded.find_by_id(second_id)
    assert restored is not None
    assert restored["is_completed"] is True
    assert restored["updated_at"] > restored["created_at"]


def test_loading_keeps_stored_order_and_fields(
    sink: RecordingSink, scheduler: RecordingScheduler, clock: FakeClock
) -> None:
    storage = MemoryStorage(
        [
            {
                "id": "task-b",
                "title": "second created, stored first",
                "description": "",
                "priority": "low",
                "category": "work",
                "is_completed": True,
                "created_at": "2026-03-02T10:00:00+01:00",
                "updated_at": "2026-03-03T10:00:00+01:00",
                "due_date": None,
                "due_time": None,
            },
            {
                "id": "task-a",
                "title": "first created",
                "description": "notes",
                "priority": "high",
                "category": "personal",
                "is_completed": False,
                "created_at": "2026-03-01T10:00:00+01:00",
                "updated_at": "2026-03-01T10:00:00+01:00",
                "due_date": "2026-03-05",
                "due_time": "18:00",
            },
        ]
    )

    store = TaskStore(storage, sink, scheduler, clock=clock)
    tasks = store.get_all_tasks()

    assert [task["id"] for task in tasks] == ["task-b", "task-a"]
    assert tasks[0]["is_completed"] is True
    assert tasks[0]["updated_at"].isoformat() == "2026-03-03T10:00:00+01:00"
    assert tasks[1]["due_time"] == "18:00"
    assert store.get_statistics()["overdue"] == 1


def test_save_failure_keeps_in_memory_change(
    sink: RecordingSink, scheduler: RecordingScheduler, clock: FakeClock
) -> None:
    store = TaskStore(FailingStorage(), sink, scheduler, clock=clock)

    with pytest.raises(PersistenceError) as excinfo:
        store.create({"title": "Unsaved"})

    assert isinstance(excinfo.value.__cause__, OSError)
    assert [task["title"] for task in store.get_all_tasks()] == ["Unsaved"]


def test_load_failure_is_a_persistence_error(
    sink: RecordingSink, scheduler: RecordingScheduler, clock: FakeClock, tmp_path: Path
) -> None:
    path = tmp_path / "tasks.yaml"
    path.write_text("tasks: [unclosed\n")
    store = TaskStore(YamlTaskStorage(path), sink, scheduler, clock=clock)

    with pytest.raises(PersistenceError):
        store.get_all_tasks()


def test_yaml_storage_handles_missing_and_empty_files(tmp_path: Path) -> None:
    path = tmp_path / "tasks.yaml"
    storage = YamlTaskStorage(path)

    assert storage.load() == []

    path.write_text("")
    assert storage.load() == []


def test_submit_routes_between_create_and_update(store: TaskStore) -> None:
    created = store.submit({"title": "Fresh"})
    assert created is not None
    assert store.editing_id is None

    editing = store.begin_edit(created["id"])
    assert editing is not None
    assert store.editing_id == created["id"]

    updated = store.submit({"title": "Edited"})
    assert updated is not None
    assert updated["id"] == created["id"]
    assert store.editing_id is None
    assert len(store.get_all_tasks()) == 1


def test_cancel_edit_makes_submit_create(store: TaskStore) -> None:
    created = store.create({"title": "Keep me"}, notify=False)
    store.begin_edit(created["id"])

    store.cancel_edit()
    assert store.editing_id is None

    submitted = store.submit({"title": "Brand new"})
    assert submitted is not None
    assert submitted["id"] != created["id"]
    assert [task["title"] for task in store.get_all_tasks()] == ["Keep me", "Brand new"]


def test_begin_edit_unknown_id_does_not_start_editing(store: TaskStore) -> None:
    assert store.begin_edit("missing") is None
    assert store.editing_id is None


def test_deleting_edited_task_ends_edit_session(store: TaskStore) -> None:
    created = store.create({"title": "Edit then delete"}, notify=False)
    store.begin_edit(created["id"])

    store.delete(created["id"])

    assert store.editing_id is None
    assert store.submit({"title": "New one"}) is not None
    assert len(store.get_all_tasks()) == 1
