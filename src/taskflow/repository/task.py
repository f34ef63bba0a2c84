# SPDX-License-Identifier: MIT

import datetime
import logging
from copy import deepcopy
from functools import partial
from typing import Any, Optional, cast

import pendulum

from taskflow import time
from taskflow.exceptions import PersistenceError
from taskflow.model.alert import AlertSink, PendingAlert, Severity
from taskflow.model.entity_id import EntityId
from taskflow.model.filter import (
    ALL,
    FILTER_FIELDS,
    SORT_MODES,
    STATUS_FILTERS,
    FilterCriteria,
    SortMode,
    get_default_filter,
)
from taskflow.model.statistics import Statistics
from taskflow.model.task import EDITABLE_FIELDS, Priority, Task, TaskDraft, TaskPatch
from taskflow.query.filter import generate_filter
from taskflow.query.sort import sort_tasks
from taskflow.repository.storage import FieldSet, TaskStorage
from taskflow.service import notification
from taskflow.service.due import is_overdue
from taskflow.service.scheduler import Scheduler
from taskflow.template.task import get_task_template

logger = logging.getLogger(__name__)


class TaskStore:
    """
    In-memory task collection backed by a storage collaborator.

    Storage order is insertion order; every read that sorts works on a copy.
    Records handed to callers are deep copies, so the only way to change a
    task is through the store's mutation methods.

    After each mutation the whole collection is saved. A failed save raises
    PersistenceError but the in-memory change stays in place.
    """

    def __init__(
        self,
        storage: TaskStorage,
        alert: AlertSink,
        scheduler: Scheduler,
        clock: time.Clock = time.now_local,
        sort_mode: str = SortMode.PRIORITY,
    ) -> None:
        self._storage = storage
        self._alert = alert
        self._scheduler = scheduler
        self._clock = clock
        self._tasks: Optional[list[Task]] = None

        self.filter: FilterCriteria = get_default_filter()
        self.sort_mode: str = SortMode.PRIORITY
        self.set_sort_mode(sort_mode)
        self.editing_id: Optional[EntityId] = None
        self.last_overdue_check: pendulum.DateTime = clock()

    @property
    def tasks(self) -> list[Task]:
        if self._tasks is None:
            self.__load_data()
        if self._tasks is None:
            raise ValueError()
        return self._tasks

    def __load_data(self) -> None:
        try:
            field_sets = self._storage.load()
        except Exception as exc:
            logger.exception("Failed to load tasks")
            raise PersistenceError("failed to load tasks") from exc
        self._tasks = [
            self.__convert_task_for_deserialization(field_set)
            for field_set in field_sets
        ]
        logger.info("TaskStore ready total=%s", len(self._tasks))

    def __save_data(self) -> None:
        field_sets = [
            self.__convert_task_for_serialization(task) for task in self.tasks
        ]
        try:
            self._storage.save(field_sets)
        except Exception as exc:
            logger.exception("Failed to save %s tasks", len(field_sets))
            raise PersistenceError("failed to save tasks") from exc

    def __convert_task_for_serialization(self, task: Task) -> FieldSet:
        serializable_task = cast(dict[str, Any], deepcopy(task))
        serializable_task["created_at"] = time.datetime_to_iso_str(task["created_at"])
        serializable_task["updated_at"] = time.datetime_to_iso_str(task["updated_at"])
        return serializable_task

    def __convert_task_for_deserialization(self, field_set: FieldSet) -> Task:
        created_at = self.__timestamp_from_field(field_set["created_at"])
        updated_at = self.__timestamp_from_field(
            field_set.get("updated_at") or field_set["created_at"]
        )
        task: Task = {
            "id": str(field_set["id"]),
            "title": str(field_set.get("title") or ""),
            "description": str(field_set.get("description") or ""),
            "priority": str(field_set.get("priority") or Priority.MEDIUM),
            "category": str(field_set.get("category") or ""),
            "is_completed": bool(field_set.get("is_completed", False)),
            "created_at": created_at,
            "updated_at": max(created_at, updated_at),
            "due_date": self.__due_date_from_field(field_set.get("due_date")),
            "due_time": _clean_value("due_time", field_set.get("due_time")),
        }
        _drop_orphan_due_time(task)
        return task

    @staticmethod
    def __timestamp_from_field(value: Any) -> pendulum.DateTime:
        if isinstance(value, datetime.datetime):
            return pendulum.instance(value)
        return time.datetime_from_str(str(value))

    @staticmethod
    def __due_date_from_field(value: Any) -> Optional[str]:
        # Unquoted dates in hand-edited files come back as date objects.
        if isinstance(value, datetime.date):
            return value.strftime("%Y-%m-%d")
        return _clean_value("due_date", value)

    def __find(self, id: EntityId) -> Optional[Task]:
        for task in self.tasks:
            if task["id"] == id:
                return task
        return None

    def __touch(self, task: Task, now: pendulum.DateTime) -> None:
        task["updated_at"] = max(now, task["created_at"])

    def __acknowledge(self, message: str, severity: str) -> None:
        try:
            self._alert(message, severity)
        except Exception:
            logger.exception("Alert sink failed for message=%r", message)

    def __schedule(self, alert: PendingAlert) -> None:
        self._scheduler.schedule(alert["delay_seconds"], partial(self.__deliver, alert))

    def __deliver(self, alert: PendingAlert) -> None:
        # The task may have been deleted while the alert was waiting.
        if self.__find(alert["task_id"]) is None:
            logger.debug("Skipping alert for missing task id=%s", alert["task_id"])
            return
        self.__acknowledge(alert["message"], alert["severity"])

    # ---- mutations ----

    def create(self, data: TaskDraft, notify: bool = True) -> Task:
        now = self._clock()
        task = get_task_template(now)
        for field in EDITABLE_FIELDS:
            if field in data:
                task[field] = _clean_value(field, data[field])  # type: ignore[literal-required]
        _drop_orphan_due_time(task)

        self.tasks.append(task)
        logger.info("Task created id=%s priority=%s", task["id"], task["priority"])

        if notify:
            self.__acknowledge(notification.created_message(task), Severity.SUCCESS)
            for alert in notification.created_alerts(task, now):
                self.__schedule(alert)

        self.__save_data()
        return deepcopy(task)

    def update(self, id: EntityId, patch: TaskPatch) -> Optional[Task]:
        task = self.__find(id)
        if task is None:
            logger.debug("update: task not found id=%s", id)
            return None

        now = self._clock()
        previous_priority = task["priority"]
        previous_due_date = task["due_date"]

        for field in EDITABLE_FIELDS:
            if field in patch:
                task[field] = _clean_value(field, patch[field])  # type: ignore[literal-required]
        _drop_orphan_due_time(task)
        self.__touch(task, now)

        self.__acknowledge(notification.updated_message(task), Severity.SUCCESS)
        for alert in notification.updated_alerts(
            previous_priority, previous_due_date, task, now
        ):
            self.__schedule(alert)

        self.__save_data()
        return deepcopy(task)

    def delete(self, id: EntityId) -> bool:
        task = self.__find(id)
        if task is None:
            logger.debug("delete: task not found id=%s", id)
            return False

        self.tasks.remove(task)
        if self.editing_id == id:
            self.editing_id = None
        logger.info("Task deleted id=%s", id)

        self.__acknowledge(notification.deleted_message(task), Severity.SUCCESS)
        self.__save_data()
        return True

    def toggle_completion(self, id: EntityId) -> Optional[Task]:
        task = self.__find(id)
        if task is None:
            logger.debug("toggle_completion: task not found id=%s", id)
            return None

        now = self._clock()
        was_overdue = is_overdue(task, now)
        task["is_completed"] = not task["is_completed"]
        self.__touch(task, now)

        self.__acknowledge(notification.toggled_message(task), Severity.SUCCESS)
        if task["is_completed"]:
            alerts = notification.completed_alerts(task, was_overdue)
        else:
            alerts = notification.reactivated_alerts(task, now)
        for alert in alerts:
            self.__schedule(alert)

        self.__save_data()
        return deepcopy(task)

    def clear_completed(self) -> int:
        remaining = [task for task in self.tasks if not task["is_completed"]]
        count = len(self.tasks) - len(remaining)
        self._tasks = remaining
        if self.editing_id is not None and self.__find(self.editing_id) is None:
            self.editing_id = None
        logger.info("Cleared %s completed tasks", count)

        message, severity = notification.cleared_message(count)
        self.__acknowledge(message, severity)
        self.__save_data()
        return count

    def set_filter(self, field: str, value: Optional[str]) -> None:
        if field not in FILTER_FIELDS:
            raise ValueError(f"unknown filter field: {field}")
        if field == "search_term":
            self.filter["search_term"] = value or ""
            return
        value = value or ALL
        if field == "status" and value not in STATUS_FILTERS:
            raise ValueError(f"unknown status filter: {value}")
        self.filter[field] = value  # type: ignore[literal-required]

    def reset_filter(self) -> None:
        self.filter = get_default_filter()

    def set_sort_mode(self, mode: str) -> None:
        if mode not in SORT_MODES:
            raise ValueError(f"unknown sort mode: {mode}")
        self.sort_mode = mode

    # ---- edit session ----

    def begin_edit(self, id: EntityId) -> Optional[Task]:
        task = self.__find(id)
        if task is None:
            return None
        self.editing_id = id
        return deepcopy(task)

    def cancel_edit(self) -> None:
        self.editing_id = None

    def submit(self, data: TaskDraft) -> Optional[Task]:
        """Update the task being edited, or create a new one if none is."""
        if self.editing_id is None:
            return self.create(data)
        editing_id = self.editing_id
        self.editing_id = None
        return self.update(editing_id, cast(TaskPatch, data))

    # ---- queries ----

    def find_by_id(self, id: EntityId) -> Optional[Task]:
        task = self.__find(id)
        return deepcopy(task) if task is not None else None

    def get_all_tasks(self) -> list[Task]:
        return deepcopy(self.tasks)

    def get_filtered_list(self) -> list[Task]:
        now = self._clock()
        filtered = generate_filter(self.filter, now).filter(self.tasks)
        return deepcopy(sort_tasks(filtered, self.sort_mode, now))

    def get_statistics(self) -> Statistics:
        now = self._clock()
        total = len(self.tasks)
        completed = len([task for task in self.tasks if task["is_completed"]])
        return {
            "total": total,
            "active": total - completed,
            "completed": completed,
            "overdue": len([task for task in self.tasks if is_overdue(task, now)]),
            "high_priority": len(
                [
                    task
                    for task in self.tasks
                    if task["priority"] == Priority.HIGH and not task["is_completed"]
                ]
            ),
        }

    def check_overdue(self) -> list[Task]:
        """
        Alert once for every task that became overdue since the last check.

        The window is (last check, now], so a task is reported by exactly one
        check no matter how late or early the checks run.
        """
        now = self._clock()
        since = self.last_overdue_check
        if now <= since:
            return []
        self.last_overdue_check = now

        crossed = notification.newly_overdue(self.tasks, since, now)
        for task in crossed:
            logger.info("Task became overdue id=%s", task["id"])
            self.__acknowledge(notification.overdue_message(task), Severity.ERROR)
        return deepcopy(crossed)


def _drop_orphan_due_time(task: Task) -> None:
    # A time of day is only kept together with a due date.
    if task["due_date"] is None:
        task["due_time"] = None


def _clean_value(field: str, value: Any) -> Any:
    if field in ("due_date", "due_time"):
        if value is None:
            return None
        value = str(value).strip()
        return value or None
    if field == "description":
        return value or ""
    return value

