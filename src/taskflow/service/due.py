# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from taskflow.model.task import DueStatus, Task
from taskflow.time import (
    datetime_to_display_date_str,
    due_instant_to_display_str,
    parse_due_time,
    resolve_due_instant,
)

DUE_SOON_HOURS = 72


def due_instant(task: Task, now: pendulum.DateTime) -> Optional[pendulum.DateTime]:
    """Resolve the task's due instant in the timezone of ``now``."""
    return resolve_due_instant(
        task["due_date"], task["due_time"], tz=now.tz or "local"
    )


def is_overdue(task: Task, now: pendulum.DateTime) -> bool:
    if task["is_completed"]:
        return False
    instant = due_instant(task, now)
    if instant is None:
        return False
    return instant < now


def is_due_today(task: Task, now: pendulum.DateTime) -> bool:
    if task["is_completed"]:
        return False
    instant = due_instant(task, now)
    if instant is None:
        return False
    return instant.date() == now.date()


def is_due_soon(task: Task, now: pendulum.DateTime) -> bool:
    if task["is_completed"]:
        return False
    instant = due_instant(task, now)
    if instant is None:
        return False
    return now < instant <= now.add(hours=DUE_SOON_HOURS)


def due_status(task: Task, now: pendulum.DateTime) -> str:
    if task["is_completed"] or due_instant(task, now) is None:
        return DueStatus.NONE
    if is_overdue(task, now):
        return DueStatus.OVERDUE
    if is_due_today(task, now):
        return DueStatus.TODAY
    if is_due_soon(task, now):
        return DueStatus.UPCOMING
    return DueStatus.NORMAL


def search_match(task: Task, query: str) -> bool:
    """
    Case-insensitive substring match against title or description.

    Category and priority are not searched.
    """
    query_lower = query.strip().lower()
    return (
        query_lower in task["title"].lower()
        or query_lower in (task["description"] or "").lower()
    )


def formatted_created_date(task: Task) -> str:
    return datetime_to_display_date_str(task["created_at"])


def formatted_due(task: Task, now: pendulum.DateTime) -> Optional[str]:
    instant = due_instant(task, now)
    if instant is None:
        return None
    return due_instant_to_display_str(
        instant, parse_due_time(task["due_time"]) is not None
    )
