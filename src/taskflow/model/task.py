# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from taskflow.model.entity_id import EntityId


class Priority:
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


PRIORITIES = (Priority.LOW, Priority.MEDIUM, Priority.HIGH)

PRIORITY_RANK: dict[str, int] = {
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
}


class DueStatus:
    NONE = "none"
    OVERDUE = "overdue"
    TODAY = "today"
    UPCOMING = "upcoming"
    NORMAL = "normal"


class Task(TypedDict):
    id: EntityId
    title: str
    description: str
    priority: str
    category: str
    is_completed: bool
    created_at: pendulum.DateTime
    updated_at: pendulum.DateTime
    # YYYY-MM-DD, local calendar date
    due_date: Optional[str]
    # HH:MM, only meaningful together with due_date
    due_time: Optional[str]


class TaskDraft(TypedDict, total=False):
    title: str
    description: str
    priority: str
    category: str
    due_date: Optional[str]
    due_time: Optional[str]


class TaskPatch(TypedDict, total=False):
    title: str
    description: str
    priority: str
    category: str
    due_date: Optional[str]
    due_time: Optional[str]


EDITABLE_FIELDS = (
    "title",
    "description",
    "priority",
    "category",
    "due_date",
    "due_time",
)
