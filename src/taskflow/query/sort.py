# SPDX-License-Identifier: MIT

from typing import Any, Callable

import pendulum

from taskflow.model.filter import SortMode
from taskflow.model.task import PRIORITY_RANK, Task
from taskflow.service.due import due_instant


def sort_tasks(tasks: list[Task], sort_mode: str, now: pendulum.DateTime) -> list[Task]:
    """
    Return a sorted copy of ``tasks``; the input list is left untouched.

    Every pass is a stable sort, so records with equal keys keep their
    relative order from the previous pass (or from storage order).
    """
    sorted_tasks = list(tasks)

    match sort_mode:
        case SortMode.PRIORITY:
            # Least significant key first.
            sorted_tasks = _sort_by(sorted_tasks, lambda task: task["created_at"], True)
            sorted_tasks = _sort_by(
                sorted_tasks, lambda task: PRIORITY_RANK.get(task["priority"], 0), True
            )
        case SortMode.CREATED_DATE:
            sorted_tasks = _sort_by(sorted_tasks, lambda task: task["created_at"], True)
        case SortMode.DUE_DATE:
            dated = [task for task in sorted_tasks if due_instant(task, now) is not None]
            undated = [task for task in sorted_tasks if due_instant(task, now) is None]
            sorted_tasks = _sort_by(
                dated, lambda task: due_instant(task, now), False
            ) + _sort_by(undated, lambda task: task["created_at"], True)
        case _:
            raise ValueError(f"unknown sort mode: {sort_mode}")

    return sorted_tasks


def _sort_by(
    tasks: list[Task], key: Callable[[Task], Any], descending: bool
) -> list[Task]:
    none_items = [task for task in tasks if key(task) is None]
    value_items = [task for task in tasks if key(task) is not None]
    value_items.sort(key=key, reverse=descending)
    return value_items + none_items
