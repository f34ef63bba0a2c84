# SPDX-License-Identifier: MIT

import pendulum

from taskflow.model.entity_id import generate_entity_id
from taskflow.model.task import Priority, Task

DEFAULT_CATEGORY = "personal"


def get_task_template(now: pendulum.DateTime) -> Task:
    return {
        "id": generate_entity_id(),
        "title": "",
        "description": "",
        "priority": Priority.MEDIUM,
        "category": DEFAULT_CATEGORY,
        "is_completed": False,
        "created_at": now,
        "updated_at": now,
        "due_date": None,
        "due_time": None,
    }
