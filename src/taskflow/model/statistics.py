# SPDX-License-Identifier: MIT

from typing import TypedDict


class Statistics(TypedDict):
    total: int
    active: int
    completed: int
    overdue: int
    # active tasks with high priority
    high_priority: int
