# SPDX-License-Identifier: MIT

from typing import TypedDict

ALL = "all"


class StatusFilter:
    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"
    OVERDUE = "overdue"


STATUS_FILTERS = (
    StatusFilter.ALL,
    StatusFilter.COMPLETED,
    StatusFilter.PENDING,
    StatusFilter.OVERDUE,
)


class SortMode:
    PRIORITY = "priority"
    CREATED_DATE = "created_date"
    DUE_DATE = "due_date"


SORT_MODES = (SortMode.PRIORITY, SortMode.CREATED_DATE, SortMode.DUE_DATE)


class FilterCriteria(TypedDict):
    category: str
    priority: str
    status: str
    search_term: str


FILTER_FIELDS = ("category", "priority", "status", "search_term")


def get_default_filter() -> FilterCriteria:
    return {
        "category": ALL,
        "priority": ALL,
        "status": StatusFilter.ALL,
        "search_term": "",
    }
