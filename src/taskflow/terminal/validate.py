# SPDX-License-Identifier: MIT

from typing import Optional

import typer

from taskflow.model.filter import ALL, SORT_MODES, STATUS_FILTERS
from taskflow.model.task import PRIORITIES
from taskflow.time import parse_due_time

TITLE_MIN_LENGTH = 2
TITLE_MAX_LENGTH = 100


def validate_title(title: Optional[str]) -> Optional[str]:
    if title is None:
        return None
    title = title.strip()
    if not title:
        raise typer.BadParameter("Task title is required")
    if len(title) < TITLE_MIN_LENGTH:
        raise typer.BadParameter(
            f"Title must be at least {TITLE_MIN_LENGTH} characters long"
        )
    if len(title) > TITLE_MAX_LENGTH:
        raise typer.BadParameter(
            f"Title must be less than {TITLE_MAX_LENGTH} characters"
        )
    return title


def validate_priority(priority: Optional[str]) -> Optional[str]:
    if priority is None:
        return None
    if priority not in PRIORITIES:
        raise typer.BadParameter(f"Priority must be one of: {', '.join(PRIORITIES)}")
    return priority


def validate_priority_filter(priority: str) -> str:
    if priority != ALL:
        validate_priority(priority)
    return priority


def validate_status_filter(status: str) -> str:
    if status not in STATUS_FILTERS:
        raise typer.BadParameter(f"Status must be one of: {', '.join(STATUS_FILTERS)}")
    return status


def validate_sort_mode(sort_mode: Optional[str]) -> Optional[str]:
    if sort_mode is None:
        return None
    if sort_mode not in SORT_MODES:
        raise typer.BadParameter(f"Sort must be one of: {', '.join(SORT_MODES)}")
    return sort_mode


def validate_due_time(due_time: Optional[str]) -> Optional[str]:
    if due_time is None:
        return None
    parsed = parse_due_time(due_time)
    if parsed is None:
        raise typer.BadParameter("Incorrect time format, expected HH:mm")
    hour, minute = parsed
    return f"{hour:02d}:{minute:02d}"
