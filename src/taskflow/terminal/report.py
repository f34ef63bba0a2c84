# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from taskflow.model.filter import ALL, StatusFilter
from taskflow.terminal.session import task_session
from taskflow.terminal.validate import (
    validate_priority_filter,
    validate_sort_mode,
    validate_status_filter,
)
from taskflow.time import now_local
from taskflow.view.task import section_title, statistics_view, tasks_view


def list_tasks(
    category: Annotated[
        str, typer.Option("--category", "-c", help="exact category, or all")
    ] = ALL,
    priority: Annotated[
        str,
        typer.Option(
            "--priority",
            "-p",
            callback=validate_priority_filter,
            help="low, medium, high, or all",
        ),
    ] = ALL,
    status: Annotated[
        str,
        typer.Option(
            "--status",
            "-st",
            callback=validate_status_filter,
            help="all, pending, completed, or overdue",
        ),
    ] = StatusFilter.ALL,
    search: Annotated[
        str,
        typer.Option("--search", "-s", help="match title or description"),
    ] = "",
    sort: Annotated[
        Optional[str],
        typer.Option(
            "--sort",
            "-o",
            callback=validate_sort_mode,
            help="priority, created_date, or due_date (default from config)",
        ),
    ] = None,
) -> None:
    with task_session() as store:
        store.set_filter("category", category)
        store.set_filter("priority", priority)
        store.set_filter("status", status)
        store.set_filter("search_term", search.strip())
        if sort is not None:
            store.set_sort_mode(sort)

        tasks = store.get_filtered_list()
        tasks_view(
            section_title(store.filter),
            tasks,
            now_local(),
            store.get_statistics()["total"],
        )


def stats() -> None:
    with task_session() as store:
        statistics_view(store.get_statistics())
