# SPDX-License-Identifier: MIT

import pendulum
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from taskflow.model.filter import ALL, FilterCriteria
from taskflow.model.statistics import Statistics
from taskflow.model.task import DueStatus, Priority, Task
from taskflow.service.due import due_status, formatted_created_date, formatted_due
from taskflow.view.header import header

COMPLETED_TASK_COLOR = "bright_black"

PRIORITY_COLORS = {
    Priority.HIGH: "red",
    Priority.MEDIUM: "yellow",
    Priority.LOW: "green",
}

DUE_STATUS_COLORS = {
    DueStatus.OVERDUE: "bold red",
    DueStatus.TODAY: "dark_orange",
    DueStatus.UPCOMING: "yellow",
    DueStatus.NORMAL: "white",
}

SHORT_ID_LENGTH = 8


def section_title(criteria: FilterCriteria) -> str:
    if criteria["search_term"].strip():
        return "Search Results"
    if criteria["category"] != ALL:
        return f"{criteria['category'].capitalize()} Tasks"
    return "All Tasks"


def short_id(task: Task) -> str:
    return task["id"][:SHORT_ID_LENGTH]


def _due_column(task: Task, now: pendulum.DateTime) -> str:
    label = formatted_due(task, now)
    if label is None:
        return ""
    status = due_status(task, now)
    color = DUE_STATUS_COLORS.get(status)
    if color is None:
        return label
    return f"[{color}]{label}[/{color}]"


def tasks_view(
    report_name: str,
    tasks: list[Task],
    now: pendulum.DateTime,
    total_count: int,
) -> None:
    header(report_name)

    console = Console()
    if not tasks:
        if total_count == 0:
            console.print(" No tasks found. Create your first task to get started!")
        else:
            console.print(" No tasks found. Try adjusting your filters or search terms.")
        return

    tasks_table = Table(box=box.SIMPLE)
    for column in ("id", "state", "priority", "category", "title", "due", "created"):
        tasks_table.add_column(column)

    for task in tasks:
        row = [
            short_id(task),
            "✓" if task["is_completed"] else "",
            task["priority"],
            task["category"],
            escape(task["title"]),
            _due_column(task, now),
            formatted_created_date(task),
        ]
        if task["is_completed"]:
            row = [
                f"[{COMPLETED_TASK_COLOR}]{value}[/{COMPLETED_TASK_COLOR}]"
                for value in row
            ]
        else:
            color = PRIORITY_COLORS.get(task["priority"])
            if color is not None:
                row[2] = f"[{color}]{row[2]}[/{color}]"
        tasks_table.add_row(*row)

    console.print(tasks_table)


def single_task_view(task: Task, now: pendulum.DateTime) -> None:
    header("task")

    task_table = Table(box=box.SIMPLE)
    task_table.add_column("property")
    task_table.add_column("value")

    task_table.add_row("id", task["id"])
    task_table.add_row("title", escape(task["title"]))
    if task["description"]:
        task_table.add_row("description", escape(task["description"]))
    task_table.add_row("priority", task["priority"])
    task_table.add_row("category", task["category"])
    task_table.add_row("completed", "yes" if task["is_completed"] else "no")
    if task["due_date"] is not None:
        task_table.add_row("due", _due_column(task, now))
        task_table.add_row("due status", due_status(task, now))
    task_table.add_row("created", formatted_created_date(task))
    task_table.add_row(
        "updated", task["updated_at"].in_tz("local").format("MMM D, YYYY HH:mm")
    )

    console = Console()
    console.print(task_table)


def statistics_view(statistics: Statistics) -> None:
    header("statistics")

    stats_table = Table(box=box.SIMPLE)
    stats_table.add_column("total")
    stats_table.add_column("active")
    stats_table.add_column("completed")
    stats_table.add_column("overdue")
    stats_table.add_column("high priority")
    stats_table.add_row(
        str(statistics["total"]),
        str(statistics["active"]),
        str(statistics["completed"]),
        f"[red]{statistics['overdue']}[/red]"
        if statistics["overdue"]
        else str(statistics["overdue"]),
        str(statistics["high_priority"]),
    )

    console = Console()
    console.print(stats_table)
