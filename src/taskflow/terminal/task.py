# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from taskflow.model.alert import Severity
from taskflow.model.task import TaskDraft, TaskPatch
from taskflow.terminal.custom_typer import AliasedTyperGroup
from taskflow.terminal.parse import parse_date, resolve_task_id
from taskflow.terminal.session import task_session
from taskflow.terminal.validate import (
    validate_due_time,
    validate_priority,
    validate_title,
)
from taskflow.time import now_local
from taskflow.view.alert import print_alert
from taskflow.view.task import single_task_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

DATE_HELP = "valid inputs: YYYY-MM-DD, today, tomorrow, yesterday, or day offset like 1, -1"


@app.command("add, a", no_args_is_help=True)
def add(
    title: Annotated[str, typer.Argument(callback=validate_title)],
    description: Annotated[str, typer.Option("--description", "-d")] = "",
    priority: Annotated[
        str,
        typer.Option(
            "--priority",
            "-p",
            callback=validate_priority,
            help="valid input: low, medium, high",
        ),
    ] = "medium",
    category: Annotated[
        str, typer.Option("--category", "-c", help="e.g. personal, work")
    ] = "personal",
    due: Annotated[
        Optional[str],
        typer.Option("--due", "-u", parser=parse_date, help=DATE_HELP),
    ] = None,
    at: Annotated[
        Optional[str],
        typer.Option(
            "--at",
            "-t",
            callback=validate_due_time,
            help="due time of day, valid input: HH:mm (needs --due)",
        ),
    ] = None,
) -> None:
    if at is not None and due is None:
        raise typer.BadParameter("--at needs a due date", param_hint="--at")

    draft: TaskDraft = {
        "title": title,
        "description": description.strip(),
        "priority": priority,
        "category": category,
        "due_date": due,
        "due_time": at,
    }
    with task_session() as store:
        task = store.create(draft)
        single_task_view(task, now_local())


@app.command("modify, m", no_args_is_help=True)
def modify(
    id: str,
    title: Annotated[
        Optional[str], typer.Option("--title", "-ti", callback=validate_title)
    ] = None,
    description: Annotated[Optional[str], typer.Option("--description", "-d")] = None,
    priority: Annotated[
        Optional[str],
        typer.Option(
            "--priority",
            "-p",
            callback=validate_priority,
            help="valid input: low, medium, high",
        ),
    ] = None,
    category: Annotated[Optional[str], typer.Option("--category", "-c")] = None,
    due: Annotated[
        Optional[str],
        typer.Option("--due", "-u", parser=parse_date, help=DATE_HELP),
    ] = None,
    at: Annotated[
        Optional[str],
        typer.Option(
            "--at", "-t", callback=validate_due_time, help="valid input: HH:mm"
        ),
    ] = None,
    remove_due: Annotated[
        bool, typer.Option("--remove-due", "-ru", help="clear due date and time")
    ] = False,
    remove_time: Annotated[
        bool, typer.Option("--remove-time", "-rt", help="clear due time only")
    ] = False,
) -> None:
    patch: TaskPatch = {}
    if title is not None:
        patch["title"] = title
    if description is not None:
        patch["description"] = description.strip()
    if priority is not None:
        patch["priority"] = priority
    if category is not None:
        patch["category"] = category
    if due is not None:
        patch["due_date"] = due
    if at is not None:
        patch["due_time"] = at
    if remove_due:
        patch["due_date"] = None
        patch["due_time"] = None
    if remove_time:
        patch["due_time"] = None

    with task_session() as store:
        task_id = resolve_task_id(store, id)
        existing = store.find_by_id(task_id)
        if existing is None:
            print_alert(f"Task {id} not found", Severity.ERROR)
            raise typer.Exit(code=1)
        if at is not None and existing["due_date"] is None and due is None:
            raise typer.BadParameter("--at needs a due date", param_hint="--at")

        store.begin_edit(task_id)
        task = store.submit(patch)
        if task is not None:
            single_task_view(task, now_local())


@app.command("delete, del", no_args_is_help=True)
def delete(
    id: str,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="skip confirmation")] = False,
) -> None:
    with task_session() as store:
        task_id = resolve_task_id(store, id)
        task = store.find_by_id(task_id)
        if task is None:
            print_alert(f"Task {id} not found", Severity.ERROR)
            raise typer.Exit(code=1)
        if not yes and not typer.confirm(
            f'Are you sure you want to delete "{task["title"]}"?'
        ):
            raise typer.Abort()
        store.delete(task_id)


@app.command("done, d", no_args_is_help=True)
def done(id: str) -> None:
    """Mark a task completed, or active again if it already is."""
    with task_session() as store:
        task = store.toggle_completion(resolve_task_id(store, id))
        if task is None:
            print_alert(f"Task {id} not found", Severity.ERROR)
            raise typer.Exit(code=1)


@app.command("show, s", no_args_is_help=True)
def show(id: str) -> None:
    with task_session() as store:
        task = store.find_by_id(resolve_task_id(store, id))
        if task is None:
            print_alert(f"Task {id} not found", Severity.ERROR)
            raise typer.Exit(code=1)
        single_task_view(task, now_local())


@app.command("clear, cl")
def clear(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="skip confirmation")] = False,
) -> None:
    """Remove every completed task."""
    with task_session() as store:
        completed = store.get_statistics()["completed"]
        if completed > 0 and not yes:
            if not typer.confirm(f"Clear {completed} completed task(s)?"):
                raise typer.Abort()
        store.clear_completed()
