# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from taskflow.model.entity_id import EntityId
from taskflow.repository.task import TaskStore
from taskflow.time import parse_due_date


def parse_date(date_param: Optional[str]) -> Optional[str]:
    """
    Turn a user supplied date into a YYYY-MM-DD string.

    Valid inputs: YYYY-MM-DD, today, tomorrow, yesterday (or t, o, y), or a
    day offset relative to today like 1 or -1.
    """
    if date_param is None:
        return None

    date = str(date_param).strip()

    if re.match(r"^\d{4}-\d{1,2}-\d{1,2}$", date):
        parts = parse_due_date(date)
        if parts is None:
            raise typer.BadParameter("Incorrect date format")
        year, month, day = parts
        try:
            return pendulum.date(year, month, day).to_date_string()
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date: {e}")

    if re.match(r"^-?\d+$", date):
        return pendulum.today("local").add(days=int(date)).to_date_string()

    if date == "today" or date == "t":
        return pendulum.today("local").to_date_string()
    if date == "tomorrow" or date == "o":
        return pendulum.tomorrow("local").to_date_string()
    if date == "yesterday" or date == "y":
        return pendulum.yesterday("local").to_date_string()
    raise typer.BadParameter("Incorrect date format")


def resolve_task_id(store: TaskStore, id_param: str) -> EntityId:
    """
    Expand a (possibly shortened) id to the full task id.

    Ids are shown abbreviated, so any unique prefix is accepted. An unknown
    id is returned unchanged and left for the store to report as not found.
    """
    matches = [
        task["id"]
        for task in store.get_all_tasks()
        if task["id"].startswith(id_param)
    ]
    if len(matches) > 1:
        raise typer.BadParameter(f"Id '{id_param}' matches {len(matches)} tasks")
    if len(matches) == 1:
        return matches[0]
    return id_param
