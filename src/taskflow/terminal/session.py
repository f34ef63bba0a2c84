# SPDX-License-Identifier: MIT

import time
from contextlib import contextmanager
from typing import Iterator

import typer

from taskflow import state as app_state
from taskflow.exceptions import PersistenceError
from taskflow.initialize import open_task_store
from taskflow.model.alert import Severity
from taskflow.repository.task import TaskStore
from taskflow.service.scheduler import QueuedScheduler
from taskflow.view.alert import print_alert


@contextmanager
def task_session() -> Iterator[TaskStore]:
    """
    Open the task store for a single command.

    Deferred alerts are queued while the command runs and shown before it
    returns; with --pace-alerts their delays are honoured.
    """
    scheduler = QueuedScheduler(sleep=time.sleep if app_state.get_pace_alerts() else None)
    try:
        yield open_task_store(print_alert, scheduler)
    except PersistenceError as e:
        print_alert(f"{str(e).capitalize()}: {e.__cause__ or e}", Severity.ERROR)
        raise typer.Exit(code=1)
    finally:
        scheduler.run_pending()
