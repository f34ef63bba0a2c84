# SPDX-License-Identifier: MIT

"""
Alert policy.

These functions only decide which alerts a mutation should produce; they
never deliver anything. The store hands the resulting PendingAlert values
to its scheduler, which decides when they appear.
"""

from typing import Optional

import pendulum

from taskflow.model.alert import PendingAlert, Severity
from taskflow.model.task import Priority, Task
from taskflow.service.due import (
    due_instant,
    formatted_due,
    is_due_soon,
    is_due_today,
    is_overdue,
)

# Delays are relative to the immediate acknowledgment.
ATTENTION_DELAY_SECONDS = 1.5
DUE_DATE_DELAY_SECONDS = 2.0


def created_message(task: Task) -> str:
    return f'Task "{task["title"]}" created successfully!'


def updated_message(task: Task) -> str:
    return f'Task "{task["title"]}" updated successfully!'


def deleted_message(task: Task) -> str:
    return f'Task "{task["title"]}" deleted successfully!'


def toggled_message(task: Task) -> str:
    status = "completed" if task["is_completed"] else "reactivated"
    return f'Task "{task["title"]}" {status}!'


def cleared_message(count: int) -> tuple[str, str]:
    if count > 0:
        return f"{count} completed task(s) cleared!", Severity.SUCCESS
    return "No completed tasks to clear!", Severity.INFO


def overdue_message(task: Task) -> str:
    return f'⏰ Task "{task["title"]}" is now overdue!'


def _alert(task: Task, delay_seconds: float, message: str, severity: str) -> PendingAlert:
    return {
        "task_id": task["id"],
        "delay_seconds": delay_seconds,
        "message": message,
        "severity": severity,
    }


def due_date_alert(task: Task, now: pendulum.DateTime) -> Optional[PendingAlert]:
    """Alert for a task that is due today or within the due-soon window."""
    if is_due_today(task, now):
        return _alert(
            task,
            DUE_DATE_DELAY_SECONDS,
            f'📅 Task "{task["title"]}" is due today!',
            Severity.WARNING,
        )
    if is_due_soon(task, now):
        return _alert(
            task,
            DUE_DATE_DELAY_SECONDS,
            f'⏳ Task "{task["title"]}" is due soon ({formatted_due(task, now)})',
            Severity.INFO,
        )
    return None


def created_alerts(task: Task, now: pendulum.DateTime) -> list[PendingAlert]:
    alerts: list[PendingAlert] = []
    if task["priority"] == Priority.HIGH:
        alerts.append(
            _alert(
                task,
                ATTENTION_DELAY_SECONDS,
                f'⚠️ High priority task "{task["title"]}" needs attention!',
                Severity.WARNING,
            )
        )
    if task["due_date"]:
        due_alert = due_date_alert(task, now)
        if due_alert is not None:
            alerts.append(due_alert)
    return alerts


def updated_alerts(
    previous_priority: str,
    previous_due_date: Optional[str],
    task: Task,
    now: pendulum.DateTime,
) -> list[PendingAlert]:
    alerts: list[PendingAlert] = []
    if previous_priority != Priority.HIGH and task["priority"] == Priority.HIGH:
        alerts.append(
            _alert(
                task,
                ATTENTION_DELAY_SECONDS,
                f'🔥 Task "{task["title"]}" is now high priority!',
                Severity.WARNING,
            )
        )
    if not previous_due_date and task["due_date"]:
        due_alert = due_date_alert(task, now)
        if due_alert is not None:
            alerts.append(due_alert)
    return alerts


def completed_alerts(task: Task, was_overdue: bool) -> list[PendingAlert]:
    alerts: list[PendingAlert] = []
    if task["priority"] == Priority.HIGH:
        alerts.append(
            _alert(
                task,
                ATTENTION_DELAY_SECONDS,
                f'🎉 High priority task "{task["title"]}" completed! Excellent work!',
                Severity.SUCCESS,
            )
        )
    if was_overdue:
        alerts.append(
            _alert(
                task,
                ATTENTION_DELAY_SECONDS,
                f'✅ Overdue task "{task["title"]}" is finally done!',
                Severity.SUCCESS,
            )
        )
    return alerts


def reactivated_alerts(task: Task, now: pendulum.DateTime) -> list[PendingAlert]:
    alerts: list[PendingAlert] = []
    if task["priority"] == Priority.HIGH:
        alerts.append(
            _alert(
                task,
                ATTENTION_DELAY_SECONDS,
                f'⚠️ High priority task "{task["title"]}" is active again!',
                Severity.WARNING,
            )
        )
    if is_overdue(task, now):
        alerts.append(
            _alert(
                task,
                DUE_DATE_DELAY_SECONDS,
                f'⏰ Task "{task["title"]}" is overdue!',
                Severity.ERROR,
            )
        )
    return alerts


def newly_overdue(
    tasks: list[Task], since: pendulum.DateTime, now: pendulum.DateTime
) -> list[Task]:
    """Active tasks whose due instant falls in the window (since, now]."""
    results = []
    for task in tasks:
        if task["is_completed"]:
            continue
        instant = due_instant(task, now)
        if instant is not None and since < instant <= now:
            results.append(task)
    return results
