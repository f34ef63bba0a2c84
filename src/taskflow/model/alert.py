# SPDX-License-Identifier: MIT

from typing import Callable, TypeAlias, TypedDict

from taskflow.model.entity_id import EntityId


class Severity:
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    INFO = "info"


class PendingAlert(TypedDict):
    task_id: EntityId
    delay_seconds: float
    message: str
    severity: str


AlertSink: TypeAlias = Callable[[str, str], None]
