# SPDX-License-Identifier: MIT

from contextvars import ContextVar

_pace_alerts: ContextVar[bool] = ContextVar("pace_alerts", default=False)


def set_pace_alerts(value: bool) -> None:
    _pace_alerts.set(value)


def get_pace_alerts() -> bool:
    return _pace_alerts.get()
