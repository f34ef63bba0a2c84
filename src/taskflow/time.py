# SPDX-License-Identifier: MIT

import re
from typing import Callable, Optional, TypeAlias, cast

import pendulum

Clock: TypeAlias = Callable[[], pendulum.DateTime]

DUE_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
DUE_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def now_local() -> pendulum.DateTime:
    return pendulum.now("local")


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def datetime_to_display_date_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("MMM D, YYYY")


def parse_due_date(due_date: Optional[str]) -> Optional[tuple[int, int, int]]:
    """Split a YYYY-MM-DD string into (year, month, day), or None if malformed."""
    if not due_date:
        return None
    match = DUE_DATE_PATTERN.match(due_date.strip())
    if match is None:
        return None
    year, month, day = (int(part) for part in match.groups())
    return year, month, day


def parse_due_time(due_time: Optional[str]) -> Optional[tuple[int, int]]:
    """Split an HH:MM string into (hour, minute), or None if malformed."""
    if not due_time:
        return None
    match = DUE_TIME_PATTERN.match(due_time.strip())
    if match is None:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return None
    return hour, minute


def resolve_due_instant(
    due_date: Optional[str],
    due_time: Optional[str],
    tz: str | pendulum.Timezone | pendulum.FixedTimezone = "local",
) -> Optional[pendulum.DateTime]:
    """
    Build the moment a task falls due.

    The instant is composed from explicit calendar components in the given
    timezone so the date never shifts across a UTC offset. Without a time of
    day the task is due at the last millisecond of its date. A time without a
    date, or any malformed component, yields None.
    """
    date_parts = parse_due_date(due_date)
    if date_parts is None:
        return None
    year, month, day = date_parts

    time_parts = parse_due_time(due_time)
    try:
        if time_parts is None:
            return pendulum.datetime(
                year, month, day, 23, 59, 59, 999000, tz=tz
            )
        hour, minute = time_parts
        return pendulum.datetime(year, month, day, hour, minute, tz=tz)
    except ValueError:
        return None


def due_instant_to_display_str(instant: pendulum.DateTime, has_time: bool) -> str:
    if has_time:
        return instant.format("MMM D, YYYY HH:mm")
    return instant.format("MMM D, YYYY")
