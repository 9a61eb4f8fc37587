"""Wall-clock time helpers.

All schedule times are ``HH:MM`` strings on a single rolling 24-hour cycle.
There is no date component, so arithmetic wraps at midnight.
"""

import re
from typing import Tuple

MINUTES_PER_DAY = 24 * 60

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def to_minutes(time: str) -> int:
    """
    Convert an ``HH:MM`` string to minutes since midnight.

    Raises:
        ValueError: If the string is not a valid wall-clock time
    """
    match = _TIME_PATTERN.match(time.strip()) if isinstance(time, str) else None
    if not match:
        raise ValueError(f"Invalid time {time!r}, expected HH:MM")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValueError(f"Invalid time {time!r}, expected HH:MM")

    return hours * 60 + minutes


def from_minutes(minutes: int) -> str:
    """Format minutes since midnight as ``HH:MM``, wrapping into one day."""
    minutes %= MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def compare_times(time1: str, time2: str) -> int:
    """Negative, zero or positive as ``time1`` is before, equal to or after ``time2``."""
    return to_minutes(time1) - to_minutes(time2)


def time_difference(early: str, late: str) -> int:
    """
    Minutes from ``early`` to ``late``.

    A ``late`` time that is numerically smaller than ``early`` is taken to
    be on the other side of midnight.
    """
    start = to_minutes(early)
    end = to_minutes(late)
    if end < start:
        return MINUTES_PER_DAY - start + end
    return end - start


def add_minutes(time: str, minutes: int) -> str:
    """Shift a time by a (possibly negative) number of minutes."""
    return from_minutes(to_minutes(time) + minutes)


def add_hours(time: str, hours: int) -> str:
    """Shift a time by whole hours."""
    return add_minutes(time, hours * 60)


def hour_of(time: str) -> int:
    """Hour component of a time."""
    return to_minutes(time) // 60


def is_time_in_window(time: str, window_start: str, window_end: str) -> bool:
    """
    Check whether ``time`` falls inside ``[window_start, window_end]``.

    Both bounds are inclusive. A window whose end is earlier than its start
    spans midnight, e.g. ``22:00-02:00`` holds 23:30 and 01:00.
    """
    value = to_minutes(time)
    start = to_minutes(window_start)
    end = to_minutes(window_end)

    if end < start:
        return value >= start or value <= end

    return start <= value <= end


def parse_window(text: str) -> Tuple[str, str]:
    """Split an ``HH:MM-HH:MM`` window into validated bounds."""
    start, sep, end = text.partition("-")
    if not sep:
        raise ValueError(f"Invalid time window {text!r}, expected HH:MM-HH:MM")
    to_minutes(start)
    to_minutes(end)
    return start.strip(), end.strip()
