"""
Wall-clock arithmetic.

Every time value that enters the engine ("9:00 AM", "09:00", a
datetime.time) is normalized here into an integer count of minutes since
midnight. Raw strings are never compared.
"""

import re
from datetime import date as date_type, datetime, time as time_type, timedelta
from enum import Enum
from typing import Union

from .errors import InvalidInput

MINUTES_PER_DAY = 24 * 60

_TIME_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::\d{2})?\s*([AaPp][Mm])?\s*$")

TimeLike = Union[str, int, time_type]


class Weekday(str, Enum):
    """Keys of every per-weekday hours map."""
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def from_date(cls, day: date_type) -> "Weekday":
        return list(cls)[day.weekday()]


def to_minutes(value: TimeLike) -> int:
    """
    Convert "h:mm AM/PM", "HH:mm" (or an int / datetime.time) to minutes
    since midnight.

    12 AM is midnight (0), 12 PM is noon (720); any other PM hour adds 12.
    """
    if isinstance(value, bool):
        raise InvalidInput(f"Invalid time value: {value!r}")
    if isinstance(value, int):
        if not 0 <= value <= MINUTES_PER_DAY:
            raise InvalidInput(f"Minutes out of range: {value}")
        return value
    if isinstance(value, time_type):
        return value.hour * 60 + value.minute
    if not isinstance(value, str):
        raise InvalidInput(f"Invalid time value: {value!r}")

    match = _TIME_RE.match(value)
    if not match:
        raise InvalidInput(f"Unparsable time string: {value!r}")

    hours, mins, period = int(match.group(1)), int(match.group(2)), match.group(3)
    if mins > 59:
        raise InvalidInput(f"Unparsable time string: {value!r}")

    if period:
        if not 1 <= hours <= 12:
            raise InvalidInput(f"Unparsable time string: {value!r}")
        period = period.upper()
        if period == "PM" and hours != 12:
            hours += 12
        elif period == "AM" and hours == 12:
            hours = 0
    elif hours > 24 or (hours == 24 and mins):
        raise InvalidInput(f"Unparsable time string: {value!r}")

    return hours * 60 + mins


def overlaps(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    """Half-open interval test. Touching intervals (end == start) do not overlap."""
    return start_a < end_b and end_a > start_b


def day_of_week_key(day: date_type) -> Weekday:
    return Weekday.from_date(day)


def format_12h(minutes: int) -> str:
    """540 -> '9:00 AM'"""
    hours, mins = divmod(minutes % MINUTES_PER_DAY, 60)
    period = "PM" if hours >= 12 else "AM"
    hour12 = hours % 12 or 12
    return f"{hour12}:{mins:02d} {period}"


def format_24h(minutes: int) -> str:
    """540 -> '09:00'"""
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def combine(day: date_type, minutes: int) -> datetime:
    """Naive wall-clock datetime for a minute offset on a calendar day."""
    return datetime.combine(day, time_type(0, 0)) + timedelta(minutes=minutes)
