"""Wall-clock time parsing utilities."""

import re
from datetime import datetime

DEFAULT_TIME_OF_DAY = (9, 0)

_TIME_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$")


def parse_time_of_day(time_str: str) -> tuple[int, int]:
    """Parse a strict "HH:MM" string into (hour, minute).

    Accepts 00:00 through 23:59; a single-digit hour ("9:30") is allowed.

    Raises:
        ValueError: If the string is not a valid time of day
    """
    value = (time_str or "").strip()
    if not _TIME_PATTERN.match(value):
        raise ValueError(f"Could not parse time '{time_str}'")
    hour, minute = value.split(":")
    return int(hour), int(minute)


def parse_time_of_day_or_default(time_str: str) -> tuple[int, int]:
    """Parse "HH:MM", falling back to 09:00 for short or malformed input."""
    if not time_str or len(time_str) < 5:
        return DEFAULT_TIME_OF_DAY
    try:
        parsed = datetime.strptime(time_str, "%H:%M")
    except ValueError:
        return DEFAULT_TIME_OF_DAY
    return parsed.hour, parsed.minute
