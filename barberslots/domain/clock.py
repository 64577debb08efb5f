"""
Conversion between ``HH:MM`` clock times and minutes since midnight.
"""

import re

from .exceptions import FormatError

MINUTES_PER_DAY = 24 * 60

_CLOCK_TIME_PATTERN = re.compile(r"^([0-9]{2}):([0-9]{2})$")


def parse_clock_time(value: str) -> int:
    """
    Parse a 24-hour ``HH:MM`` string into minutes since midnight.

    Raises:
        FormatError: If the value is not exactly two-digit hours and minutes,
            or the hours/minutes are outside 0-23 / 0-59.
    """
    if not isinstance(value, str):
        raise FormatError(f"Clock time must be a string, got {value!r}")

    match = _CLOCK_TIME_PATTERN.match(value)
    if match is None:
        raise FormatError(f"Clock time must look like HH:MM, got {value!r}")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise FormatError(f"Clock time out of range: {value!r}")

    return hours * 60 + minutes


def format_clock_time(minutes: int) -> str:
    """Format minutes since midnight (wrapped to one day) as ``HH:MM``."""
    minutes = minutes % MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
