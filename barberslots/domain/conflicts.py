"""
Booking conflict detection and the future-slot filter.

Candidate slots are expressed in minutes since midnight on a target date;
bookings are full timestamps and are projected onto that date first.
"""

from datetime import date
from typing import Iterable, Tuple

import pendulum
from pendulum import DateTime

from .clock import MINUTES_PER_DAY
from .models import ExistingBooking


def booking_interval_on(
    booking: ExistingBooking,
    day: date,
    timezone: str
) -> Tuple[int, int] | None:
    """
    Project a booking onto ``day`` as a ``(start, end)`` minute interval.

    Returns None if the booking does not occupy time, is zero-length or
    starts on another calendar day. A booking running past midnight occupies
    the rest of the day.
    """
    if not booking.occupies_time:
        return None

    start = booking.start_time.in_timezone(timezone)
    if start.date() != day:
        return None

    end = booking.end_time.in_timezone(timezone)
    start_minutes = start.hour * 60 + start.minute

    if end.date() > day:
        end_minutes = MINUTES_PER_DAY
    else:
        end_minutes = end.hour * 60 + end.minute

    if end_minutes <= start_minutes:
        return None

    return start_minutes, end_minutes


def has_conflict(
    candidate_start: int,
    candidate_end: int,
    bookings: Iterable[ExistingBooking],
    day: date,
    timezone: str
) -> bool:
    """
    Check if ``[candidate_start, candidate_end)`` overlaps any booking on ``day``.

    Touching intervals (one ends exactly where the other starts) do not
    conflict.
    """
    for booking in bookings:
        interval = booking_interval_on(booking, day, timezone)
        if interval is None:
            continue

        booking_start, booking_end = interval
        if candidate_start < booking_end and candidate_end > booking_start:
            return True

    return False


def slot_datetime(day: date, start_minutes: int, timezone: str) -> DateTime:
    """Build the wall-clock datetime of ``start_minutes`` on ``day``."""
    return pendulum.datetime(
        day.year,
        day.month,
        day.day,
        hour=start_minutes // 60,
        minute=start_minutes % 60,
        tz=timezone
    )


def is_future(day: date, start_minutes: int, now: DateTime, timezone: str) -> bool:
    """Check if a slot starting at ``start_minutes`` on ``day`` is strictly after ``now``."""
    return slot_datetime(day, start_minutes, timezone) > now
