"""
Domain models for working hours, bookings and offered time slots.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping

import pendulum
from pendulum import DateTime

from .clock import parse_clock_time
from .exceptions import InvalidPeriodError


class BookingStatus(str, Enum):
    """Lifecycle status of a booking as reported by the API."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"

    @property
    def occupies_time(self) -> bool:
        """Whether a booking in this status blocks the barber's time."""
        return self not in (BookingStatus.CANCELLED, BookingStatus.NO_SHOW)


class DayOfWeek(str, Enum):
    """Weekday names used by working-hours records."""

    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"

    @classmethod
    def for_date(cls, day: date) -> "DayOfWeek":
        """Return the weekday of a calendar date."""
        return list(cls)[day.weekday()]  # 0=Monday


@dataclass(frozen=True)
class WorkingPeriod:
    """
    One open interval of a barber's availability on a weekday.

    Invariant: an active period opens before it closes. Inactive periods are
    ignored entirely, so they are not validated.
    """
    start_time: str
    end_time: str
    is_active: bool = True
    day_of_week: DayOfWeek | None = None

    def __post_init__(self):
        if not self.is_active:
            return
        if self.start_minutes >= self.end_minutes:
            raise InvalidPeriodError(
                f"Start time {self.start_time} must be before end time {self.end_time}"
            )

    @property
    def start_minutes(self) -> int:
        return parse_clock_time(self.start_time)

    @property
    def end_minutes(self) -> int:
        return parse_clock_time(self.end_time)

    def applies_to(self, day: date) -> bool:
        """Check if this period belongs to the weekday of ``day``."""
        return self.day_of_week is None or self.day_of_week == DayOfWeek.for_date(day)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "WorkingPeriod":
        """
        Build a period from an API record.

        Expected keys: ``startTime``, ``endTime``, ``isActive`` and optionally
        ``dayOfWeek``.

        Raises:
            KeyError: If a time is missing
            TypeError: If ``isActive`` is not a boolean
        """
        is_active = data.get("isActive", True)
        if not isinstance(is_active, bool):
            raise TypeError(f"isActive must be a boolean, got {is_active!r}")

        day_of_week = data.get("dayOfWeek")
        return cls(
            start_time=data["startTime"],
            end_time=data["endTime"],
            is_active=is_active,
            day_of_week=DayOfWeek(day_of_week) if day_of_week else None,
        )


@dataclass(frozen=True)
class ExistingBooking:
    """
    A previously made reservation that may block candidate slots.

    Invariant: the booking does not end before it starts. Timezone-aware
    ``datetime`` values are converted to pendulum DateTimes.
    """
    start_time: DateTime
    end_time: DateTime
    status: BookingStatus = BookingStatus.CONFIRMED

    def __post_init__(self):
        object.__setattr__(self, "start_time", _aware_datetime(self.start_time, "start"))
        object.__setattr__(self, "end_time", _aware_datetime(self.end_time, "end"))

        if self.end_time < self.start_time:
            raise ValueError(
                f"Booking end {self.end_time} must not be before its start {self.start_time}"
            )

    @property
    def occupies_time(self) -> bool:
        return self.status.occupies_time

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], timezone: str = "UTC") -> "ExistingBooking":
        """
        Build a booking from an API record.

        Timestamps without an offset are interpreted in ``timezone``.

        Raises:
            KeyError: If a required field is missing
            ValueError: If a timestamp or the status cannot be parsed
        """
        return cls(
            start_time=_parse_timestamp(data["startTime"], timezone),
            end_time=_parse_timestamp(data["endTime"], timezone),
            status=BookingStatus(data["status"]),
        )


@dataclass(frozen=True)
class TimeSlot:
    """
    A candidate appointment window offered on the target date.
    """
    start_time: str
    end_time: str
    is_available: bool

    def duration_minutes(self) -> int:
        """Return the slot length in minutes."""
        return parse_clock_time(self.end_time) - parse_clock_time(self.start_time)

    def format_display(self) -> str:
        """
        Format the slot for display.
        Format: HH:MM – HH:MM (available|booked)
        """
        state = "available" if self.is_available else "booked"
        return f"{self.start_time} – {self.end_time} ({state})"


def _aware_datetime(value: Any, field_name: str) -> DateTime:
    if isinstance(value, DateTime):
        return value

    if not isinstance(value, datetime):
        raise TypeError(f"Booking {field_name} must be a datetime, got {value!r}")

    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"Booking {field_name} must be timezone-aware, got {value}")

    return pendulum.instance(value)


def _parse_timestamp(value: Any, timezone: str) -> DateTime:
    if isinstance(value, DateTime):
        return value

    parsed = pendulum.parse(value, tz=timezone)
    if isinstance(parsed, DateTime):
        return parsed

    raise ValueError(f"Could not parse timestamp: {value!r}")
