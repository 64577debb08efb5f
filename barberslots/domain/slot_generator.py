"""
Core business logic for generating bookable appointment slots.

This is the heart of the application - pure domain logic without any
external dependencies (no API calls, no storage, no I/O). The current time
is passed in by the caller.
"""

from datetime import date
from typing import List, Sequence

from pendulum import DateTime

from .clock import format_clock_time
from .conflicts import has_conflict, is_future
from .exceptions import InvalidDurationError
from .models import ExistingBooking, TimeSlot, WorkingPeriod

SLOT_INTERVAL_MINUTES = 30
DEFAULT_SERVICE_DURATION_MINUTES = 60
DEFAULT_WORKING_PERIOD = WorkingPeriod(start_time="09:00", end_time="20:00", is_active=True)


class SlotGenerator:
    """
    Turns working hours and existing bookings into candidate time slots.

    Algorithm:
    1. Drop inactive working periods
    2. For each period, step a cursor from opening time in fixed intervals
    3. Emit a slot of the service duration wherever it fits before closing
    4. Mark the slot available if no booking overlaps it and it lies in the future
    """

    def __init__(
        self,
        timezone: str = "UTC",
        slot_interval_minutes: int = SLOT_INTERVAL_MINUTES,
        default_period: WorkingPeriod = DEFAULT_WORKING_PERIOD
    ):
        if slot_interval_minutes <= 0:
            raise ValueError(f"Slot interval must be positive, got {slot_interval_minutes}")

        self.timezone = timezone
        self.slot_interval_minutes = slot_interval_minutes
        self.default_period = default_period

    def generate_slots(
        self,
        periods: Sequence[WorkingPeriod],
        bookings: Sequence[ExistingBooking],
        day: date,
        service_duration_minutes: int | None = None,
        *,
        now: DateTime
    ) -> List[TimeSlot]:
        """
        Generate all candidate slots for one date.

        Args:
            periods: Working periods already filtered to the weekday of ``day``
            bookings: The barber's bookings on any date
            day: Calendar date to generate slots for
            service_duration_minutes: Length of each slot, 60 if omitted
            now: Current time; only slots starting after it are available

        Returns:
            Slots in period order, then start-time order

        Raises:
            InvalidDurationError: If the duration is not a positive integer
        """
        duration = self._resolve_duration(service_duration_minutes)

        active_periods = [period for period in periods if period.is_active]

        if not active_periods:
            return []

        slots: List[TimeSlot] = []

        for period in active_periods:
            slots.extend(
                self._slots_for_period(period, bookings, day, duration, now)
            )

        return slots

    def generate_default_slots(
        self,
        day: date,
        service_duration_minutes: int | None = None,
        *,
        now: DateTime
    ) -> List[TimeSlot]:
        """
        Generate slots over the default business hours with no bookings.

        Used by callers that have no schedule for the barber at all.
        """
        return self.generate_slots(
            [self.default_period],
            [],
            day,
            service_duration_minutes,
            now=now
        )

    def _slots_for_period(
        self,
        period: WorkingPeriod,
        bookings: Sequence[ExistingBooking],
        day: date,
        duration: int,
        now: DateTime
    ) -> List[TimeSlot]:
        slots: List[TimeSlot] = []
        period_end = period.end_minutes

        for start in range(period.start_minutes, period_end, self.slot_interval_minutes):
            end = start + duration

            # A slot running past closing time does not exist at all
            if end > period_end:
                continue

            available = (
                not has_conflict(start, end, bookings, day, self.timezone)
                and is_future(day, start, now, self.timezone)
            )

            slots.append(
                TimeSlot(
                    start_time=format_clock_time(start),
                    end_time=format_clock_time(end),
                    is_available=available
                )
            )

        return slots

    @staticmethod
    def _resolve_duration(service_duration_minutes: int | None) -> int:
        if service_duration_minutes is None:
            return DEFAULT_SERVICE_DURATION_MINUTES

        if isinstance(service_duration_minutes, bool) or not isinstance(service_duration_minutes, int):
            raise InvalidDurationError(
                f"Service duration must be an integer number of minutes, got {service_duration_minutes!r}"
            )

        if service_duration_minutes <= 0:
            raise InvalidDurationError(
                f"Service duration must be greater than zero, got {service_duration_minutes}"
            )

        return service_duration_minutes
