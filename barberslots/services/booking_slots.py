"""
Application service for offering appointment slots for a barber.

The service fetches working hours and bookings through a schedule source
adapter and delegates the slot generation to the domain-level
``SlotGenerator``. The schedule source is a simple protocol so the GraphQL
client and the mock client are interchangeable, and tests can use a stub.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List, Protocol

import pendulum
from pendulum import DateTime

from ..domain.models import ExistingBooking, TimeSlot, WorkingPeriod
from ..domain.slot_generator import SlotGenerator

logger = logging.getLogger(__name__)


class ScheduleSourceProtocol(Protocol):
    """Protocol describing the schedule data needed by the service."""

    def get_working_hours(self, barber_id: str) -> List[WorkingPeriod] | None:
        """Return all working periods of a barber, or None if no schedule exists."""

    def get_bookings(self, barber_id: str) -> List[ExistingBooking]:
        """Return the barber's bookings on any date."""


class BookingSlotService:
    """
    Orchestrates schedule retrieval and slot generation.
    """

    def __init__(
        self,
        schedule_source: ScheduleSourceProtocol,
        slot_generator: SlotGenerator,
        clock: Callable[[], DateTime] | None = None,
    ) -> None:
        self._schedule_source = schedule_source
        self._slot_generator = slot_generator
        self._clock = clock or (lambda: pendulum.now(slot_generator.timezone))

    def find_slots(
        self,
        *,
        barber_id: str,
        day: date,
        service_duration_minutes: int | None = None,
    ) -> List[TimeSlot]:
        """
        Fetch the barber's schedule and generate the slots for ``day``.

        Falls back to default business hours (ignoring bookings) when the
        source has no schedule at all for the barber.
        """
        now = self._clock()
        working_hours = self._schedule_source.get_working_hours(barber_id)

        if working_hours is None:
            logger.debug("No schedule for barber %s, using default hours", barber_id)
            return self._slot_generator.generate_default_slots(
                day,
                service_duration_minutes,
                now=now,
            )

        periods = self.periods_for_day(working_hours, day)
        bookings = self._schedule_source.get_bookings(barber_id)

        slots = self._slot_generator.generate_slots(
            periods,
            bookings,
            day,
            service_duration_minutes,
            now=now,
        )

        logger.debug(
            "Barber %s on %s: %d period(s), %d booking(s), %d slot(s)",
            barber_id,
            day,
            len(periods),
            len(bookings),
            len(slots),
        )

        return slots

    @staticmethod
    def periods_for_day(
        working_hours: List[WorkingPeriod],
        day: date,
    ) -> List[WorkingPeriod]:
        """Keep the periods belonging to the weekday of ``day``, in their original order."""
        return [period for period in working_hours if period.applies_to(day)]
