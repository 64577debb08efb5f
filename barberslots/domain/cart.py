"""
Booking cart and naive sequential placement of its services.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List

from pendulum import DateTime

from .clock import parse_clock_time
from .conflicts import slot_datetime
from .models import TimeSlot


@dataclass(frozen=True)
class SelectedService:
    """A service the customer added to the cart."""
    id: str
    name: str
    price: Decimal
    duration_minutes: int

    def __post_init__(self):
        if self.duration_minutes <= 0:
            raise ValueError(f"Service {self.name} must have a positive duration")


@dataclass
class BookingCart:
    """
    Services selected for one visit.

    The total duration is the slot length requested from the slot generator.
    """
    barber_shop_id: str
    barber_id: str | None = None
    services: List[SelectedService] = field(default_factory=list)

    @property
    def total_price(self) -> Decimal:
        return sum((service.price for service in self.services), Decimal("0"))

    @property
    def total_duration(self) -> int:
        return sum(service.duration_minutes for service in self.services)

    @property
    def is_empty(self) -> bool:
        return not self.services

    def add(self, service: SelectedService) -> None:
        self.services.append(service)

    def remove(self, service_id: str) -> None:
        """Remove the first service with ``service_id``; unknown ids are ignored."""
        for index, service in enumerate(self.services):
            if service.id == service_id:
                del self.services[index]
                return


@dataclass(frozen=True)
class PlannedBooking:
    """Where one cart service would be placed on the calendar."""
    service: SelectedService
    start: DateTime
    end: DateTime


def plan_sequential_bookings(
    cart: BookingCart,
    day: date,
    slot: TimeSlot,
    timezone: str = "UTC"
) -> List[PlannedBooking]:
    """
    Lay the cart's services back to back from the start of ``slot``.

    Only computes the placement; creating the bookings (and deciding what
    happens when one of several creations fails) is up to the caller.

    Raises:
        ValueError: If the cart is empty
    """
    if cart.is_empty:
        raise ValueError("Cannot plan bookings for an empty cart")

    cursor = slot_datetime(day, parse_clock_time(slot.start_time), timezone)
    planned: List[PlannedBooking] = []

    for service in cart.services:
        end = cursor.add(minutes=service.duration_minutes)
        planned.append(PlannedBooking(service=service, start=cursor, end=end))
        cursor = end

    return planned
