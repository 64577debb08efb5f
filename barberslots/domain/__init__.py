"""
Domain layer - Pure business logic without external dependencies.
"""

from .cart import BookingCart, PlannedBooking, SelectedService, plan_sequential_bookings
from .clock import format_clock_time, parse_clock_time
from .models import BookingStatus, DayOfWeek, ExistingBooking, TimeSlot, WorkingPeriod
from .slot_generator import SlotGenerator

__all__ = [
    "BookingCart",
    "BookingStatus",
    "DayOfWeek",
    "ExistingBooking",
    "PlannedBooking",
    "SelectedService",
    "SlotGenerator",
    "TimeSlot",
    "WorkingPeriod",
    "format_clock_time",
    "parse_clock_time",
    "plan_sequential_bookings",
]
