"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .booking_slots import BookingSlotService, ScheduleSourceProtocol

__all__ = ["BookingSlotService", "ScheduleSourceProtocol"]
