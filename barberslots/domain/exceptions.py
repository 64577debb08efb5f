"""
Domain-specific exception hierarchy for barberslots.
"""


class BarberSlotsError(Exception):
    """Base class for all application-level errors."""


class FormatError(BarberSlotsError, ValueError):
    """Raised when a clock time is not a valid ``HH:MM`` string."""


class InvalidDurationError(BarberSlotsError, ValueError):
    """Raised when a service duration is not a positive number of minutes."""


class InvalidPeriodError(BarberSlotsError, ValueError):
    """Raised when an active working period does not open before it closes."""


class ScheduleSourceError(BarberSlotsError):
    """Raised when working hours or bookings cannot be fetched or parsed."""
