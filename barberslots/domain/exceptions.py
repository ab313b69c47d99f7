"""
Domain-specific exception hierarchy for the barberslots application.
"""


class BarberSlotsError(Exception):
    """Base class for all application-level errors."""


class BookingAPIError(BarberSlotsError):
    """Raised when the scheduling backend rejects a request or cannot be reached."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class BookingValidationError(BarberSlotsError):
    """Raised when booking or registration input is incomplete or invalid."""
