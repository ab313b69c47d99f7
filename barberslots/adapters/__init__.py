"""
Adapters layer - External integrations (scheduling backend).
"""

from .booking_client import BookingClient
from .mock_booking_client import MockBookingClient

__all__ = ["BookingClient", "MockBookingClient"]
