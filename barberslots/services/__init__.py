"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .availability import AvailabilityService, BookingClientProtocol

__all__ = ["AvailabilityService", "BookingClientProtocol"]
