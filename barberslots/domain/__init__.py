"""
Domain layer - Pure business logic without external dependencies.
"""

from .exceptions import BarberSlotsError, BookingAPIError, BookingValidationError
from .models import (
    AppointmentRequest,
    BookedAppointment,
    BookingConfirmation,
    ClientAppointment,
    ClientPhoto,
    ClientRegistration,
    Plan,
    Professional,
    ScheduleForDate,
    Service,
    ServiceItem,
    TimeSlot,
    WorkSchedule,
)
from .slot_calculator import SlotCalculator

__all__ = [
    "AppointmentRequest",
    "BarberSlotsError",
    "BookedAppointment",
    "BookingConfirmation",
    "BookingAPIError",
    "BookingValidationError",
    "ClientAppointment",
    "ClientPhoto",
    "ClientRegistration",
    "Plan",
    "Professional",
    "ScheduleForDate",
    "Service",
    "ServiceItem",
    "SlotCalculator",
    "TimeSlot",
    "WorkSchedule",
]
