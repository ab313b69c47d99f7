"""
Assembly and validation of booking and registration requests.
"""

from datetime import date, datetime
from typing import Iterable, List, Optional, Union

import pendulum

from .exceptions import BookingValidationError
from .models import AppointmentRequest, ClientAppointment, ClientRegistration, ServiceItem
from .slot_calculator import format_slot, parse_clock

MIN_PASSWORD_LENGTH = 6

DateLike = Union[date, str]


def to_iso_date(value: DateLike) -> str:
    """
    Render a date (or an ISO "YYYY-MM-DD" string) as "YYYY-MM-DD".

    Raises:
        BookingValidationError: If a string cannot be parsed as a date
    """
    if isinstance(value, datetime):
        return value.date().isoformat()

    if isinstance(value, date):
        return value.isoformat()

    try:
        return pendulum.from_format(value.strip(), "YYYY-MM-DD").to_date_string()
    except ValueError as exc:
        raise BookingValidationError(f"Invalid date '{value}', expected YYYY-MM-DD") from exc


def merge_service_items(service_ids: Iterable[int]) -> List[ServiceItem]:
    """
    Collapse a list of selected service ids into service lines.

    Repeated ids increase the quantity; first-seen order is kept.
    """
    quantities: dict[int, int] = {}
    for service_id in service_ids:
        quantities[service_id] = quantities.get(service_id, 0) + 1

    return [
        ServiceItem(service_id=service_id, quantity=quantity)
        for service_id, quantity in quantities.items()
    ]


def build_appointment_request(
    *,
    client_id: Optional[int],
    professional_id: Optional[int],
    appointment_date: Optional[DateLike],
    start_time: Optional[str],
    service_ids: Iterable[int],
    status: str = "pending",
) -> AppointmentRequest:
    """
    Build an appointment-creation request from the user's selections.

    Args:
        client_id: Identity of the booking client, passed explicitly
        professional_id: Selected professional
        appointment_date: Selected date
        start_time: Selected slot ("HH:MM" or "HH:MM:SS")
        service_ids: Selected services; repeats become quantities
        status: Initial appointment status

    Returns:
        AppointmentRequest ready to be submitted

    Raises:
        BookingValidationError: If any selection is missing or malformed
    """
    services = merge_service_items(service_ids)

    if client_id is None:
        raise BookingValidationError(
            "A registered client is required before booking an appointment."
        )

    if professional_id is None or not appointment_date or not start_time or not services:
        raise BookingValidationError("Please complete all selections.")

    clock = parse_clock(start_time)
    if clock is None:
        raise BookingValidationError(f"Invalid start time '{start_time}', expected HH:MM")

    return AppointmentRequest(
        client_id=client_id,
        professional_id=professional_id,
        appointment_date=to_iso_date(appointment_date),
        start_time=format_slot(*clock),
        services=services,
        status=status,
    )


def validate_registration(
    *,
    name: str,
    email: str,
    phone_number: str,
    password: str,
    confirm_password: str,
    document: Optional[str] = None,
) -> ClientRegistration:
    """
    Check sign-up input and return the registration payload.

    Raises:
        BookingValidationError: If a required field is missing, the passwords
            differ, or the password is too short
    """
    name = (name or "").strip()
    email = (email or "").strip()
    phone_number = (phone_number or "").strip()

    if not name or not email or not phone_number or not password:
        raise BookingValidationError("Please fill in all required fields.")

    if password != confirm_password:
        raise BookingValidationError("Passwords do not match.")

    if len(password) < MIN_PASSWORD_LENGTH:
        raise BookingValidationError(
            f"Password must have at least {MIN_PASSWORD_LENGTH} characters."
        )

    return ClientRegistration(
        name=name,
        email=email,
        phone_number=phone_number,
        password=password,
        document=(document or "").strip() or None,
    )


def upcoming_appointments(
    appointments: Iterable[ClientAppointment],
    today: DateLike,
) -> List[ClientAppointment]:
    """Keep appointments dated today or later, soonest first."""
    cutoff = to_iso_date(today)
    upcoming = [
        appointment for appointment in appointments
        if appointment.appointment_date[:10] >= cutoff
    ]
    return sorted(upcoming, key=lambda appointment: appointment.sort_key())
