"""
Application services for browsing availability and booking appointments.

The service coordinates data retrieval through a booking client adapter and
delegates the availability calculation to the domain-level ``SlotCalculator``.
This keeps the CLI thin and allows the backend to be replaced by a stub in
tests via a simple protocol.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Protocol, Sequence

from ..domain.booking import build_appointment_request, to_iso_date, upcoming_appointments
from ..domain.exceptions import BookingAPIError
from ..domain.models import (
    AppointmentRequest,
    BookingConfirmation,
    ClientAppointment,
    Professional,
    ScheduleForDate,
    Service,
    TimeSlot,
)
from ..domain.slot_calculator import SlotCalculator

logger = logging.getLogger(__name__)


class BookingClientProtocol(Protocol):
    """Protocol describing the backend client behaviour needed by the service."""

    def get_services(self) -> List[Service]:
        """Return the service catalogue."""

    def get_team_members(self) -> List[Professional]:
        """Return every team member."""

    def get_professional_schedule(self, professional_id: int, day: date | str) -> ScheduleForDate:
        """Return the schedule and booked appointments for a date."""

    def create_appointment(self, request: AppointmentRequest) -> Dict[str, Any]:
        """Submit an appointment and return the backend's response."""

    def get_client_appointments(self, client_id: int) -> List[ClientAppointment]:
        """Return a client's appointments."""


class AvailabilityService:
    """
    Orchestrates schedule retrieval, slot calculation and booking.

    Dependency inversion toward a protocol makes it easy to plug in the real
    HTTP client or the mock implementation.
    """

    def __init__(
        self,
        client: BookingClientProtocol,
        slot_calculator: SlotCalculator | None = None,
    ) -> None:
        self._client = client
        self._slot_calculator = slot_calculator or SlotCalculator()

    def available_slots(self, professional_id: int, day: date | str) -> List[TimeSlot]:
        """
        Fetch a professional's schedule for a date and compute free slots.

        A failed fetch is reported as no availability rather than an error.
        """
        try:
            schedule_for_date = self._client.get_professional_schedule(professional_id, day)
        except BookingAPIError as exc:
            logger.warning(
                "Could not load schedule for professional %s on %s: %s",
                professional_id,
                day,
                exc,
            )
            return []

        slots = self._slot_calculator.available_slots(
            schedule_for_date.schedule,
            schedule_for_date.appointments,
        )
        logger.debug(
            "Professional %s has %d free slot(s) on %s",
            professional_id,
            len(slots),
            day,
        )
        return slots

    def list_services(self) -> List[Service]:
        """Return the bookable services."""
        return self._client.get_services()

    def list_professionals(self) -> List[Professional]:
        """Return only the team members that have a working schedule."""
        return [member for member in self._client.get_team_members() if member.has_schedule]

    def book(
        self,
        *,
        client_id: int,
        professional_id: int,
        appointment_date: date | str,
        start_time: str,
        service_ids: Sequence[int],
        status: str = "pending",
    ) -> BookingConfirmation:
        """
        Assemble and submit an appointment.

        The client identity is always passed in by the caller. The returned
        confirmation carries the normalized request that was sent.

        Raises:
            BookingValidationError: If a selection is missing or malformed
            BookingAPIError: If the backend rejects the appointment
        """
        request = build_appointment_request(
            client_id=client_id,
            professional_id=professional_id,
            appointment_date=appointment_date,
            start_time=start_time,
            service_ids=service_ids,
            status=status,
        )
        logger.info(
            "Booking professional %s on %s at %s for client %s",
            request.professional_id,
            request.appointment_date,
            request.start_time,
            request.client_id,
        )
        response = self._client.create_appointment(request)
        return BookingConfirmation(request=request, response=response or {})

    def upcoming_appointments(self, client_id: int, today: date | str) -> List[ClientAppointment]:
        """Return a client's appointments from today on, soonest first."""
        appointments = self._client.get_client_appointments(client_id)
        return upcoming_appointments(appointments, to_iso_date(today))
