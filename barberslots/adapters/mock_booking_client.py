"""
Mock scheduling backend client for working without a running server.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, List

import pendulum

from ..domain.booking import to_iso_date
from ..domain.calendar import WEEKDAYS_EN
from ..domain.models import (
    AppointmentRequest,
    ClientAppointment,
    ClientPhoto,
    ClientRegistration,
    Plan,
    Professional,
    ScheduleForDate,
    Service,
)
from .booking_client import (
    parse_client_appointment,
    parse_client_photo,
    parse_plan,
    parse_professional,
    parse_schedule_response,
    parse_service,
)

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = Path(__file__).parent / "mock_booking_data.json"


class MockBookingClient:
    """
    Mock client that simulates the scheduling backend.

    Loads services, team members, weekly schedules and existing appointments
    from mock_booking_data.json. Appointments and clients created through the
    mock are kept in memory for the lifetime of the instance.
    """

    def __init__(self, data_file: Path | None = None):
        """
        Initialize the mock client.

        Args:
            data_file: Optional path to an alternative JSON fixture
        """
        self.data_file = data_file or DEFAULT_DATA_FILE
        self._load_data()

    def _load_data(self) -> None:
        """Load mock data from the JSON fixture."""
        if self.data_file.exists():
            with open(self.data_file, "r", encoding="utf-8") as f:
                self.data: Dict[str, Any] = json.load(f)
        else:
            logger.warning("Mock data file %s not found, starting empty", self.data_file)
            self.data = {}

        self.appointments: List[Dict[str, Any]] = list(self.data.get("appointments", []))
        self.clients: List[Dict[str, Any]] = list(self.data.get("clients", []))

    def get_services(self) -> List[Service]:
        return [parse_service(item) for item in self.data.get("services", [])]

    def get_team_members(self) -> List[Professional]:
        return [parse_professional(item) for item in self.data.get("team_members", [])]

    def get_professional_schedule(self, professional_id: int, day: date | str) -> ScheduleForDate:
        """
        Resolve the weekly schedule template for the date's weekday.

        Professionals without a template, or weekdays missing from it, yield
        no schedule at all.
        """
        iso_day = to_iso_date(day)
        weekday_en = WEEKDAYS_EN[pendulum.parse(iso_day).weekday()]

        weekly = self.data.get("schedules", {}).get(str(professional_id), {})
        schedule = weekly.get(weekday_en)

        booked = [
            {"start_time": appointment["start_time"]}
            for appointment in self.appointments
            if int(appointment["professional_id"]) == int(professional_id)
            and appointment["appointment_date"] == iso_day
            and appointment.get("status") != "canceled"
        ]

        return parse_schedule_response({"schedule": schedule, "appointments": booked})

    def create_appointment(self, request: AppointmentRequest) -> Dict[str, Any]:
        """
        Store the appointment in memory and echo it back with an id.

        Service and professional names are filled in from the fixture so the
        stored record reads like one returned by the backend.
        """
        service_names = {
            int(item["service_id"]): item.get("service_name", "")
            for item in self.data.get("services", [])
        }
        member_names = {
            int(item["id"]): item.get("name", "")
            for item in self.data.get("team_members", [])
        }

        record = request.to_payload()
        record["id"] = len(self.appointments) + 1
        record["professional_name"] = member_names.get(int(request.professional_id))
        for entry in record["services"]:
            entry["service_name"] = service_names.get(int(entry["service_id"]), "")
        self.appointments.append(record)
        logger.debug("Mock appointment created: %s", record)
        return dict(record)

    def create_client(self, registration: ClientRegistration) -> Dict[str, Any]:
        record = registration.to_payload()
        record.pop("password", None)
        record["id"] = len(self.clients) + 1
        self.clients.append(record)
        return dict(record)

    def get_client_appointments(self, client_id: int) -> List[ClientAppointment]:
        return [
            parse_client_appointment(appointment)
            for appointment in self.appointments
            if int(appointment.get("client_id", 0)) == int(client_id)
        ]

    def get_plans(self) -> List[Plan]:
        return [parse_plan(item) for item in self.data.get("plans", [])]

    def get_client_photos(self) -> List[ClientPhoto]:
        return [parse_client_photo(item) for item in self.data.get("client_photos", [])]
