"""
HTTP client for the barbershop scheduling backend.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

import requests

from ..domain.booking import to_iso_date
from ..domain.exceptions import BookingAPIError
from ..domain.models import (
    AppointmentRequest,
    BookedAppointment,
    ClientAppointment,
    ClientPhoto,
    ClientRegistration,
    Plan,
    Professional,
    ScheduleForDate,
    Service,
    WorkSchedule,
)

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Erro na requisição"


class BookingClient:
    """
    Client for the scheduling backend's REST API.

    Every request carries the ``company_id`` header that scopes the shop.
    Non-2xx responses and transport failures are raised as BookingAPIError.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3131",
        company_id: str = "1",
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Backend root URL
            company_id: Shop identifier sent with every request
            timeout: Per-request timeout in seconds
            session: Optional pre-configured requests session
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {
            "Content-Type": "application/json",
            "company_id": str(company_id),
        }

    def _request(
        self,
        method: str,
        endpoint: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Send a request and return the decoded JSON body.

        Raises:
            BookingAPIError: If the backend answers with an error status or
                cannot be reached
        """
        url = f"{self.base_url}{endpoint}"
        logger.debug("%s %s", method, url)

        try:
            response = self.session.request(
                method,
                url,
                headers=self.headers,
                json=payload if method != "GET" else None,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as exc:
            logger.warning("Request to %s failed: %s", url, exc)
            raise BookingAPIError(str(exc) or DEFAULT_ERROR_MESSAGE, status_code=500) from exc

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.ok:
            message = DEFAULT_ERROR_MESSAGE
            if isinstance(data, dict) and data.get("message"):
                message = str(data["message"])
            logger.warning("%s %s returned %s: %s", method, url, response.status_code, message)
            raise BookingAPIError(message, status_code=response.status_code)

        return data

    def get_services(self) -> List[Service]:
        """Fetch the shop's service catalogue."""
        data = self._request("GET", "/service") or []
        return [parse_service(item) for item in data]

    def get_team_members(self) -> List[Professional]:
        """Fetch all team members, with or without a schedule."""
        data = self._request("GET", "/team-member") or []
        return [parse_professional(item) for item in data]

    def get_professional_schedule(self, professional_id: int, day: date | str) -> ScheduleForDate:
        """
        Fetch a professional's schedule and booked appointments for a date.

        Response format:
        {
            "schedule": {
                "start_time": "08:00", "end_time": "18:00",
                "lunch_start_time": "12:00", "lunch_end_time": "13:00",
                "is_day_off": false
            },
            "appointments": [{"start_time": "09:30:00"}]
        }
        """
        endpoint = f"/professional-schedule/{professional_id}/date/{to_iso_date(day)}"
        data = self._request("GET", endpoint) or {}
        return parse_schedule_response(data)

    def create_appointment(self, request: AppointmentRequest) -> Dict[str, Any]:
        """Submit a new appointment."""
        return self._request("POST", "/appointment", request.to_payload()) or {}

    def create_client(self, registration: ClientRegistration) -> Dict[str, Any]:
        """Register a new client account."""
        return self._request("POST", "/client", registration.to_payload()) or {}

    def get_client_appointments(self, client_id: int) -> List[ClientAppointment]:
        """Fetch every appointment of a client."""
        data = self._request("GET", f"/appointment/client/{client_id}") or []
        return [parse_client_appointment(item) for item in data]

    def get_plans(self) -> List[Plan]:
        """Fetch the subscription plans."""
        data = self._request("GET", "/plan") or []
        return [parse_plan(item) for item in data]

    def get_client_photos(self) -> List[ClientPhoto]:
        """Fetch the client photo feed."""
        data = self._request("GET", "/client-photo") or []
        return [parse_client_photo(item) for item in data]


def parse_schedule_response(data: Dict[str, Any]) -> ScheduleForDate:
    """
    Parse a schedule-for-date payload into domain models.

    A missing or null ``schedule`` stays None; the calculator treats that as
    no availability.
    """
    raw_schedule = data.get("schedule")
    schedule = None

    if raw_schedule:
        schedule = WorkSchedule(
            start_time=raw_schedule.get("start_time"),
            end_time=raw_schedule.get("end_time"),
            lunch_start_time=raw_schedule.get("lunch_start_time"),
            lunch_end_time=raw_schedule.get("lunch_end_time"),
            is_day_off=bool(raw_schedule.get("is_day_off", False)),
        )

    appointments = [
        BookedAppointment(start_time=str(item["start_time"]))
        for item in data.get("appointments") or []
        if item.get("start_time")
    ]

    return ScheduleForDate(schedule=schedule, appointments=appointments)


def parse_service(item: Dict[str, Any]) -> Service:
    return Service(
        service_id=int(item["service_id"]),
        service_name=item.get("service_name", ""),
        service_price=str(item.get("service_price", "0")),
        service_duration=int(item.get("service_duration") or 0),
        service_description=item.get("service_description") or "",
    )


def parse_professional(item: Dict[str, Any]) -> Professional:
    return Professional(
        id=int(item["id"]),
        name=item.get("name", ""),
        position=item.get("position") or "employee",
        has_schedule=bool(item.get("has_schedule", False)),
    )


def parse_client_appointment(item: Dict[str, Any]) -> ClientAppointment:
    services = [
        entry.get("service_name", "") if isinstance(entry, dict) else str(entry)
        for entry in item.get("services") or []
    ]
    return ClientAppointment(
        id=int(item.get("id") or item.get("appointment_id") or 0),
        appointment_date=str(item["appointment_date"]),
        start_time=str(item["start_time"]),
        status=item.get("status", "pending"),
        professional_name=item.get("professional_name"),
        services=services,
    )


def parse_plan(item: Dict[str, Any]) -> Plan:
    return Plan(
        id=int(item["id"]),
        name=item.get("name", ""),
        price=str(item.get("price", "0")),
        description=item.get("description") or "",
        benefits=list(item.get("benefits") or []),
    )


def parse_client_photo(item: Dict[str, Any]) -> ClientPhoto:
    return ClientPhoto(
        client_id=int(item["client_id"]),
        client_name=item.get("client_name", ""),
        photo_url=item.get("photo_url", ""),
        description=item.get("description"),
        created_at=item.get("created_at"),
    )
