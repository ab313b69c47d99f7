"""
Tests for the HTTP booking client.
"""

from typing import Any, Dict, List

import pytest
import requests

from barberslots.adapters.booking_client import BookingClient, parse_schedule_response
from barberslots.domain.exceptions import BookingAPIError
from barberslots.domain.models import AppointmentRequest, ServiceItem, WorkSchedule


class FakeResponse:
    """Just enough of requests.Response for the client."""

    def __init__(self, status_code: int = 200, payload: Any = None, invalid_json: bool = False):
        self.status_code = status_code
        self._payload = payload
        self._invalid_json = invalid_json

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if self._invalid_json:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    """Records requests and replays a canned response."""

    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None):
        self.response = response or FakeResponse()
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def request(self, method, url, headers=None, json=None, timeout=None):
        self.calls.append(
            {"method": method, "url": url, "headers": headers, "json": json, "timeout": timeout}
        )
        if self.error:
            raise self.error
        return self.response


def _client(session: FakeSession) -> BookingClient:
    return BookingClient(base_url="http://api.test/", company_id="7", timeout=5, session=session)


class TestBookingClient:
    """Tests for BookingClient."""

    def test_get_services_sends_company_header(self):
        """Test the shop header and the parsed catalogue."""
        session = FakeSession(FakeResponse(payload=[
            {
                "service_id": 1,
                "service_name": "Corte",
                "service_description": "Tradicional",
                "service_price": "35.00",
                "service_duration": 30,
            }
        ]))

        services = _client(session).get_services()

        call = session.calls[0]
        assert call["method"] == "GET"
        assert call["url"] == "http://api.test/service"
        assert call["headers"]["company_id"] == "7"
        assert call["timeout"] == 5
        assert call["json"] is None
        assert services[0].service_name == "Corte"
        assert services[0].service_duration == 30

    def test_get_professional_schedule(self):
        """Test the schedule endpoint and response parsing."""
        session = FakeSession(FakeResponse(payload={
            "schedule": {
                "start_time": "08:00",
                "end_time": "18:00",
                "lunch_start_time": "12:00",
                "lunch_end_time": "13:00",
                "is_day_off": False,
            },
            "appointments": [{"start_time": "09:30:00"}],
        }))

        result = _client(session).get_professional_schedule(3, "2026-10-19")

        assert session.calls[0]["url"] == "http://api.test/professional-schedule/3/date/2026-10-19"
        assert result.schedule == WorkSchedule("08:00", "18:00", "12:00", "13:00", False)
        assert [appointment.slot_key() for appointment in result.appointments] == ["09:30"]

    def test_create_appointment_posts_payload(self):
        """Test the creation request body."""
        session = FakeSession(FakeResponse(status_code=201, payload={"id": 10}))
        request = AppointmentRequest(
            client_id=1,
            professional_id=2,
            appointment_date="2026-10-20",
            start_time="10:00",
            services=[ServiceItem(service_id=1)],
        )

        result = _client(session).create_appointment(request)

        assert result == {"id": 10}
        assert session.calls[0]["method"] == "POST"
        assert session.calls[0]["url"] == "http://api.test/appointment"
        assert session.calls[0]["json"] == request.to_payload()

    def test_error_status_uses_backend_message(self):
        """Test error responses raise with the backend's message."""
        session = FakeSession(FakeResponse(status_code=409, payload={"message": "Horário ocupado"}))

        with pytest.raises(BookingAPIError, match="Horário ocupado") as exc_info:
            _client(session).get_plans()

        assert exc_info.value.status_code == 409

    def test_error_status_without_json(self):
        """Test error responses without a body fall back to the default message."""
        session = FakeSession(FakeResponse(status_code=500, invalid_json=True))

        with pytest.raises(BookingAPIError, match="Erro na requisição"):
            _client(session).get_team_members()

    def test_transport_error(self):
        """Test connection failures are reported as status 500."""
        session = FakeSession(error=requests.exceptions.ConnectionError("connection refused"))

        with pytest.raises(BookingAPIError, match="connection refused") as exc_info:
            _client(session).get_client_photos()

        assert exc_info.value.status_code == 500


class TestParseScheduleResponse:
    """Tests for schedule payload parsing."""

    def test_null_schedule(self):
        """Test a null schedule stays None."""
        result = parse_schedule_response({"schedule": None, "appointments": []})

        assert result.schedule is None
        assert result.appointments == []

    def test_day_off_and_missing_times(self):
        """Test day-off flags and absent times are carried through."""
        result = parse_schedule_response({"schedule": {"is_day_off": True}})

        assert result.schedule == WorkSchedule(is_day_off=True)
