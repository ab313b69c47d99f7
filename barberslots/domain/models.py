"""
Domain models for schedules, bookings and the catalogue served by the backend.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# A bookable slot label, "HH:MM" on the 24-hour clock.
TimeSlot = str


POSITION_LABELS = {
    "employee": "Barbeiro",
    "admin": "Administrador",
    "manager": "Gerente",
}


@dataclass(frozen=True)
class WorkSchedule:
    """
    A professional's working window for one calendar date.

    Times are "HH:MM" strings as delivered by the backend. Any of them may be
    missing; the lunch window only applies when both bounds are present.
    """
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    lunch_start_time: Optional[str] = None
    lunch_end_time: Optional[str] = None
    is_day_off: bool = False

    def has_lunch_break(self) -> bool:
        """Check whether both lunch bounds are set."""
        return bool(self.lunch_start_time and self.lunch_end_time)


@dataclass(frozen=True)
class BookedAppointment:
    """An existing reservation, occupying the slot at its start time."""
    start_time: str

    def slot_key(self) -> TimeSlot:
        """Return the "HH:MM" prefix used to match against generated slots."""
        return self.start_time[:5]


@dataclass
class ScheduleForDate:
    """Schedule lookup result for one professional on one date."""
    schedule: Optional[WorkSchedule]
    appointments: List[BookedAppointment] = field(default_factory=list)


@dataclass
class Service:
    """A bookable service from the shop's catalogue."""
    service_id: int
    service_name: str
    service_price: str
    service_duration: int
    service_description: str = ""


@dataclass
class Professional:
    """A team member against whom appointments are scheduled."""
    id: int
    name: str
    position: str = "employee"
    has_schedule: bool = False

    def position_label(self) -> str:
        """Translate the backend position into its display label."""
        return POSITION_LABELS.get(self.position.lower(), self.position)


@dataclass(frozen=True)
class ServiceItem:
    """One service line of an appointment."""
    service_id: int
    quantity: int = 1


@dataclass
class AppointmentRequest:
    """Payload for the appointment-creation endpoint."""
    client_id: int
    professional_id: int
    appointment_date: str  # YYYY-MM-DD
    start_time: TimeSlot
    services: List[ServiceItem]
    status: str = "pending"

    def to_payload(self) -> Dict[str, Any]:
        """Render the request as the JSON body expected by the backend."""
        return {
            "client_id": self.client_id,
            "professional_id": self.professional_id,
            "appointment_date": self.appointment_date,
            "start_time": self.start_time,
            "status": self.status,
            "services": [
                {"service_id": item.service_id, "quantity": item.quantity}
                for item in self.services
            ],
        }


@dataclass
class ClientAppointment:
    """An appointment from a client's history."""
    id: int
    appointment_date: str
    start_time: str
    status: str = "pending"
    professional_name: Optional[str] = None
    services: List[str] = field(default_factory=list)

    def sort_key(self) -> tuple:
        return (self.appointment_date[:10], self.start_time[:5])


@dataclass
class ClientRegistration:
    """Validated sign-up data for a new client."""
    name: str
    email: str
    phone_number: str
    password: str
    document: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.name,
            "email": self.email,
            "phone_number": self.phone_number,
            "password": self.password,
        }
        if self.document:
            payload["document"] = self.document
        return payload


@dataclass
class Plan:
    """A subscription plan."""
    id: int
    name: str
    price: str
    description: str = ""
    benefits: List[str] = field(default_factory=list)


@dataclass
class ClientPhoto:
    """An entry of the client photo feed."""
    client_id: int
    client_name: str
    photo_url: str
    description: Optional[str] = None
    created_at: Optional[str] = None


@dataclass
class BookingConfirmation:
    """A submitted appointment request together with the backend's answer."""
    request: AppointmentRequest
    response: Dict[str, Any] = field(default_factory=dict)

    @property
    def appointment_id(self) -> Optional[Any]:
        return self.response.get("id")
