"""
Core business logic for calculating bookable time slots.

This is the heart of the application - pure domain logic without any
external dependencies (no API calls, no database, no I/O).
"""

from typing import Iterable, List, Optional, Tuple

from .models import BookedAppointment, TimeSlot, WorkSchedule

SLOT_MINUTES = 30


def parse_clock(value: Optional[str]) -> Optional[Tuple[int, int]]:
    """
    Split an "HH:MM[:SS]" string into (hour, minute).

    Returns None for missing or unparsable values instead of raising.
    """
    if not value:
        return None

    parts = value.split(":")
    if len(parts) < 2:
        return None

    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def format_slot(hour: int, minute: int) -> TimeSlot:
    """Format a clock position as a zero-padded "HH:MM" label."""
    return f"{hour:02d}:{minute:02d}"


class SlotCalculator:
    """
    Calculates bookable slots for a professional on a single date.

    Algorithm:
    1. Bail out with no slots if there is no schedule, it is a day off,
       or the working window is incomplete
    2. Walk the working window in 30-minute steps, skipping the lunch break
    3. Drop every slot that matches the start time of a booked appointment
    """

    def __init__(self, slot_minutes: int = SLOT_MINUTES):
        self.slot_minutes = slot_minutes

    def available_slots(
        self,
        schedule: Optional[WorkSchedule],
        appointments: Iterable[BookedAppointment],
    ) -> List[TimeSlot]:
        """
        Compute the final bookable slots for a schedule.

        Args:
            schedule: Working window for the date, or None if none exists
            appointments: Appointments already booked for that date

        Returns:
            Ordered list of free "HH:MM" slots (empty when unavailable)
        """
        if schedule is None or schedule.is_day_off:
            return []

        if not schedule.start_time or not schedule.end_time:
            return []

        candidates = self.generate_slots(
            start_time=schedule.start_time,
            end_time=schedule.end_time,
            lunch_start_time=schedule.lunch_start_time,
            lunch_end_time=schedule.lunch_end_time,
        )

        return self.filter_occupied(candidates, appointments)

    def generate_slots(
        self,
        start_time: str,
        end_time: str,
        lunch_start_time: Optional[str] = None,
        lunch_end_time: Optional[str] = None,
    ) -> List[TimeSlot]:
        """
        Generate every candidate slot in [start_time, end_time).

        The lunch window is half-open: a slot equal to lunch_start_time is
        excluded, a slot equal to lunch_end_time is kept.

        Example:
        Window: 08:00 - 10:00, lunch 09:00 - 09:30
        Result: [08:00, 08:30, 09:30]
        """
        start = parse_clock(start_time)
        end = parse_clock(end_time)

        if start is None or end is None:
            return []

        lunch = self._lunch_window(lunch_start_time, lunch_end_time)
        end_minutes = end[0] * 60 + end[1]

        slots: List[TimeSlot] = []
        hour, minute = start

        while hour * 60 + minute < end_minutes:
            current = hour * 60 + minute

            if lunch is None or not lunch[0] <= current < lunch[1]:
                slots.append(format_slot(hour, minute))

            # Overflowing minutes snap back to the top of the next hour
            minute += self.slot_minutes
            if minute >= 60:
                minute = 0
                hour += 1

        return slots

    def filter_occupied(
        self,
        candidates: Iterable[TimeSlot],
        appointments: Iterable[BookedAppointment],
    ) -> List[TimeSlot]:
        """
        Remove slots whose label equals a booked appointment's HH:MM prefix.

        Bookings off the slot grid match nothing and block nothing.
        """
        occupied = {appointment.slot_key() for appointment in appointments}
        return [slot for slot in candidates if slot not in occupied]

    @staticmethod
    def _lunch_window(
        lunch_start_time: Optional[str],
        lunch_end_time: Optional[str],
    ) -> Optional[Tuple[int, int]]:
        """Return the lunch break as minute-of-day bounds, if fully defined."""
        lunch_start = parse_clock(lunch_start_time)
        lunch_end = parse_clock(lunch_end_time)

        if lunch_start is None or lunch_end is None:
            return None

        return (
            lunch_start[0] * 60 + lunch_start[1],
            lunch_end[0] * 60 + lunch_end[1],
        )
