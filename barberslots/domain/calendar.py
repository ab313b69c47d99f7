"""
Calendar and display helpers for the booking flow.

Weekday translation and day selection are presentation concerns and are kept
apart from the slot calculator.
"""

import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import List, Union

import pendulum

from .booking import to_iso_date
from .exceptions import BookingValidationError

WEEKDAYS_EN = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]

WEEKDAY_LABELS_PT = {
    "Monday": "Segunda",
    "Tuesday": "Terça",
    "Wednesday": "Quarta",
    "Thursday": "Quinta",
    "Friday": "Sexta",
    "Saturday": "Sábado",
    "Sunday": "Domingo",
}

WEEKDAY_LABELS_EN = {label: weekday for weekday, label in WEEKDAY_LABELS_PT.items()}

TODAY_LABEL = "Hoje"
TOMORROW_LABEL = "Amanhã"

ISO_DATE_PREFIX = re.compile(r"^\d{4}-")


@dataclass(frozen=True)
class BookingDay:
    """A selectable booking date with its Portuguese weekday label."""
    label: str
    date: pendulum.Date
    weekday_en: str

    def iso(self) -> str:
        return self.date.isoformat()


def _as_pendulum_date(value: Union[date, pendulum.Date]) -> pendulum.Date:
    if isinstance(value, pendulum.Date):
        return value
    return pendulum.date(value.year, value.month, value.day)


def next_booking_days(today: date, count: int = 7) -> List[BookingDay]:
    """
    Build the list of the next ``count`` days, starting with today.

    Args:
        today: The first day of the list
        count: How many days to include

    Returns:
        List of BookingDay in chronological order
    """
    start = _as_pendulum_date(today)
    days: List[BookingDay] = []

    for offset in range(count):
        current = start.add(days=offset)
        weekday_en = WEEKDAYS_EN[current.weekday()]
        days.append(
            BookingDay(
                label=WEEKDAY_LABELS_PT[weekday_en],
                date=current,
                weekday_en=weekday_en,
            )
        )

    return days


def resolve_day_label(label: str, today: date) -> str:
    """
    Turn a day label into an ISO date string.

    Accepts an ISO "YYYY-MM-DD" date, a Portuguese weekday label (resolved
    within the coming week), "Hoje", "Amanhã" or "DD/MM" in the current year.
    Any other label falls back to today.

    Raises:
        BookingValidationError: If the label looks like a date but is not a
            valid one
    """
    start = _as_pendulum_date(today)
    label = label.strip()

    if ISO_DATE_PREFIX.match(label):
        return to_iso_date(label)

    if label in WEEKDAY_LABELS_EN:
        for day in next_booking_days(start):
            if day.label == label:
                return day.iso()

    if label == TODAY_LABEL:
        return start.isoformat()

    if label == TOMORROW_LABEL:
        return start.add(days=1).isoformat()

    if "/" in label:
        day_part, _, month_part = label.partition("/")
        if not (day_part.isdigit() and month_part.isdigit()):
            raise BookingValidationError(f"Invalid date '{label}', expected DD/MM")
        return to_iso_date(f"{start.year}-{month_part.zfill(2)}-{day_part.zfill(2)}")

    return start.isoformat()


def format_price(price: Union[str, float, Decimal]) -> str:
    """
    Format a price the way the shop displays it.

    Example: "35.5" -> "R$ 35,50"
    """
    try:
        amount = Decimal(str(price)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return f"R$ {price}"
    return f"R$ {amount}".replace(".", ",")
