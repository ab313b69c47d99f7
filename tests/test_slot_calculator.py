"""
Tests for slot calculator.
"""

import math

import pytest

from barberslots.domain.models import BookedAppointment, WorkSchedule
from barberslots.domain.slot_calculator import SlotCalculator, format_slot, parse_clock


class TestClockHelpers:
    """Tests for clock parsing and formatting."""

    def test_parse_clock(self):
        """Test parsing HH:MM and HH:MM:SS strings."""
        assert parse_clock("09:30") == (9, 30)
        assert parse_clock("18:00:00") == (18, 0)

    @pytest.mark.parametrize("value", [None, "", "9", "ab:cd", "nine:thirty"])
    def test_parse_clock_rejects_garbage(self, value):
        """Test that unparsable values yield None instead of raising."""
        assert parse_clock(value) is None

    def test_format_slot_zero_pads(self):
        """Test slot labels are zero-padded."""
        assert format_slot(8, 0) == "08:00"
        assert format_slot(13, 30) == "13:30"


class TestGenerateSlots:
    """Tests for candidate slot generation."""

    def test_window_without_lunch(self):
        """Test a plain morning window."""
        calculator = SlotCalculator()

        slots = calculator.generate_slots("09:00", "12:00")

        assert slots == ["09:00", "09:30", "10:00", "10:30", "11:00", "11:30"]

    def test_window_with_lunch_break(self):
        """Test that the lunch hour is skipped."""
        calculator = SlotCalculator()

        slots = calculator.generate_slots("08:00", "18:00", "12:00", "13:00")

        morning = ["08:00", "08:30", "09:00", "09:30", "10:00", "10:30", "11:00", "11:30"]
        afternoon = ["13:00", "13:30", "14:00", "14:30", "15:00", "15:30",
                     "16:00", "16:30", "17:00", "17:30"]
        assert slots == morning + afternoon
        assert "12:00" not in slots
        assert "12:30" not in slots

    def test_lunch_bounds_are_half_open(self):
        """Test lunch start is excluded and lunch end is included."""
        calculator = SlotCalculator()

        slots = calculator.generate_slots("11:00", "14:00", "12:00", "12:30")

        assert "12:00" not in slots
        assert "12:30" in slots

    @pytest.mark.parametrize(
        "start, end",
        [("09:00", "12:00"), ("08:30", "17:30"), ("10:00", "10:30"), ("07:00", "19:45")],
    )
    def test_slot_count_and_bounds(self, start, end):
        """Test count is ceil(window / 30) and bounds match the window."""
        calculator = SlotCalculator()

        slots = calculator.generate_slots(start, end)

        start_h, start_m = parse_clock(start)
        end_h, end_m = parse_clock(end)
        window = (end_h * 60 + end_m) - (start_h * 60 + start_m)

        assert len(slots) == math.ceil(window / 30)
        assert slots[0] == start
        last_h, last_m = parse_clock(slots[-1])
        assert 0 < (end_h * 60 + end_m) - (last_h * 60 + last_m) <= 30

    def test_lunch_outside_window_has_no_effect(self):
        """Test lunch windows before or after working hours change nothing."""
        calculator = SlotCalculator()
        plain = calculator.generate_slots("14:00", "16:00")

        assert calculator.generate_slots("14:00", "16:00", "12:00", "13:00") == plain
        assert calculator.generate_slots("14:00", "16:00", "17:00", "18:00") == plain

    def test_single_lunch_bound_is_ignored(self):
        """Test that a half-defined lunch window applies no exclusion."""
        calculator = SlotCalculator()

        slots = calculator.generate_slots("11:00", "13:00", "12:00", None)

        assert slots == ["11:00", "11:30", "12:00", "12:30"]

    def test_output_is_ordered_and_unique(self):
        """Test slots come out ascending with no duplicates."""
        calculator = SlotCalculator()

        slots = calculator.generate_slots("06:00", "22:00", "12:00", "14:00")

        assert slots == sorted(slots)
        assert len(slots) == len(set(slots))

    def test_generation_is_repeatable(self):
        """Test identical inputs give identical output."""
        calculator = SlotCalculator()

        first = calculator.generate_slots("08:00", "18:00", "12:00", "13:00")
        second = calculator.generate_slots("08:00", "18:00", "12:00", "13:00")

        assert first == second

    def test_end_before_start_gives_nothing(self):
        """Test an inverted window yields no slots."""
        calculator = SlotCalculator()

        assert calculator.generate_slots("18:00", "09:00") == []

    def test_malformed_window_gives_nothing(self):
        """Test unparsable bounds yield no slots instead of an error."""
        calculator = SlotCalculator()

        assert calculator.generate_slots("nine", "12:00") == []
        assert calculator.generate_slots("09:00", "noon") == []

    def test_off_grid_start_snaps_to_next_hour(self):
        """Test minute overflow resets to the top of the next hour."""
        calculator = SlotCalculator()

        slots = calculator.generate_slots("09:15", "11:00")

        assert slots == ["09:15", "09:45", "10:00", "10:30"]


class TestFilterOccupied:
    """Tests for occupied-slot filtering."""

    def test_booking_with_seconds_is_removed(self):
        """Test that HH:MM:SS bookings block their HH:MM slot."""
        calculator = SlotCalculator()

        result = calculator.filter_occupied(
            ["09:00", "09:30", "10:00"],
            [BookedAppointment(start_time="09:30:00")],
        )

        assert result == ["09:00", "10:00"]

    def test_filter_is_set_difference(self):
        """Test every unbooked slot survives and every booked slot is gone."""
        calculator = SlotCalculator()
        candidates = calculator.generate_slots("08:00", "12:00")
        bookings = [
            BookedAppointment(start_time="08:30"),
            BookedAppointment(start_time="10:00:00"),
            BookedAppointment(start_time="11:30:00"),
        ]

        result = calculator.filter_occupied(candidates, bookings)

        booked_keys = {"08:30", "10:00", "11:30"}
        assert result == [slot for slot in candidates if slot not in booked_keys]

    def test_off_grid_booking_blocks_nothing(self):
        """Test a booking that does not sit on the grid matches no slot."""
        calculator = SlotCalculator()
        candidates = ["09:00", "09:30", "10:00"]

        result = calculator.filter_occupied(candidates, [BookedAppointment(start_time="09:15:00")])

        assert result == candidates


class TestAvailableSlots:
    """Tests for the availability decision."""

    def test_no_schedule(self):
        """Test that a missing schedule means no availability."""
        calculator = SlotCalculator()

        assert calculator.available_slots(None, []) == []

    def test_day_off_ignores_other_fields(self):
        """Test that a day off yields nothing even with working hours set."""
        calculator = SlotCalculator()
        schedule = WorkSchedule(start_time="08:00", end_time="18:00", is_day_off=True)

        assert calculator.available_slots(schedule, []) == []

    def test_incomplete_window(self):
        """Test that a schedule without start or end yields nothing."""
        calculator = SlotCalculator()

        assert calculator.available_slots(WorkSchedule(start_time="08:00"), []) == []
        assert calculator.available_slots(WorkSchedule(end_time="18:00"), []) == []

    def test_generates_and_filters(self):
        """Test the full path: window, lunch break and booked slots."""
        calculator = SlotCalculator()
        schedule = WorkSchedule(
            start_time="08:00",
            end_time="11:00",
            lunch_start_time="09:00",
            lunch_end_time="09:30",
        )
        bookings = [BookedAppointment(start_time="10:00:00")]

        slots = calculator.available_slots(schedule, bookings)

        assert slots == ["08:00", "08:30", "09:30", "10:30"]
