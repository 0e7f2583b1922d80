"""Unit tests for the ClockTime value type."""

from datetime import datetime

import pytest

from event_catalog.scheduling.clock import (
    ClockTime,
    combine_date_and_time,
    format_time_for_display,
)


class TestParse:
    """Tests for ClockTime.parse and matches."""

    @pytest.mark.parametrize(
        "value,expected",
        [("09:00", ClockTime(9, 0)), ("9:05", ClockTime(9, 5)), ("23:59", ClockTime(23, 59))],
    )
    def test_valid(self, value, expected):
        assert ClockTime.parse(value) == expected

    @pytest.mark.parametrize(
        "value",
        [
            None, "", "9", "09:0", "009:00", "09:00:00", "9.00", " 09:00", "25:00", "12:60", 900,
            "09:00\n",
            "\u0669:\u0660\u0660",
        ],
    )
    def test_invalid(self, value):
        """Anything but a strict H:MM / HH:MM time should give None."""
        assert ClockTime.parse(value) is None

    def test_matches_is_pattern_only(self):
        """matches() checks shape, not range."""
        assert ClockTime.matches("9:00")
        assert not ClockTime.matches("9:00am")
        assert not ClockTime.matches("9:00\n")
        assert not ClockTime.matches("\u0669:\u0660\u0660")

    def test_constructor_range_check(self):
        with pytest.raises(ValueError):
            ClockTime(24, 0)


class TestArithmetic:
    """Tests for minute arithmetic and ordering."""

    def test_minutes(self):
        assert ClockTime(1, 30).minutes == 90

    def test_add_minutes(self):
        assert ClockTime(9, 30).add_minutes(45) == ClockTime(10, 15)

    def test_add_minutes_clamped_to_day(self):
        """Should not wrap past midnight."""
        assert ClockTime(23, 30).add_minutes(60) == ClockTime(23, 59)

    def test_minutes_until(self):
        assert ClockTime(9, 0).minutes_until(ClockTime(10, 15)) == 75

    def test_ordering(self):
        assert ClockTime(9, 0) < ClockTime(10, 0) < ClockTime(10, 1)

    def test_on(self):
        assert ClockTime(9, 15).on(datetime(2025, 9, 18).date()) == datetime(2025, 9, 18, 9, 15)


class TestFormatting:
    """Tests for display formatting."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("09:00", "9.00am"),
            ("00:00", "12.00am"),
            ("12:00", "12.00pm"),
            ("13:30", "1.30pm"),
            ("13:05", "1.05pm"),
            ("23:59", "11.59pm"),
        ],
    )
    def test_format_time_for_display(self, value, expected):
        assert format_time_for_display(value) == expected

    def test_format_unparsable(self):
        assert format_time_for_display("soon") == "TBA"

    def test_to_string_zero_pads(self):
        assert str(ClockTime(9, 5)) == "09:05"


class TestCombineDateAndTime:
    """Tests for combine_date_and_time."""

    def test_combines(self):
        assert combine_date_and_time("2025-09-18", "14:30") == datetime(2025, 9, 18, 14, 30)

    @pytest.mark.parametrize(
        "day,time_of_day",
        [(None, "09:00"), ("2025-09-18", None), ("not a date", "09:00"), ("2025-09-18", "9am")],
    )
    def test_unparsable(self, day, time_of_day):
        assert combine_date_and_time(day, time_of_day) is None
