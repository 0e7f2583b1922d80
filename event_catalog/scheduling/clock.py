"""
Time-of-day value type.

All parsing, formatting and comparison of the catalog's `HH:MM` strings goes
through `ClockTime`, so classification rules can work on (hour, minute)
values instead of slicing strings.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import ClassVar

MINUTES_PER_DAY = 24 * 60


@dataclass(frozen=True, order=True)
class ClockTime:
    """A wall-clock time within one day."""

    hour: int
    minute: int

    PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"(\d{1,2}):(\d{2})", re.ASCII)

    def __post_init__(self):
        if not 0 <= self.hour <= 23 or not 0 <= self.minute <= 59:
            raise ValueError(f"Invalid time of day: {self.hour}:{self.minute:02d}")

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    @classmethod
    def matches(cls, value: object) -> bool:
        """Return True if value is a strict `H:MM` / `HH:MM` string."""
        return isinstance(value, str) and cls.PATTERN.fullmatch(value) is not None

    @classmethod
    def parse(cls, value: object) -> ClockTime | None:
        """
        Parse a `H:MM` or `HH:MM` string.

        Returns None for anything else, including out-of-range values such as
        "25:00"; never raises.
        """
        if not isinstance(value, str):
            return None
        match = cls.PATTERN.fullmatch(value)
        if match is None:
            return None
        hour, minute = int(match.group(1)), int(match.group(2))
        if hour > 23 or minute > 59:
            return None
        return cls(hour, minute)

    @classmethod
    def from_minutes(cls, total: int) -> ClockTime:
        """Build a time from minutes since midnight, clamped to the same day."""
        total = max(0, min(total, MINUTES_PER_DAY - 1))
        return cls(total // 60, total % 60)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    @property
    def minutes(self) -> int:
        """Minutes since midnight."""
        return self.hour * 60 + self.minute

    def add_minutes(self, minutes: int) -> ClockTime:
        return ClockTime.from_minutes(self.minutes + minutes)

    def minutes_until(self, other: ClockTime) -> int:
        return other.minutes - self.minutes

    def on(self, day: date) -> datetime:
        """Combine with a calendar date."""
        return datetime.combine(day, time(self.hour, self.minute))

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def to_string(self) -> str:
        """Zero-padded 24-hour form, e.g. "09:05"."""
        return f"{self.hour:02d}:{self.minute:02d}"

    def format_display(self) -> str:
        """12-hour display form, e.g. "9.00am", "12.00am", "1.05pm"."""
        period = "pm" if self.hour >= 12 else "am"
        display_hour = self.hour % 12 or 12
        return f"{display_hour}.{self.minute:02d}{period}"

    def __str__(self) -> str:
        return self.to_string()


def format_time_for_display(value: str | None) -> str:
    """Format an `HH:MM` string for display; "TBA" when it cannot be parsed."""
    parsed = ClockTime.parse(value)
    return parsed.format_display() if parsed else "TBA"


def combine_date_and_time(day: str | None, time_of_day: str | None) -> datetime | None:
    """
    Combine an ISO date string with an `HH:MM` time.

    Returns None when either part is missing or unparsable.
    """
    clock = ClockTime.parse(time_of_day)
    if not day or clock is None:
        return None
    try:
        parsed_day = datetime.fromisoformat(day).date()
    except (TypeError, ValueError):
        return None
    return clock.on(parsed_day)
