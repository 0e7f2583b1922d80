"""Time handling and time-block scheduling."""

from .clock import ClockTime, combine_date_and_time, format_time_for_display
from .time_blocks import (
    DEFAULT_THEME,
    DayPeriod,
    TimeBlockScheduler,
    classify_theme,
    day_period,
    describe_time_blocks,
    event_duration,
    panel_type,
)

__all__ = [
    "DEFAULT_THEME",
    "ClockTime",
    "DayPeriod",
    "TimeBlockScheduler",
    "classify_theme",
    "combine_date_and_time",
    "day_period",
    "describe_time_blocks",
    "event_duration",
    "format_time_for_display",
    "panel_type",
]
