"""
Time-block scheduling.

Groups events that share a start time into TimeBlocks, orders the events
inside each block and classifies every block by day period and length.

Within a block, events are ordered by:
1. panel type: "big" (2+ speakers) before "main"
2. duration, longest first
3. title, case-insensitive
4. id, so the output never depends on input order
"""

import logging
from collections.abc import Iterable
from enum import Enum
from typing import Any

from event_catalog.configs.config import Config
from event_catalog.scheduling.clock import ClockTime, format_time_for_display
from event_catalog.schemas.catalog import Event, Schedule, TimeBlock

logger = logging.getLogger(__name__)

DEFAULT_THEME = "default-short"
BIG_PANEL_MIN_SPEAKERS = 2

# Upper bounds (exclusive) on the start hour of each day period
PERIOD_BOUNDARIES: tuple[tuple[int, str], ...] = (
    (10, "early-morning"),
    (12, "late-morning"),
    (15, "early-afternoon"),
    (18, "late-afternoon"),
)
EVENING = "evening"

# Upper bounds (inclusive) on total block minutes
LENGTH_BOUNDARIES: tuple[tuple[int, str], ...] = (
    (30, "short"),
    (90, "medium"),
)
LONG = "long"


class DayPeriod(str, Enum):
    """Half-day filter for `process_events_into_time_blocks`."""

    MORNING = "morning"
    AFTERNOON = "afternoon"

    def contains(self, clock: ClockTime) -> bool:
        if self is DayPeriod.MORNING:
            return clock.hour < 12
        return clock.hour >= 12


# ============================================================================
# PURE CLASSIFICATION RULES
# ============================================================================


def day_period(clock: ClockTime) -> str:
    """Return the day-period token for a start time, e.g. "late-morning"."""
    for bound, label in PERIOD_BOUNDARIES:
        if clock.hour < bound:
            return label
    return EVENING


def length_category(total_minutes: int) -> str:
    for bound, label in LENGTH_BOUNDARIES:
        if total_minutes <= bound:
            return label
    return LONG


def classify_theme(start_time: Any, total_minutes: Any) -> str:
    """
    Build the `{period}-{length}` theme token for a block.

    Never raises; malformed input yields DEFAULT_THEME.
    """
    clock = ClockTime.parse(start_time)
    if clock is None or not isinstance(total_minutes, int) or isinstance(total_minutes, bool):
        return DEFAULT_THEME
    return f"{day_period(clock)}-{length_category(total_minutes)}"


def period_title(clock: ClockTime) -> str:
    """Human title for a block, e.g. "Early Morning Sessions"."""
    return f"{day_period(clock).replace('-', ' ').title()} Sessions"


def event_duration(event: Event) -> int:
    """Minutes between an event's start and end; 0 when either is unusable."""
    start = ClockTime.parse(event.start_time)
    end = ClockTime.parse(event.end_time)
    if start is None or end is None:
        return 0
    return max(start.minutes_until(end), 0)


def panel_type(event: Event) -> str:
    return "big" if len(event.speakers) >= BIG_PANEL_MIN_SPEAKERS else "main"


def event_sort_key(event: Event) -> tuple:
    return (
        0 if panel_type(event) == "big" else 1,
        -event_duration(event),
        event.title.lower(),
        str(event.id),
    )


# ============================================================================
# SCHEDULER
# ============================================================================


class TimeBlockScheduler:
    """
    Stateless grouping of events into ordered TimeBlocks.

    Usage:
        scheduler = TimeBlockScheduler()
        blocks = scheduler.process_events_into_time_blocks(events, "morning")
    """

    def __init__(self, default_block_minutes: int | None = None):
        self.default_block_minutes = (
            default_block_minutes
            if default_block_minutes is not None
            else Config.default_block_minutes()
        )

    def _schedulable(self, events: Iterable[Event]) -> list[Event]:
        valid = []
        for event in events:
            if ClockTime.parse(event.start_time) is None:
                logger.warning(
                    f"Event {event.id!r} has missing or invalid start time "
                    f"{event.start_time!r}; excluded from time blocks"
                )
                continue
            valid.append(event)
        return valid

    def _block_end(self, start: ClockTime, events: list[Event]) -> ClockTime:
        ends = [
            c
            for c in (ClockTime.parse(e.end_time) for e in events)
            if c is not None and c > start
        ]
        if ends:
            return max(ends)
        return start.add_minutes(self.default_block_minutes)

    def _total_minutes(self, start: ClockTime, end: ClockTime, events: list[Event]) -> int:
        total = sum(event_duration(e) for e in events)
        if total > 0:
            return total
        span = start.minutes_until(end)
        return span if span > 0 else self.default_block_minutes

    def group_events_by_time_blocks(self, events: Iterable[Event]) -> list[TimeBlock]:
        """
        Group events by exact start-time string into ordered TimeBlocks.

        Events without a strict `H:MM` / `HH:MM` start time are dropped with a
        warning. Blocks are sorted by start time, events within a block by
        the module's tie-break rules.
        """
        groups: dict[str, list[Event]] = {}
        for event in self._schedulable(events):
            groups.setdefault(event.start_time, []).append(event)

        ordered_starts = sorted(groups, key=lambda s: (ClockTime.parse(s), s))

        blocks: list[TimeBlock] = []
        for index, start_time in enumerate(ordered_starts):
            start = ClockTime.parse(start_time)
            block_events = sorted(groups[start_time], key=event_sort_key)
            end = self._block_end(start, block_events)
            block_id = f"time-block-{start_time.replace(':', '')}"

            blocks.append(
                TimeBlock(
                    id=block_id,
                    unique_id=f"{block_id}-{index}",
                    start_time=start_time,
                    end_time=end.to_string(),
                    time_range=f"{start.format_display()} - {end.format_display()}",
                    title=period_title(start),
                    theme=classify_theme(start_time, self._total_minutes(start, end, block_events)),
                    index=index,
                    events=block_events,
                )
            )

        logger.debug(f"Grouped events into {len(blocks)} time blocks")
        return blocks

    def process_events_into_time_blocks(
        self,
        events: Iterable[Event],
        day_period: DayPeriod | str | None = None,
    ) -> list[TimeBlock]:
        """
        Group events into TimeBlocks, optionally keeping one half of the day.

        Args:
            events: Events to schedule
            day_period: "morning" (start hour < 12), "afternoon" (>= 12) or None

        Raises:
            ValueError: If day_period is not a known period
        """
        events = self._schedulable(events)
        if day_period is not None:
            period = DayPeriod(day_period)
            events = [e for e in events if period.contains(ClockTime.parse(e.start_time))]
        return self.group_events_by_time_blocks(events)

    def with_time_slots(self, schedule: Schedule, events: Iterable[Event]) -> Schedule:
        """Return a copy of schedule with time_slots built from its own events."""
        session_ids = set(schedule.session_ids)
        own_events = [e for e in events if e.id in session_ids]
        return schedule.model_copy(
            update={"time_slots": self.group_events_by_time_blocks(own_events)}
        )


def describe_time_blocks(blocks: Iterable[TimeBlock]) -> list[dict[str, Any]]:
    """Summarize blocks for diagnostics: panel-type breakdown and per-event stats."""
    summary = []
    for block in blocks:
        panels = {"big": 0, "main": 0}
        for event in block.events:
            panels[panel_type(event)] += 1
        summary.append(
            {
                "id": block.id,
                "time_range": block.time_range,
                "theme": block.theme,
                "event_count": len(block.events),
                "panel_types": panels,
                "events": [
                    {
                        "id": event.id,
                        "title": event.title,
                        "panel_type": panel_type(event),
                        "duration_minutes": event_duration(event),
                        "speaker_count": event.speaker_count,
                        "time": format_time_for_display(event.start_time),
                    }
                    for event in block.events
                ],
            }
        )
    return summary
