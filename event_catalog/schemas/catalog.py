# event_catalog/schemas/catalog.py
"""
Canonical entity schema for the event catalog.

These are the shapes produced by the standardizer and stored by the
repository. Every optional field has a usable default so that consumers
(the scheduler, presentation code) never need to null-check beyond the
documented `None` values: missing start/end times and dates, and
unresolved room/stream/session-type references.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

EntityId = int | str


class CatalogEntity(BaseModel):
    """Base for every canonical entity."""

    id: EntityId | None = None


# ============================================================================
# PEOPLE & TAXONOMY
# ============================================================================


class Speaker(CatalogEntity):
    """
    Normalized speaker.

    `position` is the display string combining job title and company
    ("{position} at {company}"); the raw title is kept in `original_position`.
    """

    name: str = ""
    display_name: str = ""
    sort_name: str = ""
    position: str = ""
    original_position: str = ""
    company: str = ""
    bio: str = ""
    headshot: str = ""
    email: str = ""
    website: str = ""
    phone_number: str = ""
    facebook: str = ""
    twitter_handle: str = ""
    linked_in: str = ""
    speaker_type: str = ""
    featured: bool = False
    social_media: dict[str, str] = Field(default_factory=dict)


class Category(CatalogEntity):
    """Audience category (Student, Mid Career, ...)."""

    name: str = ""
    key: str = "UNKNOWN"


class Room(CatalogEntity):
    title: str = ""
    capacity: int = 0


class Stream(CatalogEntity):
    """Subject-area stream; `key` is one of the fixed stream category keys."""

    title: str = ""
    color: str = "#000000"
    key: str = "PROGRAMMING"


class SessionType(CatalogEntity):
    title: str = ""
    color: str = "#000000"
    icon: str = ""


# ============================================================================
# SESSIONS
# ============================================================================


class Event(CatalogEntity):
    """
    Normalized session.

    Times of day are kept as the source's `HH:MM` strings; `start_date` and
    `end_date` combine them with the owning schedule day's date and are None
    when either part is missing or unparsable.
    """

    title: str = ""
    subtitle: str = ""
    description: str = ""

    # Timing
    start_time: str | None = None
    end_time: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None

    # Media
    thumbnail: str = ""

    # Resolved references
    speakers: list[Speaker] = Field(default_factory=list)
    room: Room | None = None
    stream: Stream | None = None
    session_type: SessionType | None = None
    categories: list[Category] = Field(default_factory=list)

    # Subject area used for visual categorization (from the stream)
    category: str | None = None
    category_key: str | None = None

    speaker_roles: dict[str, Any] = Field(default_factory=dict)
    featured_speaker: Any = None

    # Schedule-day association
    schedule_title: str | None = None
    schedule_date: str | None = None

    capacity: int = 0
    accepting_questions: bool = False
    voting_and_discussion: bool = False
    live_streaming_provider_link: str | None = None
    live_stream_provider_type: str = ""
    location: str | None = None

    @property
    def speaker_count(self) -> int:
        return len(self.speakers)


# ============================================================================
# SCHEDULING
# ============================================================================


class TimeBlock(BaseModel):
    """
    Sessions sharing one start time, as produced by the scheduler.

    Time blocks are derived data: they are recomputed from the current events
    on every request and never stored by the repository.
    """

    id: str
    unique_id: str
    start_time: str
    end_time: str
    time_range: str
    title: str
    theme: str
    index: int = 0
    events: list[Event] = Field(default_factory=list)


class Schedule(CatalogEntity):
    """
    A schedule day.

    `session_ids` references the day's sessions in source order;
    `time_slots` stays empty after transformation and is only filled on
    copies returned by the scheduler.
    """

    title: str = ""
    date: str | None = None
    session_ids: list[EntityId] = Field(default_factory=list)
    session_groups: list[Any] = Field(default_factory=list)
    meeting_blocks: list[Any] = Field(default_factory=list)
    time_slots: list[TimeBlock] = Field(default_factory=list)
