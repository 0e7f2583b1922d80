"""
Entity standardizer.

One pure function per entity type converting a raw payload record (a dict or
the matching `schemas.raw` model) into its canonical model. These functions
never raise on missing or malformed optional fields: they fill in defaults
(empty string, empty list, None) instead.
"""

import json
import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel

from event_catalog.configs.config import Config
from event_catalog.normalization.text import strip_html
from event_catalog.scheduling.clock import combine_date_and_time
from event_catalog.schemas.catalog import (
    Category,
    Event,
    Room,
    Schedule,
    SessionType,
    Speaker,
    Stream,
)
from event_catalog.schemas.raw import (
    RawCategory,
    RawRoom,
    RawScheduleDay,
    RawSession,
    RawSessionType,
    RawSpeaker,
    RawStream,
)

logger = logging.getLogger(__name__)

UNKNOWN_CATEGORY_KEY = "UNKNOWN"
DEFAULT_COLOR = "#000000"

_NON_ALNUM = re.compile(r"[^A-Z0-9]+")

RawT = TypeVar("RawT", bound=BaseModel)


def coerce_raw(model: type[RawT], raw: Any) -> RawT:
    """Return raw as an instance of the given raw model."""
    if isinstance(raw, model):
        return raw
    if isinstance(raw, BaseModel):
        raw = raw.model_dump(by_alias=True)
    if not isinstance(raw, Mapping):
        return model()
    return model.model_validate(dict(raw))


# ============================================================================
# KEYS & DERIVED STRINGS
# ============================================================================


def derive_category_key(name: str | None) -> str:
    """
    Derive a category key from a display name.

    Uppercases, collapses every run of non-alphanumerics into one underscore
    and trims underscores at both ends:

        >>> derive_category_key("Story & Narrative")
        'STORY_NARRATIVE'
        >>> derive_category_key(" Audio ")
        'AUDIO'
    """
    if not name:
        return UNKNOWN_CATEGORY_KEY
    key = _NON_ALNUM.sub("_", name.upper()).strip("_")
    return key or UNKNOWN_CATEGORY_KEY


def map_stream_to_key(title: str | None) -> str:
    """Map a stream title to its category key, defaulting for unknown titles."""
    default_key = Config.default_stream_key()
    if not title:
        return default_key
    return Config.stream_category_keys().get(title, default_key)


def combine_position(position: str | None, company: str | None) -> str:
    """Build the "{position} at {company}" display string."""
    if position and company:
        return f"{position} at {company}"
    return company or position or ""


def parse_speaker_roles(value: Any) -> dict[str, Any]:
    """Decode the session's JSON-encoded speaker roles; {} when unusable."""
    if isinstance(value, dict):
        return dict(value)
    if not isinstance(value, str) or not value.strip():
        return {}
    try:
        decoded = json.loads(value)
    except json.JSONDecodeError as e:
        logger.warning(f"Ignoring malformed speakerRoles value: {e}")
        return {}
    return decoded if isinstance(decoded, dict) else {}


def select_thumbnail(session: RawSession, speakers: Sequence[Speaker] = ()) -> str:
    """
    Pick a session thumbnail.

    Priority: explicit session thumbnail, then the fallback image fields in
    order, then the first speaker's headshot, else "".
    """
    for candidate in (
        session.session_thumbnail,
        session.thumbnail,
        session.image,
        session.event_image,
    ):
        if candidate:
            return candidate
    if speakers and speakers[0].headshot:
        return speakers[0].headshot
    return ""


# ============================================================================
# ENTITY STANDARDIZATION
# ============================================================================


def standardize_speaker(raw: RawSpeaker | Mapping[str, Any]) -> Speaker:
    speaker = coerce_raw(RawSpeaker, raw)
    display_name = speaker.display_name or ""
    twitter = speaker.twitter_handle or ""
    linked_in = speaker.linked_in or ""
    facebook = speaker.facebook or ""

    return Speaker(
        id=speaker.id,
        name=display_name,
        display_name=display_name,
        sort_name=speaker.sort_name or "",
        position=combine_position(speaker.position, speaker.company),
        original_position=speaker.position or "",
        company=speaker.company or "",
        bio=strip_html(speaker.body),
        headshot=speaker.speaker_image or "",
        email=speaker.email or "",
        website=speaker.web or "",
        phone_number=speaker.phone_number or "",
        facebook=facebook,
        twitter_handle=twitter,
        linked_in=linked_in,
        speaker_type=speaker.speaker_type or "",
        social_media={"twitter": twitter, "linkedin": linked_in, "facebook": facebook},
    )


def standardize_category(raw: RawCategory | Mapping[str, Any]) -> Category:
    category = coerce_raw(RawCategory, raw)
    name = strip_html(category.name)
    return Category(id=category.id, name=name, key=derive_category_key(name))


def standardize_room(raw: RawRoom | Mapping[str, Any]) -> Room:
    room = coerce_raw(RawRoom, raw)
    return Room(id=room.id, title=room.title or "", capacity=room.capacity or 0)


def standardize_stream(raw: RawStream | Mapping[str, Any]) -> Stream:
    stream = coerce_raw(RawStream, raw)
    return Stream(
        id=stream.id,
        title=stream.title or "",
        color=stream.stream_colour or DEFAULT_COLOR,
        key=map_stream_to_key(stream.title),
    )


def standardize_session_type(raw: RawSessionType | Mapping[str, Any]) -> SessionType:
    session_type = coerce_raw(RawSessionType, raw)
    return SessionType(
        id=session_type.id,
        title=session_type.title or "",
        color=session_type.colour or DEFAULT_COLOR,
        icon=session_type.icon or "",
    )


def standardize_schedule(raw: RawScheduleDay | Mapping[str, Any]) -> Schedule:
    """Standardize a schedule day; time slots are left for the scheduler."""
    day = coerce_raw(RawScheduleDay, raw)
    return Schedule(
        id=day.id,
        title=day.title or "",
        date=day.date,
        session_ids=[s.id for s in day.sessions if s.id is not None],
        session_groups=list(day.session_groups),
        meeting_blocks=list(day.meeting_blocks),
    )


def standardize_event(
    raw: RawSession | Mapping[str, Any],
    *,
    speakers: Sequence[Speaker] = (),
    room: Room | None = None,
    stream: Stream | None = None,
    session_type: SessionType | None = None,
    schedule_date: str | None = None,
    schedule_title: str | None = None,
) -> Event:
    """
    Standardize a session into an Event.

    References (speakers, room, stream, session type) are resolved by the
    caller; when a reference is not given, the session's embedded record is
    standardized instead.

    Args:
        raw: Raw session record
        speakers: Resolved speakers in session order
        room: Resolved room
        stream: Resolved stream
        session_type: Resolved session type
        schedule_date: ISO date of the owning schedule day
        schedule_title: Title of the owning schedule day (e.g. "Friday")

    Returns:
        Event instance
    """
    session = coerce_raw(RawSession, raw)

    if not speakers and session.speakers:
        speakers = [standardize_speaker(s) for s in session.speakers]
    if room is None and session.room is not None:
        room = standardize_room(session.room)
    if stream is None and session.stream is not None:
        stream = standardize_stream(session.stream)
    if session_type is None and session.session_type is not None:
        session_type = standardize_session_type(session.session_type)

    categories = [standardize_category(c) for c in session.categories]

    # Subject area comes from the stream; audience categories are the fallback key
    if stream is not None:
        category, category_key = stream.title, stream.key
    else:
        category = None
        category_key = categories[0].key if categories else None

    return Event(
        id=session.id,
        title=session.title or "",
        subtitle=session.subtitle or "",
        description=strip_html(session.body),
        start_time=session.start_time or None,
        end_time=session.end_time or None,
        start_date=combine_date_and_time(schedule_date, session.start_time),
        end_date=combine_date_and_time(schedule_date, session.end_time),
        thumbnail=select_thumbnail(session, speakers),
        speakers=list(speakers),
        room=room,
        stream=stream,
        session_type=session_type,
        categories=categories,
        category=category,
        category_key=category_key,
        speaker_roles=parse_speaker_roles(session.speaker_roles),
        featured_speaker=session.featured_speaker,
        schedule_title=schedule_title or None,
        schedule_date=schedule_date or None,
        capacity=session.capacity or 0,
        accepting_questions=bool(session.accepting_questions),
        voting_and_discussion=bool(session.voting_and_discussion),
        live_streaming_provider_link=session.live_streaming_provider_link or None,
        live_stream_provider_type=session.live_stream_provider_type or "",
        location=room.title if room is not None and room.title else None,
    )
