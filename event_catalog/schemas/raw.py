"""
Input schema for the raw catalog payload.

Every record shape accepts a superset of the fields the source sends: all
fields are optional, camelCase keys are mapped to snake_case attributes and
unknown keys are ignored. Scalars of the wrong type are coerced where that is
unambiguous (a numeric title becomes a string) and dropped otherwise, so
validating a payload never fails on a single malformed field.
"""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _as_text(value: Any) -> str | None:
    """Keep strings, stringify numbers, drop anything else."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _as_identifier(value: Any) -> int | str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, str)):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _as_count(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_flag(value: Any) -> bool | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return None


def _mapping_or_none(value: Any) -> Any:
    return value if isinstance(value, (dict, BaseModel)) else None


def _only_mappings(value: Any) -> list:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, (dict, BaseModel))]


def _mapping_or_empty(value: Any) -> Any:
    return value if isinstance(value, (dict, BaseModel)) else {}


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


Text = Annotated[str | None, BeforeValidator(_as_text)]
Identifier = Annotated[int | str | None, BeforeValidator(_as_identifier)]
Count = Annotated[int | None, BeforeValidator(_as_count)]
Flag = Annotated[bool | None, BeforeValidator(_as_flag)]
AnyList = Annotated[list[Any], BeforeValidator(_as_list)]


class RawRecord(BaseModel):
    """Base for every raw payload record."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: Identifier = None


# ============================================================================
# TOP-LEVEL ENTITY RECORDS
# ============================================================================


class RawSpeaker(RawRecord):
    """Speaker record, top-level or embedded in a session."""

    display_name: Text = None
    sort_name: Text = None
    position: Text = None
    company: Text = None
    body: Text = Field(default=None, alias="copy")
    speaker_image: Text = None
    email: Text = None
    web: Text = None
    phone_number: Text = None
    facebook: Text = None
    twitter_handle: Text = None
    linked_in: Text = None
    speaker_type: Text = None


class RawCategory(RawRecord):
    name: Text = None


class RawRoom(RawRecord):
    title: Text = None
    capacity: Count = None


class RawStream(RawRecord):
    title: Text = None
    stream_colour: Text = None


class RawSessionType(RawRecord):
    title: Text = None
    colour: Text = None
    icon: Text = None


# ============================================================================
# SCHEDULE RECORDS
# ============================================================================


class RawSession(RawRecord):
    """A session inside a schedule day, with its embedded entities."""

    title: Text = None
    subtitle: Text = None
    body: Text = Field(default=None, alias="copy")
    start_time: Text = None
    end_time: Text = None

    categories: Annotated[list[RawCategory], BeforeValidator(_only_mappings)] = Field(
        default_factory=list
    )
    speakers: Annotated[list[RawSpeaker], BeforeValidator(_only_mappings)] = Field(
        default_factory=list
    )
    stream: Annotated[RawStream | None, BeforeValidator(_mapping_or_none)] = None
    room: Annotated[RawRoom | None, BeforeValidator(_mapping_or_none)] = None
    session_type: Annotated[RawSessionType | None, BeforeValidator(_mapping_or_none)] = Field(
        default=None, alias="type"
    )

    # Image fields in thumbnail priority order
    session_thumbnail: Text = None
    thumbnail: Text = None
    image: Text = None
    event_image: Text = None

    capacity: Count = None
    speaker_roles: Any = None
    featured_speaker: Any = None
    accepting_questions: Flag = None
    voting_and_discussion: Flag = None
    live_streaming_provider_link: Text = None
    live_stream_provider_type: Text = None


class RawScheduleDay(RawRecord):
    title: Text = None
    date: Text = None
    sessions: Annotated[list[RawSession], BeforeValidator(_only_mappings)] = Field(
        default_factory=list
    )
    session_groups: AnyList = Field(default_factory=list)
    meeting_blocks: AnyList = Field(default_factory=list)


# ============================================================================
# PAYLOAD ENVELOPE
# ============================================================================


class RawCatalogData(BaseModel):
    """The `data` object of the payload."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    speakers: Annotated[list[RawSpeaker], BeforeValidator(_only_mappings)] = Field(
        default_factory=list
    )
    categories: Annotated[list[RawCategory], BeforeValidator(_only_mappings)] = Field(
        default_factory=list
    )
    rooms: Annotated[list[RawRoom], BeforeValidator(_only_mappings)] = Field(
        default_factory=list
    )
    streams: Annotated[list[RawStream], BeforeValidator(_only_mappings)] = Field(
        default_factory=list
    )
    session_types: Annotated[list[RawSessionType], BeforeValidator(_only_mappings)] = Field(
        default_factory=list
    )
    schedule: Annotated[list[RawScheduleDay], BeforeValidator(_only_mappings)] = Field(
        default_factory=list
    )


class RawCatalogPayload(BaseModel):
    """Full payload as returned by the source: `{"data": {...}}`."""

    model_config = ConfigDict(extra="ignore")

    data: Annotated[RawCatalogData, BeforeValidator(_mapping_or_empty)] = Field(
        default_factory=RawCatalogData
    )
