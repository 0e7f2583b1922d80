"""Raw input and canonical output schemas."""

from .catalog import (
    CatalogEntity,
    Category,
    EntityId,
    Event,
    Room,
    Schedule,
    SessionType,
    Speaker,
    Stream,
    TimeBlock,
)
from .raw import (
    RawCatalogData,
    RawCatalogPayload,
    RawCategory,
    RawRoom,
    RawScheduleDay,
    RawSession,
    RawSessionType,
    RawSpeaker,
    RawStream,
)

__all__ = [
    "CatalogEntity",
    "Category",
    "EntityId",
    "Event",
    "Room",
    "Schedule",
    "SessionType",
    "Speaker",
    "Stream",
    "TimeBlock",
    "RawCatalogData",
    "RawCatalogPayload",
    "RawCategory",
    "RawRoom",
    "RawScheduleDay",
    "RawSession",
    "RawSessionType",
    "RawSpeaker",
    "RawStream",
]
