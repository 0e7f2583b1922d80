"""
Catalog transformation pipeline.

Converts the raw payload (`{"data": {...}}`) into lists of canonical
entities. Speakers, rooms, streams and session types can appear both in the
payload's top-level collections and embedded in sessions; they are resolved
with two folds:

1. fold the top-level records into an id-keyed mapping (source of truth);
2. fold every embedded occurrence into it with insert-if-absent semantics.

An id present in both places therefore always keeps its top-level
standardization. Each fold returns a new mapping; nothing here holds state
between calls.
"""

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, TypeVar

from pydantic import BaseModel

from event_catalog.exceptions import TransformationError
from event_catalog.normalization.standardizer import (
    standardize_category,
    standardize_event,
    standardize_room,
    standardize_schedule,
    standardize_session_type,
    standardize_speaker,
    standardize_stream,
)
from event_catalog.schemas.catalog import (
    Category,
    EntityId,
    Event,
    Room,
    Schedule,
    SessionType,
    Speaker,
    Stream,
)
from event_catalog.schemas.raw import RawCatalogPayload, RawScheduleDay, RawSession

logger = logging.getLogger(__name__)

T = TypeVar("T")
Index = dict[EntityId, T]


@dataclass
class TransformedCatalog:
    """Result of one transformation pass, as lists of canonical entities."""

    events: list[Event] = field(default_factory=list)
    schedules: list[Schedule] = field(default_factory=list)
    speakers: list[Speaker] = field(default_factory=list)
    categories: list[Category] = field(default_factory=list)
    rooms: list[Room] = field(default_factory=list)
    streams: list[Stream] = field(default_factory=list)
    session_types: list[SessionType] = field(default_factory=list)

    def counts(self) -> dict[str, int]:
        return {
            "events": len(self.events),
            "schedules": len(self.schedules),
            "speakers": len(self.speakers),
            "categories": len(self.categories),
            "rooms": len(self.rooms),
            "streams": len(self.streams),
            "session_types": len(self.session_types),
        }


# ============================================================================
# PURE REDUCERS
# ============================================================================


def fold_records(
    records: Iterable[Any],
    standardize: Callable[[Any], T],
) -> Index[T]:
    """Index standardized records by id; later duplicates replace earlier ones."""
    index: Index[T] = {}
    for record in records:
        if record.id is None:
            logger.warning(f"Skipping {type(record).__name__} without id: {record!r}")
            continue
        index[record.id] = standardize(record)
    return index


def fold_if_absent(
    index: Mapping[EntityId, T],
    records: Iterable[Any],
    standardize: Callable[[Any], T],
) -> Index[T]:
    """Return a copy of index extended with records whose id is not yet present."""
    merged: Index[T] = dict(index)
    for record in records:
        if record.id is None or record.id in merged:
            continue
        merged[record.id] = standardize(record)
    return merged


def _sessions(days: Iterable[RawScheduleDay]) -> Iterator[tuple[RawScheduleDay, RawSession]]:
    for day in days:
        for session in day.sessions:
            yield day, session


def _embedded_speakers(days):
    for _, session in _sessions(days):
        yield from session.speakers


def _embedded(days, attribute: str):
    for _, session in _sessions(days):
        record = getattr(session, attribute)
        if record is not None:
            yield record


@contextmanager
def _transforming(entity_type: str):
    """Tag any unexpected failure with the entity type being transformed."""
    try:
        yield
    except TransformationError:
        raise
    except Exception as e:
        logger.error(
            f"Error transforming {entity_type}: {e}",
            exc_info=True,
            extra={"entity_type": entity_type},
        )
        raise TransformationError(entity_type, str(e)) from e


# ============================================================================
# TRANSFORMER
# ============================================================================


class CatalogTransformer:
    """
    Stateless transformer from raw payload to canonical entities.

    Usage:
        catalog = CatalogTransformer().transform(payload)
        catalog.events, catalog.speakers, ...
    """

    def parse_payload(self, payload: RawCatalogPayload | Mapping[str, Any]) -> RawCatalogPayload:
        """Validate the payload envelope into raw models."""
        if isinstance(payload, RawCatalogPayload):
            return payload
        with _transforming("payload"):
            if isinstance(payload, BaseModel):
                payload = payload.model_dump(by_alias=True)
            if not isinstance(payload, Mapping):
                raise TypeError(
                    f"expected a JSON object, got {type(payload).__name__}"
                )
            return RawCatalogPayload.model_validate(dict(payload))

    # ------------------------------------------------------------------
    # Per-entity transforms
    # ------------------------------------------------------------------

    def transform_speakers(self, payload) -> Index[Speaker]:
        raw = self.parse_payload(payload)
        with _transforming("speakers"):
            index = fold_records(raw.data.speakers, standardize_speaker)
            return fold_if_absent(index, _embedded_speakers(raw.data.schedule), standardize_speaker)

    def transform_categories(self, payload) -> Index[Category]:
        raw = self.parse_payload(payload)
        with _transforming("categories"):
            return fold_records(raw.data.categories, standardize_category)

    def transform_rooms(self, payload) -> Index[Room]:
        raw = self.parse_payload(payload)
        with _transforming("rooms"):
            index = fold_records(raw.data.rooms, standardize_room)
            return fold_if_absent(index, _embedded(raw.data.schedule, "room"), standardize_room)

    def transform_streams(self, payload) -> Index[Stream]:
        raw = self.parse_payload(payload)
        with _transforming("streams"):
            index = fold_records(raw.data.streams, standardize_stream)
            return fold_if_absent(index, _embedded(raw.data.schedule, "stream"), standardize_stream)

    def transform_session_types(self, payload) -> Index[SessionType]:
        raw = self.parse_payload(payload)
        with _transforming("session_types"):
            index = fold_records(raw.data.session_types, standardize_session_type)
            return fold_if_absent(
                index,
                _embedded(raw.data.schedule, "session_type"),
                standardize_session_type,
            )

    def transform_schedules(self, payload) -> list[Schedule]:
        raw = self.parse_payload(payload)
        with _transforming("schedules"):
            return [standardize_schedule(day) for day in raw.data.schedule]

    def transform_events(
        self,
        payload,
        speakers: Mapping[EntityId, Speaker],
        rooms: Mapping[EntityId, Room] | None = None,
        streams: Mapping[EntityId, Stream] | None = None,
        session_types: Mapping[EntityId, SessionType] | None = None,
    ) -> tuple[list[Event], Index[Speaker]]:
        """
        Transform every session into an Event.

        Embedded speakers are resolved against the speaker index; a speaker
        missing from it is standardized and added to the returned index.

        Returns:
            Tuple of (events in payload order, speaker index incl. promotions)
        """
        raw = self.parse_payload(payload)
        rooms = rooms or {}
        streams = streams or {}
        session_types = session_types or {}

        with _transforming("events"):
            speaker_index: Index[Speaker] = dict(speakers)
            events: list[Event] = []

            for day, session in _sessions(raw.data.schedule):
                resolved: list[Speaker] = []
                for embedded in session.speakers:
                    speaker = speaker_index.get(embedded.id) if embedded.id is not None else None
                    if speaker is None:
                        speaker = standardize_speaker(embedded)
                        if embedded.id is not None:
                            speaker_index[embedded.id] = speaker
                    resolved.append(speaker)

                events.append(
                    standardize_event(
                        session,
                        speakers=resolved,
                        room=_lookup(rooms, session.room, standardize_room),
                        stream=_lookup(streams, session.stream, standardize_stream),
                        session_type=_lookup(
                            session_types, session.session_type, standardize_session_type
                        ),
                        schedule_date=day.date,
                        schedule_title=day.title,
                    )
                )

            return events, speaker_index

    # ------------------------------------------------------------------
    # Whole payload
    # ------------------------------------------------------------------

    def transform(self, payload: RawCatalogPayload | Mapping[str, Any]) -> TransformedCatalog:
        """
        Transform the whole payload.

        Raises:
            TransformationError: tagged with the entity type that failed
        """
        raw = self.parse_payload(payload)

        speakers = self.transform_speakers(raw)
        categories = self.transform_categories(raw)
        rooms = self.transform_rooms(raw)
        streams = self.transform_streams(raw)
        session_types = self.transform_session_types(raw)
        schedules = self.transform_schedules(raw)
        events, speakers = self.transform_events(raw, speakers, rooms, streams, session_types)

        catalog = TransformedCatalog(
            events=events,
            schedules=schedules,
            speakers=list(speakers.values()),
            categories=list(categories.values()),
            rooms=list(rooms.values()),
            streams=list(streams.values()),
            session_types=list(session_types.values()),
        )
        logger.info(
            f"Transformation complete - {len(catalog.events)} events, "
            f"{len(catalog.schedules)} schedules, {len(catalog.speakers)} speakers"
        )
        return catalog


def _lookup(index: Mapping[EntityId, T], record: Any, standardize: Callable[[Any], T]) -> T | None:
    """Resolve an embedded reference through the index, standardizing on a miss."""
    if record is None:
        return None
    if record.id is not None and record.id in index:
        return index[record.id]
    return standardize(record)
