"""
Catalog repository.

Owns the keyed entity stores and runs the fetch -> transform -> populate
cycle. Stores are replaced wholesale at the end of a successful cycle and
never edited in place, so reads are safe at any point of a load.

Usage:
    async with CatalogRepository(create_adapter()) as repository:
        await repository.initialize()
        events = repository.get_all_events()
"""

import asyncio
import logging
from collections import Counter
from collections.abc import Iterable
from typing import Any, TypeVar

from event_catalog.exceptions import FetchError
from event_catalog.ingestion.adapters.base_adapter import BaseSourceAdapter
from event_catalog.monitoring.logging import with_context
from event_catalog.normalization.transformer import CatalogTransformer, TransformedCatalog
from event_catalog.scheduling.time_blocks import TimeBlockScheduler
from event_catalog.schemas.catalog import (
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

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=CatalogEntity)


def _index(entities: Iterable[E]) -> dict[EntityId, E]:
    return {entity.id: entity for entity in entities if entity.id is not None}


class CatalogRepository:
    """
    In-memory store of normalized catalog entities.

    One instance per application context; pass it to whatever needs catalog
    data. Lifecycle is explicit: initialize() / refresh_data() / dispose().
    """

    def __init__(
        self,
        adapter: BaseSourceAdapter,
        transformer: CatalogTransformer | None = None,
        scheduler: TimeBlockScheduler | None = None,
    ):
        self.adapter = adapter
        self.transformer = transformer or CatalogTransformer()
        self._scheduler = scheduler

        self.is_initialized = False
        self.is_loading = False
        self._inflight: asyncio.Task | None = None

        self._events: dict[EntityId, Event] = {}
        self._schedules: dict[EntityId, Schedule] = {}
        self._speakers: dict[EntityId, Speaker] = {}
        self._categories: dict[EntityId, Category] = {}
        self._rooms: dict[EntityId, Room] = {}
        self._streams: dict[EntityId, Stream] = {}
        self._session_types: dict[EntityId, SessionType] = {}

    @property
    def scheduler(self) -> TimeBlockScheduler:
        if self._scheduler is None:
            self._scheduler = TimeBlockScheduler()
        return self._scheduler

    # ========================================================================
    # LIFECYCLE
    # ========================================================================

    async def initialize(self) -> None:
        """
        Load the catalog once.

        A no-op when already initialized; joins the running cycle when one
        is in flight.

        Raises:
            FetchError: If the source could not be fetched
            TransformationError: If the payload could not be transformed
        """
        if self.is_initialized:
            logger.debug("Catalog already initialized")
            return
        await self._run_cycle()

    async def ensure_initialized(self) -> None:
        await self.initialize()

    async def refresh_data(self) -> None:
        """
        Re-fetch and re-transform the catalog, replacing every store.

        On failure the error propagates, the stores and `is_initialized` are
        left as they were, and `is_loading` is reset.
        """
        await self._run_cycle()

    async def _run_cycle(self) -> None:
        if self.is_loading and self._inflight is not None:
            logger.debug("Catalog load already in progress, awaiting it")
            await asyncio.shield(self._inflight)
            return

        self.is_loading = True
        self._inflight = asyncio.ensure_future(self._load())
        try:
            await self._inflight
        finally:
            self.is_loading = False
            self._inflight = None

    async def _load(self) -> None:
        log = with_context(logger, source_id=self.adapter.source_id, stage="fetch")
        log.info("Fetching catalog")

        result = await self.adapter.fetch()
        if not result.success:
            log.error(f"Catalog fetch failed: {result.errors}")
            raise FetchError(self.adapter.source_id, result.errors)
        log.info(f"Fetched catalog in {result.duration_seconds:.2f}s")

        catalog = self.transformer.transform(result.payload)
        self._populate(catalog)
        self.is_initialized = True

        with_context(logger, source_id=self.adapter.source_id, stage="populate").info(
            f"Catalog loaded: {catalog.counts()}"
        )
        self.validate_data_integrity()

    def _populate(self, catalog: TransformedCatalog) -> None:
        """Swap in new stores built from a transformation result."""
        self._events = _index(catalog.events)
        self._schedules = _index(catalog.schedules)
        self._speakers = _index(catalog.speakers)
        self._categories = _index(catalog.categories)
        self._rooms = _index(catalog.rooms)
        self._streams = _index(catalog.streams)
        self._session_types = _index(catalog.session_types)

    async def dispose(self) -> None:
        """Close the source adapter and drop all data."""
        await self.adapter.close()
        self._populate(TransformedCatalog())
        self.is_initialized = False

    async def __aenter__(self) -> "CatalogRepository":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.dispose()

    def is_data_initialized(self) -> bool:
        return self.is_initialized

    def validate_data_integrity(self) -> list[str]:
        """
        Check that the core stores are populated.

        Returns:
            Warning messages; each one is also logged. Never raises.
        """
        warnings = [
            f"No {name} loaded"
            for name, store in (
                ("events", self._events),
                ("schedules", self._schedules),
                ("speakers", self._speakers),
            )
            if not store
        ]
        for warning in warnings:
            logger.warning(warning)
        return warnings

    # ========================================================================
    # EVENTS
    # ========================================================================

    def get_event(self, event_id: EntityId) -> Event | None:
        return self._events.get(event_id)

    def get_all_events(self) -> list[Event]:
        return list(self._events.values())

    def get_events_by_category(self, category: EntityId) -> list[Event]:
        """Events tagged with an audience category, matched by id or name."""
        return [
            event
            for event in self._events.values()
            if any(c.id == category or c.name == category for c in event.categories)
        ]

    def search_events(self, query: str) -> list[Event]:
        """Case-insensitive substring search over title, description and subtitle."""
        if not query or not isinstance(query, str):
            logger.warning(f"Invalid search query: {query!r}")
            return []
        needle = query.lower()
        return [
            event
            for event in self._events.values()
            if needle in event.title.lower()
            or needle in event.description.lower()
            or needle in event.subtitle.lower()
        ]

    def get_events_by_speaker(self, speaker_id: EntityId) -> list[Event]:
        return [
            event
            for event in self._events.values()
            if any(s.id == speaker_id for s in event.speakers)
        ]

    def get_events_by_stream(self, stream_id: EntityId) -> list[Event]:
        return [
            event
            for event in self._events.values()
            if event.stream is not None and event.stream.id == stream_id
        ]

    def get_events_by_session_type(self, session_type_id: EntityId) -> list[Event]:
        return [
            event
            for event in self._events.values()
            if event.session_type is not None and event.session_type.id == session_type_id
        ]

    def get_featured_events(self) -> list[Event]:
        """Events with at least one featured speaker."""
        return [
            event for event in self._events.values() if any(s.featured for s in event.speakers)
        ]

    # ========================================================================
    # SCHEDULES
    # ========================================================================

    def get_schedule(self, schedule_id: EntityId) -> Schedule | None:
        return self._schedules.get(schedule_id)

    def get_all_schedules(self) -> list[Schedule]:
        return list(self._schedules.values())

    def get_schedule_events(self, schedule_id: EntityId) -> list[Event] | None:
        """Events of a schedule day in source order; None for an unknown schedule."""
        schedule = self._schedules.get(schedule_id)
        if schedule is None:
            return None
        return [self._events[i] for i in schedule.session_ids if i in self._events]

    def get_time_slots(self, schedule_id: EntityId) -> list[TimeBlock] | None:
        """
        Group a schedule day's events into time blocks.

        Blocks are computed on every call and never stored.
        """
        events = self.get_schedule_events(schedule_id)
        if events is None:
            return None
        return self.scheduler.group_events_by_time_blocks(events)

    def get_events_for_time_slot(self, schedule_id: EntityId, time_slot_id: str) -> list[Event]:
        """Events of the block with the given id (`time-block-HHMM`) or unique id."""
        for block in self.get_time_slots(schedule_id) or []:
            if time_slot_id in (block.id, block.unique_id):
                return block.events
        return []

    # ========================================================================
    # SPEAKERS
    # ========================================================================

    def get_speaker(self, speaker_id: EntityId) -> Speaker | None:
        return self._speakers.get(speaker_id)

    def get_all_speakers(self) -> list[Speaker]:
        return list(self._speakers.values())

    def get_speakers_by_event(self, event_id: EntityId) -> list[Speaker]:
        """Resolved speakers of an event in session order; [] for an unknown event."""
        event = self._events.get(event_id)
        return list(event.speakers) if event else []

    def get_featured_speakers(self) -> list[Speaker]:
        return [s for s in self._speakers.values() if s.featured]

    def get_speakers_by_expertise(self, expertise: str) -> list[Speaker]:
        """Case-insensitive substring search over speaker bios."""
        if not expertise or not isinstance(expertise, str):
            return []
        needle = expertise.lower()
        return [s for s in self._speakers.values() if needle in s.bio.lower()]

    # ========================================================================
    # CATEGORIES, ROOMS, STREAMS, SESSION TYPES
    # ========================================================================

    def get_category(self, category_id: EntityId) -> Category | None:
        return self._categories.get(category_id)

    def get_all_categories(self) -> list[Category]:
        return list(self._categories.values())

    def get_room(self, room_id: EntityId) -> Room | None:
        return self._rooms.get(room_id)

    def get_all_rooms(self) -> list[Room]:
        return list(self._rooms.values())

    def get_rooms_by_event(self, event_id: EntityId) -> list[Room]:
        event = self._events.get(event_id)
        if event is None or event.room is None:
            return []
        return [event.room]

    def get_stream(self, stream_id: EntityId) -> Stream | None:
        return self._streams.get(stream_id)

    def get_all_streams(self) -> list[Stream]:
        return list(self._streams.values())

    def get_session_type(self, session_type_id: EntityId) -> SessionType | None:
        return self._session_types.get(session_type_id)

    def get_all_session_types(self) -> list[SessionType]:
        return list(self._session_types.values())

    # ========================================================================
    # COUNT SUMMARIES
    # ========================================================================

    def get_categories_with_event_counts(self) -> list[dict[str, Any]]:
        counts = Counter(c.id for e in self._events.values() for c in e.categories)
        return _with_counts(self._categories.values(), counts)

    def get_streams_with_event_counts(self) -> list[dict[str, Any]]:
        counts = Counter(e.stream.id for e in self._events.values() if e.stream is not None)
        return _with_counts(self._streams.values(), counts)

    def get_session_types_with_event_counts(self) -> list[dict[str, Any]]:
        counts = Counter(
            e.session_type.id for e in self._events.values() if e.session_type is not None
        )
        return _with_counts(self._session_types.values(), counts)


def _with_counts(entities: Iterable[CatalogEntity], counts: Counter) -> list[dict[str, Any]]:
    return [{**entity.model_dump(), "event_count": counts.get(entity.id, 0)} for entity in entities]
