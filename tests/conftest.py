"""
Shared pytest fixtures for the event catalog test suite.

Provides raw payload fixtures, an Event factory and a stub source adapter.
"""

import itertools
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from event_catalog.ingestion.adapters.base_adapter import (
    BaseSourceAdapter,
    FetchResult,
    SourceType,
)
from event_catalog.schemas.catalog import Event, Speaker


def _raw_speaker(speaker_id, name, **kwargs):
    speaker = {
        "id": speaker_id,
        "displayName": name,
        "sortName": name.split()[-1],
        "position": "Developer",
        "company": "Studio",
        "copy": f"<p>{name} makes <b>games</b>.</p>",
        "speakerImage": f"https://cdn.example.com/{speaker_id}.jpg",
    }
    speaker.update(kwargs)
    return speaker


def _raw_session(session_id, title, start, end, speakers, **kwargs):
    session = {
        "id": session_id,
        "title": title,
        "subtitle": "",
        "copy": f"<p>About {title}</p>",
        "startTime": start,
        "endTime": end,
        "speakers": speakers,
        "categories": [],
    }
    session.update(kwargs)
    return session


@pytest.fixture
def raw_speaker():
    """Return a factory for raw speaker records."""
    return _raw_speaker


@pytest.fixture
def raw_session():
    """Return a factory for raw session records."""
    return _raw_session


@pytest.fixture
def sample_payload():
    """
    Return a realistic raw payload.

    Contains:
    - speaker 1 both top-level and embedded (with a different name)
    - speaker 3 only embedded in a session
    - room 10 both top-level and embedded (with a different title)
    - one schedule day with three sessions
    """
    return {
        "data": {
            "speakers": [
                _raw_speaker(1, "Ada Lovelace"),
                _raw_speaker(2, "Alan Turing", position="", company="Bletchley"),
            ],
            "categories": [
                {"id": 100, "name": "Story &amp; Narrative"},
                {"id": 101, "name": "Audio"},
            ],
            "rooms": [{"id": 10, "title": "Main Hall", "capacity": 500}],
            "streams": [
                {"id": 20, "title": "Programming", "streamColour": "#ff0000"},
                {"id": 21, "title": "Art", "streamColour": "#00ff00"},
            ],
            "sessionTypes": [
                {"id": 30, "title": "Talk", "colour": "#123456", "icon": "mic"},
            ],
            "schedule": [
                {
                    "id": 1000,
                    "title": "Thursday",
                    "date": "2025-09-18",
                    "sessions": [
                        _raw_session(
                            501,
                            "Engines",
                            "09:00",
                            "10:00",
                            [_raw_speaker(1, "Embedded Ada"), _raw_speaker(2, "Alan Turing")],
                            room={"id": 10, "title": "Embedded Hall"},
                            stream={"id": 20, "title": "Programming"},
                            type={"id": 30, "title": "Talk"},
                            categories=[{"id": 100, "name": "Story & Narrative"}],
                            speakerRoles='{"1": "Moderator"}',
                        ),
                        _raw_session(
                            502,
                            "Pixel Art",
                            "11:00",
                            "11:30",
                            [_raw_speaker(3, "Grace Hopper")],
                            room={"id": 11, "title": "Side Room", "capacity": 40},
                            stream={"id": 21, "title": "Art"},
                            categories=[{"id": 101, "name": "Audio"}],
                            sessionThumbnail="https://cdn.example.com/pixel.png",
                        ),
                        _raw_session(503, "Lunch", None, None, []),
                    ],
                }
            ],
        }
    }


@pytest.fixture
def end_to_end_payload():
    """
    Return one schedule day with two 09:00 sessions and one 14:00 session.

    The 09:00 sessions have 1 and 3 speakers respectively.
    """
    return {
        "data": {
            "speakers": [],
            "schedule": [
                {
                    "id": 1,
                    "title": "Thursday",
                    "date": "2025-09-18",
                    "sessions": [
                        _raw_session(1, "Solo Talk", "09:00", "10:00", [_raw_speaker(1, "A One")]),
                        _raw_session(
                            2,
                            "Panel",
                            "09:00",
                            "10:00",
                            [
                                _raw_speaker(2, "B Two"),
                                _raw_speaker(3, "C Three"),
                                _raw_speaker(4, "D Four"),
                            ],
                        ),
                        _raw_session(3, "Afternoon Chat", "14:00", "14:30", [_raw_speaker(5, "E Five")]),
                    ],
                }
            ],
        }
    }


@pytest.fixture
def create_event():
    """
    Return a function that creates Event objects with sensible defaults.

    Example:
        event = create_event(title="Panel", start_time="10:00", speaker_count=2)
    """
    ids = itertools.count(1)

    def _create_event(
        title: str = "Test Event",
        start_time: str | None = "10:00",
        end_time: str | None = "11:00",
        speaker_count: int = 1,
        **kwargs,
    ) -> Event:
        defaults = {
            "id": next(ids),
            "title": title,
            "start_time": start_time,
            "end_time": end_time,
            "speakers": [
                Speaker(id=f"s{i}", name=f"Speaker {i}") for i in range(speaker_count)
            ],
        }
        defaults.update(kwargs)
        return Event(**defaults)

    return _create_event


@pytest.fixture
def stub_adapter():
    """
    Return a function that builds a mocked source adapter.

    The adapter's fetch() returns a successful FetchResult carrying the given
    payload, or a failed one when `errors` is given.
    """

    def _stub_adapter(payload: dict | None = None, errors: list[str] | None = None):
        adapter = MagicMock(spec=BaseSourceAdapter)
        adapter.source_id = "stub"
        adapter.fetch = AsyncMock(
            return_value=FetchResult(
                success=not errors,
                source_type=SourceType.FILE,
                payload=payload or {},
                errors=errors or [],
                fetch_started_at=datetime(2025, 9, 18, 9, 0, tzinfo=UTC),
                fetch_ended_at=datetime(2025, 9, 18, 9, 0, 1, tzinfo=UTC),
            )
        )
        adapter.close = AsyncMock()
        return adapter

    return _stub_adapter
