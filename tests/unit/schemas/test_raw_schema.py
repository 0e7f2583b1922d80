"""
Unit tests for the raw payload schema.

The raw models must accept any record shape the source may send without
failing validation.
"""

from event_catalog.schemas.raw import (
    RawCatalogPayload,
    RawRoom,
    RawSession,
    RawSpeaker,
)


class TestRawSpeaker:
    """Tests for RawSpeaker."""

    def test_camel_case_aliases(self):
        """Should map camelCase keys to snake_case attributes."""
        speaker = RawSpeaker.model_validate(
            {"id": 1, "displayName": "Ada", "speakerImage": "a.jpg", "copy": "<p>Bio</p>"}
        )
        assert speaker.display_name == "Ada"
        assert speaker.speaker_image == "a.jpg"
        assert speaker.body == "<p>Bio</p>"

    def test_extra_fields_ignored(self):
        """Should ignore fields it does not know."""
        speaker = RawSpeaker.model_validate({"id": 1, "shoeSize": 44})
        assert not hasattr(speaker, "shoe_size")

    def test_all_fields_optional(self):
        """Should validate an empty record."""
        speaker = RawSpeaker.model_validate({})
        assert speaker.id is None
        assert speaker.display_name is None

    def test_wrong_typed_scalars(self):
        """Should coerce numbers to text and drop unusable values."""
        speaker = RawSpeaker.model_validate({"id": 1, "displayName": 42, "company": ["x"]})
        assert speaker.display_name == "42"
        assert speaker.company is None


class TestRawSession:
    """Tests for RawSession."""

    def test_type_alias(self):
        """Should read the session type from the `type` key."""
        session = RawSession.model_validate({"id": 1, "type": {"id": 3, "title": "Talk"}})
        assert session.session_type.title == "Talk"

    def test_non_list_speakers(self):
        """Should treat a malformed speakers field as empty."""
        session = RawSession.model_validate({"id": 1, "speakers": "nobody"})
        assert session.speakers == []

    def test_non_mapping_speakers_dropped(self):
        """Should skip speaker entries that are not objects."""
        session = RawSession.model_validate({"id": 1, "speakers": [{"id": 2}, 7, None]})
        assert [s.id for s in session.speakers] == [2]

    def test_non_mapping_room(self):
        """Should drop a room reference that is not an object."""
        session = RawSession.model_validate({"id": 1, "room": "Hall A"})
        assert session.room is None


class TestRawCatalogPayload:
    """Tests for RawCatalogPayload."""

    def test_missing_data(self):
        """Should default to empty collections."""
        payload = RawCatalogPayload.model_validate({})
        assert payload.data.speakers == []
        assert payload.data.schedule == []

    def test_non_mapping_data(self):
        """Should treat a non-object data field as empty."""
        payload = RawCatalogPayload.model_validate({"data": [1, 2, 3]})
        assert payload.data.rooms == []

    def test_integral_float_id(self):
        """Integral float ids should become ints; fractional ones are dropped."""
        assert RawRoom.model_validate({"id": 3.0}).id == 3
        assert isinstance(RawRoom.model_validate({"id": 3.0}).id, int)
        assert RawRoom.model_validate({"id": 3.5}).id is None

    def test_capacity_coercion(self):
        """Should coerce numeric strings and drop garbage for counts."""
        assert RawRoom.model_validate({"id": 1, "capacity": "120"}).capacity == 120
        assert RawRoom.model_validate({"id": 1, "capacity": "lots"}).capacity is None
