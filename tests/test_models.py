"""Mood entry model, enums and wire schema tests."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from models import MoodCategory, MoodEntry, MoodValidationError
from shared.models import RemoteMoodRecord, parse_remote_list

pytestmark = pytest.mark.unit


# ==================== MoodCategory ====================


@pytest.mark.parametrize("value, expected", [
    ("😊", MoodCategory.HAPPY),
    ("😐", MoodCategory.NEUTRAL),
    ("😢", MoodCategory.SAD),
    ("happy", MoodCategory.HAPPY),
    ("SAD", MoodCategory.SAD),
    (" neutral ", MoodCategory.NEUTRAL),
    (MoodCategory.SAD, MoodCategory.SAD),
])
def test_parse_mood_accepts_names_and_emoji(value, expected):
    assert MoodCategory.parse(value) is expected


@pytest.mark.parametrize("value", ["", "   ", None, "undefined", "🤩", 3])
def test_parse_mood_rejects_unknown_values(value):
    assert MoodCategory.parse(value) is None


def test_category_emoji():
    assert MoodCategory.HAPPY.emoji == "😊"
    assert MoodCategory.SAD.emoji == "😢"


# ==================== MoodEntry ====================


def test_create_generates_id_and_timestamp():
    entry = MoodEntry.create(MoodCategory.HAPPY, note="great day")

    assert entry.id
    assert entry.timestamp.tzinfo is not None
    assert entry.synced is False
    assert MoodEntry.create(MoodCategory.HAPPY).id != entry.id


def test_empty_note_and_image_become_none():
    entry = MoodEntry.create(MoodCategory.SAD, note="", image="")

    assert entry.note is None
    assert entry.image is None


def test_numeric_id_is_stored_as_string():
    entry = MoodEntry(id=42, mood="happy", timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc))

    assert entry.id == "42"


def test_unknown_mood_raises():
    with pytest.raises(MoodValidationError):
        MoodEntry(id="1", mood="undefined", timestamp=datetime.now(timezone.utc))


def test_from_dict_reads_legacy_local_date_and_emoji_mood():
    entry = MoodEntry.from_dict(
        {"id": "a", "mood": "😢", "note": "meh", "date": "2024-03-05 14:30:00"},
        tz_name="Europe/Moscow",
    )

    assert entry.mood is MoodCategory.SAD
    # 14:30 в Москве (UTC+3) - 11:30 UTC
    assert entry.timestamp == datetime(2024, 3, 5, 11, 30, tzinfo=timezone.utc)


def test_from_dict_reads_date_only_and_z_suffix():
    day = MoodEntry.from_dict({"id": "1", "mood": "sad", "date": "2024-01-01"})
    instant = MoodEntry.from_dict({"id": "2", "mood": "sad", "date": "2024-01-01T10:00:00Z"})

    assert day.timestamp == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert instant.timestamp == datetime(2024, 1, 1, 10, tzinfo=timezone.utc)


def test_from_dict_rejects_bad_date():
    with pytest.raises(MoodValidationError):
        MoodEntry.from_dict({"id": "1", "mood": "sad", "date": "yesterday"})


def test_to_dict_and_back_keeps_fields():
    entry = MoodEntry.create(MoodCategory.NEUTRAL, note="ok", image="file://a.jpg")
    entry.synced = True

    restored = MoodEntry.from_dict(entry.to_dict())

    assert restored == entry


def test_remote_dict_never_carries_image_or_sync_marker():
    entry = MoodEntry.create(MoodCategory.HAPPY, note=None, image="file://a.jpg")

    payload = entry.to_remote_dict()

    assert set(payload) == {"id", "mood", "note", "date"}
    assert payload["mood"] == "happy"
    assert payload["note"] == ""


# ==================== RemoteMoodRecord ====================


def test_remote_record_coerces_numeric_id():
    record = RemoteMoodRecord.model_validate({"id": 7, "mood": "sad", "date": "2024-01-01"})

    assert record.id == "7"


def test_remote_record_normalizes_emoji_mood_and_blank_image():
    record = RemoteMoodRecord.model_validate(
        {"id": "1", "mood": "😊", "date": "2024-01-01", "image": "  "}
    )

    assert record.mood == "happy"
    assert record.image is None


@pytest.mark.parametrize("payload", [
    {"id": "", "mood": "sad", "date": "2024-01-01"},
    {"id": None, "mood": "sad", "date": "2024-01-01"},
    {"id": "1", "mood": "angry", "date": "2024-01-01"},
    {"id": "1", "mood": "sad"},
])
def test_remote_record_rejects_malformed_items(payload):
    with pytest.raises(ValidationError):
        RemoteMoodRecord.model_validate(payload)


def test_parse_remote_list_requires_array():
    with pytest.raises(ValueError):
        parse_remote_list({"moods": []})
