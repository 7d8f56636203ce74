"""Mood report, export and message formatting tests."""

import json
from datetime import datetime, timezone

import pytest

from models import MoodCategory, MoodEntry
from services.data_export import EXPORT_COLUMNS, export_entries, export_to_file
from services.mood_report import build_report
from ui import messages

pytestmark = pytest.mark.unit


@pytest.fixture
def entries():
    return [
        MoodEntry(id="1", mood="happy", timestamp=datetime(2024, 1, 1, 9, tzinfo=timezone.utc), note="sun"),
        MoodEntry(id="2", mood="sad", timestamp=datetime(2024, 1, 2, 9, tzinfo=timezone.utc),
                  image="file://2.jpg"),
        MoodEntry(id="3", mood="happy", timestamp=datetime(2024, 1, 3, 9, tzinfo=timezone.utc)),
    ]


# ==================== report ====================


def test_report_counts_and_shares(entries):
    report = build_report(entries)

    assert report["total"] == 3
    assert report["counts"] == {"happy": 2, "neutral": 0, "sad": 1}
    assert report["shares"]["happy"] == 66.7
    assert report["dominant"] == "happy"
    assert report["with_note"] == 1
    assert report["with_image"] == 1
    assert report["first"].startswith("2024-01-01")
    assert report["last"].startswith("2024-01-03")


def test_report_on_empty_list():
    report = build_report([])

    assert report["total"] == 0
    assert report["dominant"] is None
    assert report["first"] is None
    assert messages.report_message(report) == messages.NO_MOODS


def test_report_tie_goes_to_first_category():
    tied = [MoodEntry.create(MoodCategory.SAD), MoodEntry.create(MoodCategory.NEUTRAL)]

    assert build_report(tied)["dominant"] == "neutral"


def test_report_message_mentions_emoji(entries):
    text = messages.report_message(build_report(entries))

    assert "😊 happy: 2" in text
    assert "Чаще всего" in text


# ==================== export ====================


def test_json_export(entries):
    data = json.loads(export_entries(entries, "json", tz_name="Europe/Moscow"))

    assert data["export_info"]["total"] == 3
    assert [row["id"] for row in data["entries"]] == ["1", "2", "3"]
    assert data["entries"][0]["local_date"] == "2024-01-01 12:00"
    assert data["entries"][1]["emoji"] == "😢"


def test_csv_export(entries):
    lines = export_entries(entries, "CSV").decode("utf-8").splitlines()

    assert lines[0] == ",".join(EXPORT_COLUMNS)
    assert len(lines) == 4
    assert lines[2].startswith("2,")


def test_unsupported_format(entries):
    assert export_entries(entries, "xml") is None


def test_export_to_file(entries, tmp_path):
    path = export_to_file(entries, tmp_path / "exports", "csv")

    assert path.exists()
    assert path.suffix == ".csv"


# ==================== messages ====================


def test_entry_message(entries):
    text = messages.entry_message(entries[1])

    assert "02.01.2024" in text
    assert "😢" in text
    assert "📷 file://2.jpg" in text


def test_history_message_empty():
    assert messages.history_message([]) == messages.NO_MOODS


def test_with_reason():
    assert messages.with_reason("Ошибка", "timeout") == "Ошибка: timeout"
    assert messages.with_reason("Ошибка", None) == "Ошибка"
