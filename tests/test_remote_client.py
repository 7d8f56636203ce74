"""HTTP client tests against an in-process aiohttp server."""

import asyncio

import pytest

from conftest import serve
from core.exceptions import (
    RemotePayloadError,
    RemoteRejectedError,
    RemoteUnavailableError,
)
from models import MoodCategory, MoodEntry
from services.remote_client import RemoteMoodClient

pytestmark = pytest.mark.integration


def test_fetch_all_returns_records_in_server_order(fake_remote):
    fake_remote.records = [
        {"id": "2", "mood": "sad", "note": "", "date": "2024-01-02"},
        {"id": 1, "mood": "😊", "note": "hi", "date": "2024-01-01", "image": "https://cdn/1.jpg"},
    ]

    records = asyncio.run(serve(fake_remote, lambda client: client.fetch_all()))

    assert [record.id for record in records] == ["2", "1"]
    assert records[1].mood == "happy"
    assert records[1].image == "https://cdn/1.jpg"


def test_fetch_all_non_2xx_is_unavailable(fake_remote):
    fake_remote.get_status = 503

    with pytest.raises(RemoteUnavailableError) as exc_info:
        asyncio.run(serve(fake_remote, lambda client: client.fetch_all()))

    assert exc_info.value.status == 503


@pytest.mark.parametrize("body", ["not json", '{"moods": []}', '[{"id": "1", "mood": "angry", "date": "2024-01-01"}]'])
def test_fetch_all_malformed_payload(fake_remote, body):
    fake_remote.raw_get_body = body

    with pytest.raises(RemotePayloadError):
        asyncio.run(serve(fake_remote, lambda client: client.fetch_all()))


def test_connection_refused_is_unavailable():
    client = RemoteMoodClient("http://127.0.0.1:1", request_timeout=2)

    with pytest.raises(RemoteUnavailableError):
        asyncio.run(client.fetch_all())


def test_request_timeout(fake_remote):
    fake_remote.delay = 1.0

    with pytest.raises(RemoteUnavailableError):
        asyncio.run(serve(fake_remote, lambda client: client.fetch_all(), request_timeout=0.1))


def test_single_attempt_by_default(fake_remote):
    fake_remote.get_status = 500

    with pytest.raises(RemoteUnavailableError):
        asyncio.run(serve(fake_remote, lambda client: client.fetch_all()))

    assert fake_remote.calls == ["GET"]


def test_configured_retries(fake_remote):
    fake_remote.get_status = 500

    with pytest.raises(RemoteUnavailableError):
        asyncio.run(serve(fake_remote, lambda client: client.fetch_all(), retries=3, retry_delay=0))

    assert fake_remote.calls == ["GET", "GET", "GET"]


def test_payload_errors_are_not_retried(fake_remote):
    fake_remote.raw_get_body = "not json"

    with pytest.raises(RemotePayloadError):
        asyncio.run(serve(fake_remote, lambda client: client.fetch_all(), retries=3, retry_delay=0))

    assert fake_remote.calls == ["GET"]


def test_submit_all_posts_full_list_without_images(fake_remote):
    entries = [
        MoodEntry.create(MoodCategory.HAPPY, note="one", image="file://a.jpg"),
        MoodEntry.create(MoodCategory.SAD),
    ]

    asyncio.run(serve(fake_remote, lambda client: client.submit_all(entries)))

    assert len(fake_remote.posted) == 1
    body = fake_remote.posted[0]
    assert [item["id"] for item in body] == [entry.id for entry in entries]
    assert all("image" not in item for item in body)


def test_submit_all_rejected(fake_remote):
    fake_remote.post_ok = False

    with pytest.raises(RemoteRejectedError):
        asyncio.run(serve(fake_remote, lambda client: client.submit_all([MoodEntry.create(MoodCategory.SAD)])))


def test_delete_sends_id_as_query(fake_remote):
    fake_remote.records = [{"id": "abc", "mood": "sad", "date": "2024-01-01"}]

    asyncio.run(serve(fake_remote, lambda client: client.delete("abc")))

    assert fake_remote.deleted == ["abc"]
    assert fake_remote.records == []


def test_delete_unknown_id_reports_404(fake_remote):
    with pytest.raises(RemoteUnavailableError) as exc_info:
        asyncio.run(serve(fake_remote, lambda client: client.delete("missing")))

    assert exc_info.value.status == 404


def test_health(fake_remote):
    response = asyncio.run(serve(fake_remote, lambda client: client.health()))

    assert response["status"] == "healthy"
