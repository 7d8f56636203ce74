import asyncio
import json

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from config import AppConfig
from database import KeyValueStore, MoodRepository
from services.journal_service import MoodJournalService
from services.remote_client import RemoteMoodClient


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Tests against a live local HTTP server")


# ==================== Fake remote store ====================


class FakeRemote:
    """In-process stand-in for the remote mood record service."""

    def __init__(self):
        self.records = []
        self.get_status = 200
        self.raw_get_body = None
        self.post_status = 200
        self.post_ok = True
        self.delete_status = None
        self.delay = 0.0
        self.posted = []
        self.deleted = []
        self.calls = []

    def make_app(self) -> web.Application:
        app = web.Application()
        app.add_routes([
            web.get("/health", self.handle_health),
            web.get("/moods", self.handle_get),
            web.post("/moods", self.handle_post),
            web.delete("/moods", self.handle_delete),
        ])
        return app

    async def handle_health(self, request):
        return web.json_response({"status": "healthy", "records": len(self.records)})

    async def handle_get(self, request):
        self.calls.append("GET")
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.get_status != 200:
            return web.json_response({"error": "unavailable"}, status=self.get_status)
        if self.raw_get_body is not None:
            return web.Response(text=self.raw_get_body, content_type="application/json")
        return web.json_response(self.records)

    async def handle_post(self, request):
        self.calls.append("POST")
        body = await request.json()
        self.posted.append(body)
        if self.post_status != 200:
            return web.json_response({"error": "unavailable"}, status=self.post_status)
        if self.post_ok:
            known = {record["id"]: i for i, record in enumerate(self.records)}
            for item in body:
                if item["id"] in known:
                    self.records[known[item["id"]]].update(item)
                else:
                    self.records.append(dict(item))
        return web.json_response({"ok": self.post_ok})

    async def handle_delete(self, request):
        self.calls.append("DELETE")
        entry_id = request.query.get("id")
        self.deleted.append(entry_id)
        if self.delete_status is not None:
            return web.Response(status=self.delete_status)
        remaining = [record for record in self.records if record["id"] != entry_id]
        if len(remaining) == len(self.records):
            return web.Response(status=404)
        self.records = remaining
        return web.Response(status=200)


async def serve(fake: FakeRemote, scenario, **client_kwargs):
    """Run scenario(client) against fake served on a random local port."""
    server = TestServer(fake.make_app())
    await server.start_server()
    try:
        client_kwargs.setdefault("request_timeout", 5)
        client = RemoteMoodClient(f"http://{server.host}:{server.port}", **client_kwargs)
        return await scenario(client)
    finally:
        await server.close()


# ==================== Fixtures ====================


@pytest.fixture
def app_config(tmp_path):
    """Configuration isolated in a temporary directory (local-only mode)."""
    return AppConfig(env={
        "ENVIRONMENT": "testing",
        "DATA_DIR": str(tmp_path / "data"),
        "BACKUP_DIR": str(tmp_path / "backups"),
        "EXPORT_DIR": str(tmp_path / "exports"),
        "LOG_DIR": str(tmp_path / "logs"),
    })


@pytest.fixture
def store(tmp_path):
    return KeyValueStore(tmp_path / "data" / "local_store.json", backup_dir=tmp_path / "backups")


@pytest.fixture
def repository(store):
    return MoodRepository(store, "@moodList:key")


@pytest.fixture
def fake_remote():
    return FakeRemote()


@pytest.fixture
def run_journal(repository, fake_remote):
    """Run scenario(service) with a journal service wired to the fake remote."""
    def runner(scenario, local_only=False, **client_kwargs):
        async def main():
            if local_only:
                return await scenario(MoodJournalService(repository))

            async def with_client(client):
                return await scenario(MoodJournalService(repository, remote=client))

            return await serve(fake_remote, with_client, **client_kwargs)

        return asyncio.run(main())
    return runner


def read_blob(store, key="@moodList:key"):
    """Raw decoded list under the storage key, or None."""
    raw = asyncio.run(store.get(key))
    return None if raw is None else json.loads(raw)
