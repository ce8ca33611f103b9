import asyncio
import json
import threading
from pathlib import Path

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from vidmeta.assets.services import AssetService
from vidmeta.config import VideoConfig


class FakeAssetStore:
    """In-memory metadata store speaking the GET/POST protocol of the API."""

    def __init__(self):
        self.records: dict[str, dict] = {}
        self.requests: list[tuple[str, str]] = []
        self.raw_bodies: list[dict] = []
        self.write_status: int | None = None
        self.base_url = ""

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/api/assets/{key:.+}", self.handle_get)
        app.router.add_post("/api/assets", self.handle_post)
        return app

    def count(self, method: str, key: str | None = None) -> int:
        return sum(1 for m, k in self.requests if m == method and (key is None or k == key))

    async def handle_get(self, request: web.Request) -> web.Response:
        key = request.match_info["key"]
        self.requests.append(("GET", key))
        if key not in self.records:
            return web.json_response({"error": "not found"}, status=404)
        return web.json_response(self.records[key])

    async def handle_post(self, request: web.Request) -> web.Response:
        body = await request.json()
        self.raw_bodies.append(body)
        self.requests.append(("POST", body["path"]))
        if self.write_status is not None:
            return web.json_response({"error": "rejected"}, status=self.write_status)
        self.records[body["path"]] = json.loads(body["asset"])
        return web.json_response({"ok": True})


@pytest.fixture
async def asset_store():
    store = FakeAssetStore()
    server = TestServer(store.make_app())
    await server.start_server()
    store.base_url = str(server.make_url("/api/assets"))
    yield store
    await server.close()


@pytest.fixture
def threaded_asset_store():
    """Fake store served from its own thread and event loop.

    For tests that drive the client from several ``asyncio.run`` calls.
    """
    store = FakeAssetStore()
    loop = asyncio.new_event_loop()
    runner = web.AppRunner(store.make_app())
    started = threading.Event()

    def serve():
        asyncio.set_event_loop(loop)
        loop.run_until_complete(runner.setup())
        site = web.TCPSite(runner, "127.0.0.1", 0)
        loop.run_until_complete(site.start())
        host, port = runner.addresses[0][:2]
        store.base_url = f"http://{host}:{port}/api/assets"
        started.set()
        loop.run_forever()
        loop.run_until_complete(runner.cleanup())
        loop.close()

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()
    assert started.wait(timeout=10)
    yield store
    loop.call_soon_threadsafe(loop.stop)
    thread.join(timeout=10)


@pytest.fixture
def video_config(asset_store: FakeAssetStore) -> VideoConfig:
    return VideoConfig(api_base_url=asset_store.base_url, provider="mux", folder="videos")


@pytest.fixture
async def service(video_config: VideoConfig):
    async with AssetService(video_config) as svc:
        yield svc


@pytest.fixture
def work_dir(tmp_path: Path, monkeypatch) -> Path:
    """Temporary working directory, local asset paths are resolved against it."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
