import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from conftest import ACME, SECRET, bearer
from vendor_api.core.config import Settings
from vendor_api.db.base import ConnectionState, StoreConnection
from vendor_api.main import create_app


def test_missing_database_url_is_fatal_outside_development():
    with pytest.raises(RuntimeError, match="DATABASE_URL"):
        create_app(Settings(app_env="production", database_url=None))


async def test_missing_database_url_is_permitted_in_development():
    store = StoreConnection(None)
    app = create_app(Settings(app_env="development", database_url=None), store)
    assert store.state == ConnectionState.UNINITIALIZED

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/health")
        assert resp.status_code == 200

        resp = await client.get("/diagnostics/store")
        assert resp.status_code == 500
        assert "DATABASE_URL" in resp.json()["details"]


async def test_malformed_url_reported_by_diagnostics():
    settings = Settings(database_url="postgresql+asyncpg://u:p@localhost:notaport/db")
    app = create_app(settings, StoreConnection.from_settings(settings))
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        for _ in range(2):
            resp = await client.get("/diagnostics/store")
            assert resp.status_code == 500
            body = resp.json()
            assert body["error"] == "Store connection failed"
            assert body["details"]


async def test_write_is_committed_before_response(settings, store, monkeypatch):
    events: list[str] = []
    original_commit = AsyncSession.commit

    async def recording_commit(self):
        events.append("commit")
        await original_commit(self)

    monkeypatch.setattr(AsyncSession, "commit", recording_commit)
    app = create_app(settings, store)

    async def recording_app(scope, receive, send):
        async def recording_send(message):
            events.append(message["type"])
            await send(message)

        await app(scope, receive, recording_send)

    transport = httpx.ASGITransport(app=recording_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.post("/vendors", json=ACME, headers=bearer("alice@x.com"))
        assert resp.status_code == 201

    assert "commit" in events
    assert events.index("commit") < events.index("http.response.start")


async def test_default_page_limit_from_app_settings(tmp_path):
    settings = Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'vendors.db'}",
        session_secret=SECRET,
        default_page_limit=2,
    )
    store = StoreConnection.from_settings(settings)
    app = create_app(settings, store)
    transport = httpx.ASGITransport(app=app)
    alice = bearer("alice@x.com")
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            for i in range(3):
                resp = await client.post("/vendors", json={**ACME, "vendorName": f"V{i}"}, headers=alice)
                assert resp.status_code == 201

            body = (await client.get("/vendors", headers=alice)).json()
            assert body["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}
            assert len(body["vendors"]) == 2
    finally:
        await store.dispose()
