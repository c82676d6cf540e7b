"""Shared fixtures: a fresh SQLite-backed app per test and session tokens."""

from datetime import datetime, timedelta, timezone

import httpx
import pytest
from jose import jwt

from vendor_api.core.config import Settings
from vendor_api.db.base import StoreConnection
from vendor_api.main import create_app

SECRET = "test-session-secret"

ACME = {
    "vendorName": "Acme",
    "bankAccountNo": "123",
    "bankName": "Chase",
    "addressLine2": "Suite 1",
}


def make_token(email: str | None, secret: str = SECRET, expires_in: timedelta = timedelta(hours=1)) -> str:
    claims = {"exp": datetime.now(timezone.utc) + expires_in}
    if email is not None:
        claims["email"] = email
    return jwt.encode(claims, secret, algorithm="HS256")


def bearer(email: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(email)}"}


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'vendors.db'}",
        session_secret=SECRET,
    )


@pytest.fixture
async def store(settings):
    store = StoreConnection.from_settings(settings)
    yield store
    await store.dispose()


@pytest.fixture
async def db_session(store):
    await store.ensure_connection()
    async with store.session() as session:
        yield session


@pytest.fixture
async def client(settings, store):
    app = create_app(settings, store)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def alice() -> dict[str, str]:
    return bearer("alice@x.com")


@pytest.fixture
def bob() -> dict[str, str]:
    return bearer("bob@x.com")
