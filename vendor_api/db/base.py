"""Store connection manager, declarative Base, and FastAPI session dependency."""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from vendor_api.core.config import Settings
from vendor_api.core.exceptions import StoreError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Declarative Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """All ORM models inherit from this base."""


# ---------------------------------------------------------------------------
# Connection manager
# ---------------------------------------------------------------------------
class ConnectionState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    CONNECTING = "connecting"
    READY = "ready"
    FAILED = "failed"


class StoreConnection:
    """Process-wide store handle, established lazily on first use.

    ``ensure_connection()`` is the only way to obtain the engine. Concurrent
    callers share a single in-flight attempt; a failed attempt is forgotten
    so the next call starts a fresh one.
    """

    def __init__(self, database_url: str | None, *, echo: bool = False):
        self._database_url = database_url
        self._echo = echo
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self._pending: asyncio.Task[AsyncEngine] | None = None
        self._state = ConnectionState.UNINITIALIZED

    @classmethod
    def from_settings(cls, settings: Settings) -> "StoreConnection":
        return cls(settings.database_url, echo=settings.database_echo)

    @property
    def state(self) -> ConnectionState:
        return self._state

    async def ensure_connection(self) -> AsyncEngine:
        if self._engine is not None:
            return self._engine

        if self._pending is None:
            self._state = ConnectionState.CONNECTING
            self._pending = asyncio.ensure_future(self._connect())

        pending = self._pending
        try:
            engine = await asyncio.shield(pending)
        except Exception:
            if self._pending is pending:
                self._pending = None
                self._state = ConnectionState.FAILED
            raise

        if self._engine is None:
            self._engine = engine
            self._session_factory = async_sessionmaker(
                bind=engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
            self._state = ConnectionState.READY
            self._pending = None
        return self._engine

    async def _connect(self) -> AsyncEngine:
        if not self._database_url:
            raise StoreError(
                "Store connection failed",
                details="Please define the DATABASE_URL environment variable",
            )

        logger.info("Connecting to store")
        try:
            engine = await self._open_engine(self._database_url)
        except Exception as exc:
            logger.error("Store connection failed: %s", exc)
            raise StoreError("Store connection failed", details=str(exc)) from exc
        logger.info("Store connection established")
        return engine

    async def _open_engine(self, url: str) -> AsyncEngine:
        """Create the engine, verify connectivity and bootstrap tables."""
        import vendor_api.domain  # noqa: F401  (registers models on Base.metadata)

        kwargs: dict = {"pool_pre_ping": True, "echo": self._echo}
        # SQLite (local dev) doesn't support connection pooling parameters
        if url.startswith("sqlite"):
            kwargs = {"echo": self._echo, "connect_args": {"check_same_thread": False}}

        engine = create_async_engine(url, **kwargs)
        try:
            async with engine.begin() as conn:
                await conn.execute(text("SELECT 1"))
                await conn.run_sync(Base.metadata.create_all)
        except BaseException:
            await engine.dispose()
            raise
        return engine

    def session(self) -> AsyncSession:
        if self._session_factory is None:
            raise StoreError("Store connection is not ready")
        return self._session_factory()

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        self._pending = None
        self._state = ConnectionState.UNINITIALIZED


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------
def get_store(request: Request) -> StoreConnection:
    return request.app.state.store


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session; roll back on error."""
    store = get_store(request)
    await store.ensure_connection()
    async with store.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
