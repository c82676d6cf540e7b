"""Vendor API — FastAPI application factory."""


import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vendor_api.core.config import Settings, settings as default_settings
from vendor_api.core.exceptions import register_exception_handlers
from vendor_api.db.base import StoreConnection
from vendor_api.middleware.request_log import RequestLogMiddleware
from vendor_api.routers.diagnostics import router as diagnostics_router
from vendor_api.routers.session import router as session_router
from vendor_api.routers.vendors import router as vendors_router
from vendor_api.schemas.common import HealthResponse


def _configure_logging(settings: Settings) -> None:
    """Set up structured logging for the application."""
    level = logging.DEBUG if settings.is_development else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def create_app(
    settings: Settings | None = None,
    store: StoreConnection | None = None,
) -> FastAPI:
    settings = settings or default_settings
    _configure_logging(settings)

    if not settings.database_url and not settings.is_development:
        raise RuntimeError("Please define the DATABASE_URL environment variable")

    store = store or StoreConnection.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await store.dispose()

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # --- Request logging ---
    app.add_middleware(RequestLogMiddleware)

    # --- Global exception handlers ---
    register_exception_handlers(app)

    # --- API routes ---
    app.include_router(vendors_router, prefix=settings.api_prefix)
    app.include_router(session_router, prefix=settings.api_prefix)
    app.include_router(diagnostics_router, prefix=settings.api_prefix)

    # --- Health check ---
    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health():
        return HealthResponse(app=settings.app_name, env=settings.app_env)

    return app


app = create_app()
