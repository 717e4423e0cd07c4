"""FastAPI application entry point for the Access Gate.

Lifecycle:
    1. Startup: Initialize logging, build the gate from settings (unless one
       was injected), attach the access listener.
    2. Running: Serve the gate's REST API at /api/v1/*.
    3. Shutdown: Detach the listener.

Run with:
    uv run uvicorn access_gate.main:app --reload --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from fastapi import FastAPI

from access_gate import __version__
from access_gate.config import get_settings
from access_gate.logging_config import get_logger, setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from access_gate.services.gate_service import Gate


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application startup and shutdown lifecycle."""
    settings = get_settings()

    # 1. Setup structured logging
    setup_logging(
        log_level=settings.app_log_level,
        json_logs=not settings.is_development,
    )
    logger = get_logger(__name__)
    logger.info("app.starting", env=settings.app_env, variant=settings.gate_variant)

    # 2. Build the gate (fails fast when roles are not configured)
    from access_gate.services.gate_service import build_gate

    if getattr(app.state, "gate", None) is None:
        app.state.gate = build_gate(settings)

    # 3. Attach the access listener
    from access_gate.services.listener import AccessListener

    listener = None
    if settings.listener_enabled:
        tz = ZoneInfo(settings.listener_timezone) if settings.listener_timezone else None
        listener = AccessListener(app.state.gate.channel, tz=tz)
        listener.attach()

    logger.info("app.started", host=settings.app_host, port=settings.app_port)

    yield

    # Shutdown
    logger.info("app.shutting_down")
    if listener is not None:
        listener.detach()
    logger.info("app.stopped")


def create_app(gate: Gate | None = None) -> FastAPI:
    """Application factory — creates and configures the FastAPI app.

    Args:
        gate: Serve this gate instead of building one from settings.
    """
    settings = get_settings()

    app = FastAPI(
        title="Access Gate",
        description=(
            "Exact-price payment gate with two-phase role transfer. "
            "Every successful payment raises an access notification."
        ),
        version=__version__,
        lifespan=lifespan,
        debug=settings.app_debug,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )
    app.state.gate = gate

    # --- Middleware ---
    from access_gate.api.middleware import setup_middleware

    setup_middleware(app)

    # --- REST API Routes ---
    from access_gate.api.routes.gate import router as gate_router
    from access_gate.api.routes.health import router as health_router
    from access_gate.api.routes.ledger import router as ledger_router
    from access_gate.api.routes.notifications import router as notifications_router

    app.include_router(health_router)
    app.include_router(gate_router)
    app.include_router(notifications_router)
    app.include_router(ledger_router)

    return app


# The app instance used by Uvicorn
app = create_app()
