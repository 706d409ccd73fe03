from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from notifyhub.application.notifications import KeyValueStorage
from notifyhub.config import Settings, get_settings
from notifyhub.interfaces.api.routes import register_routes
from notifyhub.services import build_services

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    storage: KeyValueStorage | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Start watching the change feed on startup and release resources on shutdown."""

        services = app.state.services
        services.start()
        yield
        services.shutdown()

    app = FastAPI(title="notifyhub", lifespan=lifespan)
    app.state.services = build_services(settings, storage=storage)
    register_routes(app)
    return app
