from fastapi import FastAPI

from .activity import router as activity_router
from .changes import router as changes_router
from .notifications import router as notifications_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(notifications_router)
    app.include_router(changes_router)
    app.include_router(activity_router)
