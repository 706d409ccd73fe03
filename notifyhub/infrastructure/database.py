"""Database configuration and session management."""

from __future__ import annotations

import logging
from collections.abc import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from notifyhub.config import Settings, get_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


def build_engine(database_url: str) -> Engine:
    """Create an engine for ``database_url``.

    In-memory SQLite databases share a single connection so every session sees
    the same tables.
    """

    if database_url.startswith("sqlite"):
        kwargs: dict[str, object] = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url.rstrip("/") == "sqlite:":
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)
    return create_engine(database_url, pool_pre_ping=True)


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def engine_from_settings(settings: Settings | None = None) -> Engine:
    settings = settings or get_settings()
    return build_engine(settings.database_url)


def initialize_database(engine: Engine) -> None:
    """Ensure all ORM models have corresponding database tables."""

    from notifyhub.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.debug("Database tables ensured on %s", engine.url.render_as_string(hide_password=True))


def session_scope(factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    db = factory()
    try:
        yield db
    finally:
        db.close()


__all__ = [
    "Base",
    "build_engine",
    "build_session_factory",
    "engine_from_settings",
    "initialize_database",
    "session_scope",
]
