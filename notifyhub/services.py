"""Application wiring: the single shared instance of every collaborator."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from notifyhub.application.notifications import (
    ChangeMonitor,
    KeyValueStorage,
    NotificationStore,
    Notifier,
)
from notifyhub.config import Settings, get_settings
from notifyhub.infrastructure.database import (
    build_session_factory,
    engine_from_settings,
    initialize_database,
)
from notifyhub.infrastructure.notifications import (
    LocalChangeFeed,
    NotificationConnectionManager,
    WebSocketToastSurface,
)
from notifyhub.infrastructure.storage import SqlKeyValueStorage

logger = logging.getLogger(__name__)


@dataclass
class NotificationServices:
    """Everything the API needs, built once per application."""

    settings: Settings
    engine: Engine
    session_factory: sessionmaker[Session]
    connections: NotificationConnectionManager
    feed: LocalChangeFeed
    store: NotificationStore
    notifier: Notifier
    monitor: ChangeMonitor

    def start(self) -> None:
        self.monitor.start(self.settings.monitored_tables or None)

    def shutdown(self) -> None:
        self.monitor.stop()
        self.engine.dispose()


def build_services(
    settings: Settings | None = None,
    *,
    storage: KeyValueStorage | None = None,
) -> NotificationServices:
    """Create the database, store, notifier and monitor from ``settings``."""

    settings = settings or get_settings()
    engine = engine_from_settings(settings)
    initialize_database(engine)
    session_factory = build_session_factory(engine)

    store = NotificationStore(
        storage if storage is not None else SqlKeyValueStorage(session_factory),
        capacity=settings.notifications_capacity,
        storage_key=settings.notifications_storage_key,
    )
    connections = NotificationConnectionManager()
    notifier = Notifier(
        store,
        WebSocketToastSurface(connections),
        duration=settings.toast_duration,
        placement=settings.toast_placement,
        database_change_duration=settings.database_change_toast_duration,
    )
    feed = LocalChangeFeed()
    monitor = ChangeMonitor(feed, notifier)
    logger.debug("Notification services ready with %d stored records", len(store.get()))
    return NotificationServices(
        settings=settings,
        engine=engine,
        session_factory=session_factory,
        connections=connections,
        feed=feed,
        store=store,
        notifier=notifier,
        monitor=monitor,
    )


__all__ = ["NotificationServices", "build_services"]
