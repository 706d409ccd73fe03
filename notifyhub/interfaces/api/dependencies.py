"""FastAPI dependency utilities."""

from collections.abc import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from notifyhub.application.notifications import ChangeMonitor, NotificationStore, Notifier
from notifyhub.infrastructure.database import session_scope
from notifyhub.infrastructure.notifications import LocalChangeFeed
from notifyhub.services import NotificationServices


def get_services(request: Request) -> NotificationServices:
    return request.app.state.services


def get_store(services: NotificationServices = Depends(get_services)) -> NotificationStore:
    return services.store


def get_notifier(services: NotificationServices = Depends(get_services)) -> Notifier:
    return services.notifier


def get_monitor(services: NotificationServices = Depends(get_services)) -> ChangeMonitor:
    return services.monitor


def get_feed(services: NotificationServices = Depends(get_services)) -> LocalChangeFeed:
    return services.feed


def get_db(services: NotificationServices = Depends(get_services)) -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    yield from session_scope(services.session_factory)
