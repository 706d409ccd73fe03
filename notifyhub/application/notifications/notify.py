"""Facade combining ephemeral toasts with the notification history."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Final, Protocol, TypeVar

from notifyhub.application.notifications.classifier import describe, severity_for, summarize
from notifyhub.application.notifications.store import NotificationStore
from notifyhub.domain.entities import (
    NOTIFICATION_TYPE_ERROR,
    NOTIFICATION_TYPE_INFO,
    NOTIFICATION_TYPE_SUCCESS,
    NOTIFICATION_TYPE_WARNING,
    NOTIFICATION_TYPES,
    ChangeEvent,
)
from notifyhub.utils import epoch_millis, now_in_app_timezone

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_DURATION: Final[float] = 3
DEFAULT_PLACEMENT: Final[str] = "topRight"
DEFAULT_DATABASE_CHANGE_DURATION: Final[float] = 4


class ToastSurface(Protocol):
    """UI collaborator able to display short-lived toasts."""

    def success(self, **options: Any) -> None: ...

    def error(self, **options: Any) -> None: ...

    def warning(self, **options: Any) -> None: ...

    def info(self, **options: Any) -> None: ...

    def open(self, **options: Any) -> None: ...


class Notifier:
    """Show a toast and, unless told otherwise, record it in the store."""

    def __init__(
        self,
        store: NotificationStore,
        toasts: ToastSurface,
        *,
        duration: float = DEFAULT_DURATION,
        placement: str = DEFAULT_PLACEMENT,
        database_change_duration: float = DEFAULT_DATABASE_CHANGE_DURATION,
    ) -> None:
        self.store = store
        self.toasts = toasts
        self.duration = duration
        self.placement = placement
        self.database_change_duration = database_change_duration

    def open(
        self,
        type: str,
        *,
        title: str | None = None,
        description: str | None = None,
        key: str | None = None,
        duration: float | None = None,
        placement: str | None = None,
        log: bool = True,
        meta: dict[str, Any] | None = None,
    ) -> str | None:
        """Display a toast of ``type`` and return the id of the logged record."""

        self._show(
            type,
            message=title,
            description=description,
            key=key,
            duration=self.duration if duration is None else duration,
            placement=placement or self.placement,
        )
        if log is False:
            return None
        return self.store.add(type=type, title=title, description=description, meta=meta)

    def success(self, **options: Any) -> str | None:
        return self.open(NOTIFICATION_TYPE_SUCCESS, **options)

    def info(self, **options: Any) -> str | None:
        return self.open(NOTIFICATION_TYPE_INFO, **options)

    def warning(self, **options: Any) -> str | None:
        return self.open(NOTIFICATION_TYPE_WARNING, **options)

    def error(self, **options: Any) -> str | None:
        return self.open(NOTIFICATION_TYPE_ERROR, **options)

    async def promise(
        self,
        awaitable: Awaitable[T],
        *,
        loading: str = "Working...",
        success: str = "Done",
        error: str = "Failed",
        meta: dict[str, Any] | None = None,
    ) -> T:
        """Track ``awaitable`` with a progress toast and log its outcome.

        Failures are logged as error notifications and re-raised.
        """

        key = f"p-{epoch_millis(now_in_app_timezone())}"
        self._show("open", message=loading, key=key, duration=0, placement=self.placement)
        try:
            result = await awaitable
        except Exception as exc:
            detail = _error_message(exc)
            self._show(
                NOTIFICATION_TYPE_ERROR,
                message=error,
                description=detail,
                key=key,
                placement=self.placement,
            )
            self.store.add(
                type=NOTIFICATION_TYPE_ERROR, title=error, description=detail, meta=meta
            )
            raise
        self._show(NOTIFICATION_TYPE_SUCCESS, message=success, key=key, placement=self.placement)
        self.store.add(type=NOTIFICATION_TYPE_SUCCESS, title=success, meta=meta)
        return result

    def database_change(self, change: ChangeEvent) -> str:
        """Toast a backend row change and always record it in the store."""

        self._show(
            severity_for(change),
            message=summarize(change),
            description=describe(change),
            placement=self.placement,
            duration=self.database_change_duration,
        )
        return self.store.add_database_change(change)

    def _show(self, type: str, **options: Any) -> None:
        show = getattr(self.toasts, type) if type in NOTIFICATION_TYPES else self.toasts.open
        try:
            show(**options)
        except Exception:
            logger.exception("Could not display %s toast %r", type, options.get("message"))


def _error_message(exc: BaseException) -> str:
    message = getattr(exc, "message", None)
    if message:
        return str(message)
    return str(exc) or exc.__class__.__name__


__all__ = ["Notifier", "ToastSurface"]
