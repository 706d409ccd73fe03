"""Utility helpers to push toasts and store snapshots to websocket clients."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Sequence

from anyio import from_thread

from notifyhub.domain.entities import NotificationRecord
from notifyhub.domain.serialization import serialize_record

from .manager import NotificationConnectionManager

logger = logging.getLogger(__name__)

_pending: set[asyncio.Task[Any]] = set()


def schedule(func: Callable[..., Awaitable[Any]], *args: Any) -> None:
    """Run ``func(*args)`` on the event loop without waiting for it.

    Works from coroutines running on the loop and from worker threads started
    by anyio (sync FastAPI endpoints). Calls made from any other thread are
    dropped with a debug log since no loop is reachable.
    """

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        try:
            from_thread.run_sync(_spawn, func, args)
        except RuntimeError as exc:
            logger.debug("No event loop available for realtime delivery: %s", exc)
    else:
        _track(loop.create_task(func(*args)))


def _spawn(func: Callable[..., Awaitable[Any]], args: tuple[Any, ...]) -> None:
    # Runs on the loop thread; the worker only waits for the task to be created.
    _track(asyncio.get_running_loop().create_task(func(*args)))


def _track(task: asyncio.Task[Any]) -> None:
    _pending.add(task)
    task.add_done_callback(_pending.discard)


def snapshot_message(records: Sequence[NotificationRecord], unread: int) -> dict[str, Any]:
    """Return the websocket payload describing the whole notification list."""

    return {
        "type": "snapshot",
        "data": {
            "items": [serialize_record(record) for record in records],
            "unread": unread,
        },
    }


class WebSocketToastSurface:
    """Display ephemeral toasts on every connected dashboard."""

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager

    def success(self, **options: Any) -> None:
        self._show("success", options)

    def error(self, **options: Any) -> None:
        self._show("error", options)

    def warning(self, **options: Any) -> None:
        self._show("warning", options)

    def info(self, **options: Any) -> None:
        self._show("info", options)

    def open(self, **options: Any) -> None:
        self._show("open", options)

    def _show(self, level: str, options: dict[str, Any]) -> None:
        message = {
            "type": "toast",
            "data": {
                "level": level,
                "message": options.get("message"),
                "description": options.get("description"),
                "key": options.get("key"),
                "duration": options.get("duration"),
                "placement": options.get("placement"),
            },
        }
        schedule(self._manager.broadcast, message)


__all__ = ["WebSocketToastSurface", "schedule", "snapshot_message"]
