"""Domain entity representing a stored notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Final

NOTIFICATION_TYPE_SUCCESS: Final[str] = "success"
NOTIFICATION_TYPE_ERROR: Final[str] = "error"
NOTIFICATION_TYPE_WARNING: Final[str] = "warning"
NOTIFICATION_TYPE_INFO: Final[str] = "info"

NOTIFICATION_TYPES: Final[frozenset[str]] = frozenset(
    {
        NOTIFICATION_TYPE_SUCCESS,
        NOTIFICATION_TYPE_ERROR,
        NOTIFICATION_TYPE_WARNING,
        NOTIFICATION_TYPE_INFO,
    }
)

SOURCE_SYSTEM: Final[str] = "system"
SOURCE_DATABASE: Final[str] = "database"


@dataclass
class NotificationRecord:
    """A single entry of the notification history.

    Only ``read`` changes after creation; everything else is fixed when the
    store inserts the record.
    """

    id: str
    type: str
    title: str
    created_at: datetime
    description: str | None = None
    meta: dict[str, Any] | None = None
    read: bool = False
    source: str = SOURCE_SYSTEM

    @property
    def table(self) -> str | None:
        return (self.meta or {}).get("table")

    @property
    def operation(self) -> str | None:
        return (self.meta or {}).get("operation")


__all__ = [
    "NOTIFICATION_TYPES",
    "NOTIFICATION_TYPE_ERROR",
    "NOTIFICATION_TYPE_INFO",
    "NOTIFICATION_TYPE_SUCCESS",
    "NOTIFICATION_TYPE_WARNING",
    "NotificationRecord",
    "SOURCE_DATABASE",
    "SOURCE_SYSTEM",
]
