"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from notifyhub.domain.entities import NotificationRecord


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    type: str
    title: str
    description: str | None = None
    meta: dict[str, Any] | None = None
    created_at: datetime = Field(alias="createdAt")
    read: bool
    source: str

    @classmethod
    def from_record(cls, record: NotificationRecord) -> "NotificationRead":
        return cls(
            id=record.id,
            type=record.type,
            title=record.title,
            description=record.description,
            meta=record.meta,
            created_at=record.created_at,
            read=record.read,
            source=record.source,
        )


class NotificationListRead(BaseModel):
    """Snapshot of the notification history."""

    items: list[NotificationRead]
    unread: int


class UnreadCountRead(BaseModel):
    unread: int


class NotificationCreate(BaseModel):
    """Payload used by screens to log an application notification."""

    type: Literal["success", "error", "warning", "info"] = "info"
    title: str = Field(..., min_length=1, description="Short human readable title")
    description: str | None = None
    meta: dict[str, Any] | None = None
    toast: bool = Field(default=True, description="Also display the notification as a toast")


class NotificationCreated(BaseModel):
    id: str


class NotificationMarkReadRequest(BaseModel):
    """Payload used to change the read flag of a notification."""

    read: bool = True


__all__ = [
    "NotificationCreate",
    "NotificationCreated",
    "NotificationListRead",
    "NotificationMarkReadRequest",
    "NotificationRead",
    "UnreadCountRead",
]
