"""Pydantic models for realtime change feed payloads."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ChangePayload(BaseModel):
    """Row change as delivered by the backend's realtime webhooks.

    Feedback tables (``*_fb``) only send ``new``.
    """

    model_config = ConfigDict(populate_by_name=True)

    event_type: Literal["INSERT", "UPDATE", "DELETE"] | None = Field(
        default=None, alias="eventType"
    )
    new: dict[str, Any] | None = None
    old: dict[str, Any] | None = None

    def to_feed_payload(self) -> dict[str, Any]:
        return {"eventType": self.event_type, "new": self.new, "old": self.old}


class ChangeAccepted(BaseModel):
    table: str
    delivered: int


__all__ = ["ChangeAccepted", "ChangePayload"]
