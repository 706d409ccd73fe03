"""Convert notification records to and from their stored JSON shape."""

from __future__ import annotations

import copy
import json
from datetime import date, datetime
from typing import Any, Iterable

from notifyhub.domain.entities import NotificationRecord
from notifyhub.utils import parse_timestamp


def serialize_record(record: NotificationRecord) -> dict[str, Any]:
    """Return the storage/wire representation of ``record``."""

    payload = {
        "id": record.id,
        "type": record.type,
        "title": record.title,
        "description": record.description,
        "meta": copy.deepcopy(record.meta),
        "createdAt": record.created_at.isoformat(),
        "read": record.read,
        "source": record.source,
    }
    _normalize_datetime_values(payload)
    return payload


def deserialize_record(data: dict[str, Any]) -> NotificationRecord:
    """Build a :class:`NotificationRecord` from its stored representation.

    Raises ``ValueError`` (or ``KeyError``/``TypeError``) when ``data`` does not
    describe a record.
    """

    if not isinstance(data, dict):
        raise TypeError("Stored notification must be an object")
    created_at = parse_timestamp(data["createdAt"])
    if created_at is None:
        raise ValueError("Stored notification is missing createdAt")
    meta = data.get("meta")
    return NotificationRecord(
        id=str(data["id"]),
        type=str(data.get("type") or "info"),
        title=str(data.get("title") or ""),
        description=data.get("description"),
        meta=dict(meta) if isinstance(meta, dict) else None,
        created_at=created_at,
        read=bool(data.get("read", False)),
        source=str(data.get("source") or "system"),
    )


def dump_records(records: Iterable[NotificationRecord]) -> str:
    return json.dumps([serialize_record(record) for record in records], default=str)


def load_records(raw: str | None) -> list[NotificationRecord]:
    """Parse a stored JSON array; an empty or missing value yields ``[]``."""

    if not raw:
        return []
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError("Stored notifications must be a JSON array")
    return [deserialize_record(item) for item in data]


def _normalize_datetime_values(data: dict[str, Any] | list[Any]) -> None:
    """Convert ``datetime`` instances nested inside ``data`` into ISO strings."""

    if isinstance(data, dict):
        for key, value in data.items():
            if isinstance(value, (datetime, date)):
                data[key] = value.isoformat()
            elif isinstance(value, (dict, list)):
                _normalize_datetime_values(value)
    elif isinstance(data, list):
        for index, item in enumerate(data):
            if isinstance(item, (datetime, date)):
                data[index] = item.isoformat()
            elif isinstance(item, (dict, list)):
                _normalize_datetime_values(item)


__all__ = ["deserialize_record", "dump_records", "load_records", "serialize_record"]
