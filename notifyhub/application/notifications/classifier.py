"""Derive human readable titles and descriptions from change events.

The backend schema is heterogeneous, so the helpers only look for a handful of
well known columns and otherwise fall back to generic phrases. None of them
raise: a change that cannot be described still yields a usable string.
"""

from __future__ import annotations

from typing import Any, Final, Mapping

from notifyhub.domain.catalog import table_display_name
from notifyhub.domain.entities import (
    NOTIFICATION_TYPE_INFO,
    NOTIFICATION_TYPE_SUCCESS,
    NOTIFICATION_TYPE_WARNING,
    OPERATION_DELETE,
    OPERATION_FEEDBACK,
    OPERATION_INSERT,
    OPERATION_UPDATE,
    ChangeEvent,
)

FEEDBACK_PREVIEW_LENGTH: Final[int] = 60
INTERESTING_FIELDS: Final[tuple[str, ...]] = ("company", "customer_name", "meeting")

DEFAULT_TITLE: Final[str] = "Database Change"
DEFAULT_DESCRIPTION: Final[str] = "Database change detected"

_FALLBACK_DESCRIPTIONS: Final[dict[str, str]] = {
    OPERATION_INSERT: "New record added",
    OPERATION_UPDATE: "Record has been modified",
    OPERATION_DELETE: "Record has been removed",
    OPERATION_FEEDBACK: "New feedback received",
}

_SEVERITIES: Final[dict[str, str]] = {
    OPERATION_INSERT: NOTIFICATION_TYPE_SUCCESS,
    OPERATION_DELETE: NOTIFICATION_TYPE_WARNING,
}


def summarize(change: ChangeEvent) -> str:
    """Return the notification title for ``change``."""

    operation = _operation(change)
    table = getattr(change, "table", None)
    display = table_display_name(table) if isinstance(table, str) else "Record"

    if operation == OPERATION_INSERT:
        return f"New {display}"
    if operation == OPERATION_UPDATE:
        return f"{display} Updated"
    if operation == OPERATION_DELETE:
        return f"{display} Deleted"
    if operation == OPERATION_FEEDBACK:
        return "New Feedback"
    return DEFAULT_TITLE


def describe(change: ChangeEvent) -> str:
    """Return the notification description for ``change``."""

    operation = _operation(change)
    row = _record(change)

    if operation == OPERATION_FEEDBACK:
        content = row.get("content")
        if content:
            return _preview(str(content))

    for field_name in INTERESTING_FIELDS:
        value = row.get(field_name)
        if value:
            return str(value)

    return _FALLBACK_DESCRIPTIONS.get(operation, DEFAULT_DESCRIPTION)


def severity_for(change: ChangeEvent) -> str:
    """Return the notification type used to render ``change``."""

    return _SEVERITIES.get(_operation(change), NOTIFICATION_TYPE_INFO)


def _operation(change: Any) -> str | None:
    operation = getattr(change, "operation", None)
    return operation if isinstance(operation, str) else None


def _record(change: Any) -> Mapping[str, Any]:
    row = getattr(change, "record", None)
    if isinstance(row, Mapping):
        return row
    return {}


def _preview(content: str) -> str:
    if len(content) > FEEDBACK_PREVIEW_LENGTH:
        return content[:FEEDBACK_PREVIEW_LENGTH] + "..."
    return content


__all__ = [
    "DEFAULT_DESCRIPTION",
    "DEFAULT_TITLE",
    "FEEDBACK_PREVIEW_LENGTH",
    "INTERESTING_FIELDS",
    "describe",
    "severity_for",
    "summarize",
]
