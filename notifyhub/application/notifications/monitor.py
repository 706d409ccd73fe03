"""Bridge between the realtime change feed and the notification facade."""

from __future__ import annotations

import logging
from typing import Any, Callable, Final, Iterable, Mapping, Protocol

from notifyhub.application.notifications.notify import Notifier
from notifyhub.domain.catalog import (
    FEEDBACK_SUFFIX,
    base_table,
    describe_table,
    is_feedback_table,
    monitored_tables,
)
from notifyhub.domain.entities import (
    OPERATION_DELETE,
    OPERATION_FEEDBACK,
    OPERATION_INSERT,
    OPERATION_UPDATE,
    ChangeEvent,
    build_change,
)

logger = logging.getLogger(__name__)

EVENT_TYPE_OPERATIONS: Final[dict[str, str]] = {
    "INSERT": OPERATION_INSERT,
    "UPDATE": OPERATION_UPDATE,
    "DELETE": OPERATION_DELETE,
}

TABLE_USER_FIELDS: Final[tuple[str, ...]] = ("responsible_bdm", "user_id")
FEEDBACK_USER_FIELDS: Final[tuple[str, ...]] = ("sender_id", "user_id")


class Subscription(Protocol):
    def unsubscribe(self) -> None: ...


class ChangeFeed(Protocol):
    """Realtime subscription API delivering ``(table, payload)`` pairs."""

    def subscribe(
        self, table: str, callback: Callable[[str, dict[str, Any]], None]
    ) -> Subscription: ...


class ChangeMonitor:
    """Turn raw feed payloads into change events for the notifier."""

    def __init__(self, feed: ChangeFeed, notifier: Notifier) -> None:
        self._feed = feed
        self._notifier = notifier
        self._subscriptions: list[Subscription] = []

    @property
    def is_running(self) -> bool:
        return bool(self._subscriptions)

    def start(self, tables: Iterable[str] | None = None) -> None:
        """Subscribe to ``tables`` and to their feedback counterparts."""

        if self._subscriptions:
            return
        watched = list(tables) if tables is not None else monitored_tables()
        for table in watched:
            self._subscriptions.append(
                self._feed.subscribe(table, self.handle_table_change)
            )
            self._subscriptions.append(
                self._feed.subscribe(f"{table}{FEEDBACK_SUFFIX}", self.handle_feedback_change)
            )
        logger.info("Change monitor watching %d tables", len(watched))

    def stop(self) -> None:
        subscriptions, self._subscriptions = self._subscriptions, []
        for subscription in subscriptions:
            subscription.unsubscribe()

    def handle_table_change(self, table: str, payload: Mapping[str, Any]) -> str:
        """Forward an insert/update/delete payload; returns the stored record id."""

        if is_feedback_table(table):
            return self.handle_feedback_change(table, payload)

        event_type = str(payload.get("eventType") or "").upper()
        operation = EVENT_TYPE_OPERATIONS.get(event_type, OPERATION_INSERT)
        new_row = _row(payload.get("new"))
        change = build_change(
            table,
            operation,
            record=new_row,
            old_record=_row(payload.get("old")),
            user_id=_first_present(new_row, TABLE_USER_FIELDS),
            labels=describe_table(table),
        )
        return self._dispatch(change)

    def handle_feedback_change(self, table: str, payload: Mapping[str, Any]) -> str:
        """Forward a payload from a ``*_fb`` table as feedback on its base table."""

        table = base_table(table)
        new_row = _row(payload.get("new"))
        change = build_change(
            table,
            OPERATION_FEEDBACK,
            record=new_row,
            user_id=_first_present(new_row, FEEDBACK_USER_FIELDS),
            labels=describe_table(table),
        )
        return self._dispatch(change)

    def _dispatch(self, change: ChangeEvent) -> str:
        logger.debug("Forwarding %s change on %s", change.operation, change.table)
        return self._notifier.database_change(change)


def _row(value: Any) -> dict[str, Any]:
    return dict(value) if isinstance(value, Mapping) else {}


def _first_present(row: Mapping[str, Any], fields: Iterable[str]) -> Any:
    for field_name in fields:
        value = row.get(field_name)
        if value:
            return value
    return None


__all__ = ["ChangeFeed", "ChangeMonitor", "EVENT_TYPE_OPERATIONS"]
