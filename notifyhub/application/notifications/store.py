"""Process-wide notification history with persistence and change broadcasting.

The store keeps records in insertion order, trims them to a fixed capacity on
every write and publishes a freshly sorted snapshot to every subscriber after
each mutation. Nothing in here raises to the caller: storage problems are
reported through ``on_persistence_error`` and the store keeps working from
memory.
"""

from __future__ import annotations

import copy
import itertools
import logging
import threading
import uuid
from datetime import datetime
from typing import Any, Callable, Final, Protocol

from notifyhub.application.notifications.classifier import describe, summarize
from notifyhub.domain.entities import (
    NOTIFICATION_TYPE_INFO,
    NOTIFICATION_TYPES,
    OPERATION_UPDATE,
    SOURCE_DATABASE,
    SOURCE_SYSTEM,
    ChangeEvent,
    NotificationRecord,
)
from notifyhub.domain.serialization import dump_records, load_records
from notifyhub.utils import ensure_app_timezone, epoch_millis, now_in_app_timezone

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY: Final[str] = "notifications.v2"
DEFAULT_CAPACITY: Final[int] = 100
DEFAULT_RECENT_LIMIT: Final[int] = 20
FALLBACK_TITLE: Final[str] = "Notification"

Subscriber = Callable[[list[NotificationRecord], int], None]
Unsubscribe = Callable[[], None]
Clock = Callable[[], datetime]
IdFactory = Callable[[datetime], str]
ErrorSink = Callable[[Exception], None]


class KeyValueStorage(Protocol):
    """Minimal ``localStorage`` style slot the history is persisted to."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


def generate_notification_id(created_at: datetime) -> str:
    """Return ``<epoch millis>_<random hex>`` for a record created at ``created_at``."""

    return f"{epoch_millis(created_at)}_{uuid.uuid4().hex}"


def _log_persistence_error(exc: Exception) -> None:
    logger.warning("Notification storage unavailable, keeping changes in memory: %s", exc)


class NotificationStore:
    """Authoritative list of notifications shared by every UI subscriber."""

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        clock: Clock | None = None,
        capacity: int = DEFAULT_CAPACITY,
        storage_key: str = DEFAULT_STORAGE_KEY,
        on_persistence_error: ErrorSink | None = None,
        id_factory: IdFactory | None = None,
    ) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be a positive integer")
        self._storage = storage
        self._clock = clock or now_in_app_timezone
        self._capacity = capacity
        self._storage_key = storage_key
        self._on_persistence_error = on_persistence_error or _log_persistence_error
        self._id_factory = id_factory or generate_notification_id
        self._records: list[NotificationRecord] = []
        self._subscribers: dict[int, Subscriber] = {}
        self._tokens = itertools.count()
        self._lock = threading.RLock()
        self.load()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def storage_key(self) -> str:
        return self._storage_key

    def load(self) -> None:
        """Replace the in-memory list with the content of the storage slot."""

        with self._lock:
            try:
                records = load_records(self._storage.get_item(self._storage_key))
            except Exception as exc:
                self._report(exc)
                records = []
            self._records = records[-self._capacity :]
            self._publish()

    # Queries -----------------------------------------------------------

    def get(self) -> list[NotificationRecord]:
        """Return a detached copy of every record, newest first."""

        with self._lock:
            return [copy.deepcopy(record) for record in self._sorted()]

    def find(self, notification_id: str) -> NotificationRecord | None:
        with self._lock:
            record = self._find(notification_id)
            return copy.deepcopy(record) if record is not None else None

    def unread_count(self) -> int:
        with self._lock:
            return sum(1 for record in self._records if not record.read)

    def filter_by_table(self, table: str) -> list[NotificationRecord]:
        return self._select(lambda record: record.table == table)

    def filter_by_operation(self, operation: str) -> list[NotificationRecord]:
        return self._select(lambda record: record.operation == operation)

    def filter_by_source(self, source: str) -> list[NotificationRecord]:
        return self._select(lambda record: record.source == source)

    def get_recent_database_changes(
        self, limit: int = DEFAULT_RECENT_LIMIT
    ) -> list[NotificationRecord]:
        """Return at most ``limit`` database-sourced records, newest first."""

        return self.filter_by_source(SOURCE_DATABASE)[: max(limit, 0)]

    # Mutations ---------------------------------------------------------

    def add(
        self,
        *,
        type: str = NOTIFICATION_TYPE_INFO,
        title: str | None = None,
        description: str | None = None,
        meta: dict[str, Any] | None = None,
    ) -> str:
        """Insert an application notification and return its id."""

        created_at = self._now()
        record = NotificationRecord(
            id=self._id_factory(created_at),
            type=type if type in NOTIFICATION_TYPES else NOTIFICATION_TYPE_INFO,
            title=str(title) if title else FALLBACK_TITLE,
            description=description or None,
            meta=copy.deepcopy(meta) if meta else None,
            created_at=created_at,
            read=False,
            source=SOURCE_SYSTEM,
        )
        return self._insert(record)

    def add_database_change(self, change: ChangeEvent) -> str:
        """Insert a record describing a backend row change and return its id."""

        created_at = self._now()
        record = NotificationRecord(
            id=self._id_factory(created_at),
            type=NOTIFICATION_TYPE_INFO,
            title=summarize(change),
            description=describe(change),
            meta=_change_meta(change, created_at),
            created_at=created_at,
            read=False,
            source=SOURCE_DATABASE,
        )
        return self._insert(record)

    def mark_read(self, notification_id: str, read: bool = True) -> None:
        """Set the read flag of ``notification_id``; unknown ids are ignored."""

        with self._lock:
            record = self._find(notification_id)
            if record is None:
                return
            record.read = bool(read)
            self._commit()

    def mark_all_read(self) -> None:
        with self._lock:
            for record in self._records:
                record.read = True
            self._commit()

    def remove(self, notification_id: str) -> None:
        with self._lock:
            self._records = [
                record for record in self._records if record.id != notification_id
            ]
            self._commit()

    def clear(self) -> None:
        with self._lock:
            self._records = []
            self._commit()

    # Subscriptions -----------------------------------------------------

    def on_change(self, callback: Subscriber) -> Unsubscribe:
        """Register ``callback`` and call it right away with the current state.

        The returned function detaches this registration only; calling it more
        than once is harmless.
        """

        with self._lock:
            token = next(self._tokens)
            self._subscribers[token] = callback
            self._deliver(callback, self.get(), self.unread_count())

        def unsubscribe() -> None:
            with self._lock:
                self._subscribers.pop(token, None)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    # Internals ---------------------------------------------------------

    def _now(self) -> datetime:
        return ensure_app_timezone(self._clock())

    def _insert(self, record: NotificationRecord) -> str:
        with self._lock:
            self._records.append(record)
            self._commit()
        return record.id

    def _commit(self) -> None:
        self._save()
        self._publish()

    def _save(self) -> None:
        if len(self._records) > self._capacity:
            self._records = self._records[-self._capacity :]
        try:
            self._storage.set_item(self._storage_key, dump_records(self._records))
        except Exception as exc:
            self._report(exc)

    def _publish(self) -> None:
        subscribers = list(self._subscribers.values())
        if not subscribers:
            return
        unread = self.unread_count()
        for callback in subscribers:
            self._deliver(callback, self.get(), unread)

    @staticmethod
    def _deliver(
        callback: Subscriber, snapshot: list[NotificationRecord], unread: int
    ) -> None:
        try:
            callback(snapshot, unread)
        except Exception:
            logger.exception("Notification subscriber %r failed", callback)

    def _report(self, exc: Exception) -> None:
        try:
            self._on_persistence_error(exc)
        except Exception:
            logger.exception("Persistence error handler failed")

    def _find(self, notification_id: str) -> NotificationRecord | None:
        for record in self._records:
            if record.id == notification_id:
                return record
        return None

    def _sorted(self) -> list[NotificationRecord]:
        return sorted(self._records, key=lambda record: record.created_at, reverse=True)

    def _select(
        self, predicate: Callable[[NotificationRecord], bool]
    ) -> list[NotificationRecord]:
        with self._lock:
            return [copy.deepcopy(record) for record in self._sorted() if predicate(record)]


def _change_meta(change: ChangeEvent, created_at: datetime) -> dict[str, Any]:
    operation = getattr(change, "operation", None)
    old_record = getattr(change, "old_record", None)
    meta: dict[str, Any] = {
        "table": getattr(change, "table", None),
        "operation": operation,
        "recordId": getattr(change, "record_id", None),
        "userId": getattr(change, "user_id", None),
        "timestamp": created_at.isoformat(),
        "record": copy.deepcopy(getattr(change, "subject", None)),
        "oldRecord": copy.deepcopy(old_record) if operation == OPERATION_UPDATE else None,
    }
    labels = getattr(change, "labels", None)
    if labels is not None:
        meta["department"] = labels.department
        meta["departmentName"] = labels.department_name
        meta["category"] = labels.category
    return meta


__all__ = [
    "DEFAULT_CAPACITY",
    "DEFAULT_STORAGE_KEY",
    "KeyValueStorage",
    "NotificationStore",
    "Subscriber",
    "Unsubscribe",
    "generate_notification_id",
]
