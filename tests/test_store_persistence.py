"""Persistence behaviour of the notification store."""

from __future__ import annotations

import json

import pytest

from notifyhub.application.notifications import NotificationStore
from notifyhub.domain.entities import InsertChange, UpdateChange
from notifyhub.infrastructure.database import build_engine, build_session_factory, initialize_database
from notifyhub.infrastructure.storage import MemoryStorage, SqlKeyValueStorage


class QuotaExceededStorage(MemoryStorage):
    def set_item(self, key: str, value: str) -> None:
        raise OSError("quota exceeded")


@pytest.fixture
def sql_storage():
    engine = build_engine("sqlite:///:memory:")
    initialize_database(engine)
    yield SqlKeyValueStorage(build_session_factory(engine))
    engine.dispose()


def test_every_mutation_writes_the_storage_slot(store, storage):
    notification_id = store.add(type="warning", title="Loan overdue")

    stored = json.loads(storage.get_item("notifications.v2"))
    assert [item["id"] for item in stored] == [notification_id]
    assert set(stored[0]) == {
        "id",
        "type",
        "title",
        "description",
        "meta",
        "createdAt",
        "read",
        "source",
    }

    store.mark_read(notification_id)
    assert json.loads(storage.get_item("notifications.v2"))[0]["read"] is True

    store.clear()
    assert json.loads(storage.get_item("notifications.v2")) == []


def test_reload_restores_identical_state(store, storage, clock):
    store.add(type="success", title="Salary processed", meta={"month": "2024-05"})
    first = store.add(title="KPI submitted")
    store.add_database_change(
        UpdateChange(
            table="bdm_customer_visit",
            record={"id": 4, "customer_name": "Acme Co"},
            old_record={"id": 4, "customer_name": "Acme"},
            user_id="u-1",
        )
    )
    store.mark_read(first)

    restarted = NotificationStore(storage, clock=clock)

    assert restarted.get() == store.get()
    assert restarted.unread_count() == store.unread_count()


def test_storage_is_trimmed_to_capacity(storage, clock):
    store = NotificationStore(storage, clock=clock, capacity=5)
    for index in range(8):
        store.add(title=f"n{index}")

    stored = json.loads(storage.get_item("notifications.v2"))
    assert [item["title"] for item in stored] == ["n3", "n4", "n5", "n6", "n7"]


def test_missing_slot_starts_empty(persistence_errors):
    store = NotificationStore(MemoryStorage(), on_persistence_error=persistence_errors.append)

    assert store.get() == []
    assert persistence_errors == []


@pytest.mark.parametrize(
    "raw",
    ["{not json", '{"id": 1}', '[{"title": "no id"}]', '[{"id": "1", "createdAt": "yesterday"}]'],
)
def test_corrupt_slot_degrades_to_empty_store(raw, persistence_errors):
    storage = MemoryStorage({"notifications.v2": raw})

    store = NotificationStore(storage, on_persistence_error=persistence_errors.append)

    assert store.get() == []
    assert len(persistence_errors) == 1


def test_legacy_browser_timestamps_are_accepted():
    raw = json.dumps(
        [
            {
                "id": "1700000000000_abc123",
                "type": "info",
                "title": "Old",
                "description": None,
                "meta": None,
                "createdAt": "2023-11-14T22:13:20.000Z",
                "read": False,
                "source": "system",
            }
        ]
    )

    store = NotificationStore(MemoryStorage({"notifications.v2": raw}))

    (record,) = store.get()
    assert record.id == "1700000000000_abc123"
    assert record.created_at.year == 2023


def test_write_failures_are_reported_and_the_store_keeps_working(persistence_errors, clock):
    store = NotificationStore(
        QuotaExceededStorage(), clock=clock, on_persistence_error=persistence_errors.append
    )

    notification_id = store.add(title="Still here")
    store.mark_read(notification_id)

    assert [record.id for record in store.get()] == [notification_id]
    assert store.unread_count() == 0
    assert len(persistence_errors) == 2
    assert all(isinstance(error, OSError) for error in persistence_errors)


def test_failing_error_sink_is_contained(clock):
    def explode(exc):
        raise RuntimeError("sink broke")

    store = NotificationStore(QuotaExceededStorage(), clock=clock, on_persistence_error=explode)

    store.add(title="a")

    assert len(store.get()) == 1


def test_custom_storage_key(storage, clock):
    store = NotificationStore(storage, clock=clock, storage_key="hr.notifications")
    store.add(title="a")

    assert storage.get_item("notifications.v2") is None
    assert storage.get_item("hr.notifications") is not None


def test_sql_storage_round_trip(sql_storage):
    assert sql_storage.get_item("notifications.v2") is None

    sql_storage.set_item("notifications.v2", "[]")
    sql_storage.set_item("notifications.v2", '["updated"]')
    assert sql_storage.get_item("notifications.v2") == '["updated"]'

    sql_storage.remove_item("notifications.v2")
    sql_storage.remove_item("notifications.v2")
    assert sql_storage.get_item("notifications.v2") is None


def test_store_survives_restart_on_sql_storage(sql_storage, clock):
    store = NotificationStore(sql_storage, clock=clock)
    store.add_database_change(
        InsertChange(table="bdm_customer_visit", record={"customer_name": "Acme Co"})
    )

    restarted = NotificationStore(sql_storage, clock=clock)

    (record,) = restarted.get()
    assert record.title == "New Customer Visit"
    assert record.description == "Acme Co"
    assert record.source == "database"
