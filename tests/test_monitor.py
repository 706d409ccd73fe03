"""Tests for the change monitor and the in-process feed."""

from __future__ import annotations

import pytest

from notifyhub.application.notifications import ChangeMonitor
from notifyhub.infrastructure.notifications import LocalChangeFeed


@pytest.fixture
def feed():
    return LocalChangeFeed()


@pytest.fixture
def monitor(feed, notifier):
    monitor = ChangeMonitor(feed, notifier)
    monitor.start(["bdm_customer_visit", "scmt_others"])
    yield monitor
    monitor.stop()


def test_start_subscribes_tables_and_feedback_tables(feed, monitor):
    assert monitor.is_running
    assert feed.subscribed_tables() == [
        "bdm_customer_visit",
        "bdm_customer_visit_fb",
        "scmt_others",
        "scmt_others_fb",
    ]


def test_start_is_idempotent(feed, monitor):
    monitor.start(["messages"])

    assert "messages" not in feed.subscribed_tables()


def test_start_defaults_to_catalog_tables(notifier):
    feed = LocalChangeFeed()
    monitor = ChangeMonitor(feed, notifier)

    monitor.start()

    assert len(feed.subscribed_tables()) == 22
    monitor.stop()
    assert feed.subscribed_tables() == []


def test_start_with_no_tables_watches_nothing(notifier):
    feed = LocalChangeFeed()
    monitor = ChangeMonitor(feed, notifier)

    monitor.start([])

    assert feed.subscribed_tables() == []
    assert monitor.is_running is False


def test_insert_payload(feed, monitor, store, toasts):
    delivered = feed.publish(
        "bdm_customer_visit",
        {"eventType": "INSERT", "new": {"id": 1, "customer_name": "Acme Co", "responsible_bdm": "bdm-3"}, "old": None},
    )

    assert delivered == 1
    (record,) = store.get()
    assert record.title == "New Customer Visit"
    assert record.description == "Acme Co"
    assert record.source == "database"
    assert record.read is False
    assert record.meta["userId"] == "bdm-3"
    assert record.meta["department"] == "bdm"
    assert record.meta["departmentName"] == "BDM Department"
    assert record.meta["category"] == "Customer Visits"
    assert toasts.levels == ["success"]


def test_update_payload_keeps_old_row(feed, monitor, store):
    feed.publish(
        "scmt_others",
        {
            "eventType": "UPDATE",
            "new": {"id": 5, "company": "Globex", "user_id": "u-9"},
            "old": {"id": 5, "company": "Initech"},
        },
    )

    (record,) = store.get()
    assert record.meta["operation"] == "update"
    assert record.meta["oldRecord"] == {"id": 5, "company": "Initech"}
    assert record.meta["userId"] == "u-9"
    assert record.title == "Other Activity Updated"


def test_delete_payload_uses_old_row(feed, monitor, store):
    feed.publish(
        "bdm_customer_visit",
        {"eventType": "DELETE", "new": {}, "old": {"id": 7, "company": "Acme"}},
    )

    (record,) = store.get()
    assert record.title == "Customer Visit Deleted"
    assert record.type == "info"
    assert record.description == "Record has been removed"
    assert record.meta["record"] == {"id": 7, "company": "Acme"}
    assert record.meta["recordId"] == 7
    assert record.meta["userId"] is None


def test_unrecognized_event_type_is_treated_as_insert(monitor, store):
    monitor.handle_table_change("bdm_customer_visit", {"eventType": "UPSERT", "new": None})

    (record,) = store.get()
    assert record.meta["operation"] == "insert"
    assert record.description == "New record added"


def test_feedback_payload(feed, monitor, store):
    feed.publish(
        "bdm_customer_visit_fb",
        {"new": {"id": 2, "content": "Customer asked for a follow-up visit", "sender_id": "s-1"}},
    )

    (record,) = store.get()
    assert record.title == "New Feedback"
    assert record.description == "Customer asked for a follow-up visit"
    assert record.meta["table"] == "bdm_customer_visit"
    assert record.meta["operation"] == "feedback"
    assert record.meta["userId"] == "s-1"


def test_feedback_table_routed_through_table_handler(monitor, store):
    monitor.handle_table_change("scmt_others_fb", {"eventType": "INSERT", "new": {"content": "ok"}})

    (record,) = store.get()
    assert record.meta["operation"] == "feedback"
    assert record.meta["table"] == "scmt_others"


def test_stop_releases_subscriptions(feed, monitor, store):
    monitor.stop()
    monitor.stop()

    assert feed.publish("bdm_customer_visit", {"eventType": "INSERT", "new": {}}) == 0
    assert store.get() == []


def test_feed_isolates_failing_callbacks():
    feed = LocalChangeFeed()
    received = []

    def broken(table, payload):
        raise RuntimeError("boom")

    feed.subscribe("messages", broken)
    feed.subscribe("messages", lambda table, payload: received.append(payload))

    assert feed.publish("messages", {"eventType": "INSERT"}) == 1
    assert received == [{"eventType": "INSERT"}]
