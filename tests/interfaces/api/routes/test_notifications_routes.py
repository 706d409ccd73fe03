"""Integration tests for the notification, change feed and activity endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from notifyhub.config import Settings
from notifyhub.infrastructure.storage import MemoryStorage
from notifyhub.main import create_app


@pytest.fixture()
def client():
    """Return a test client bound to a clean application instance."""

    settings = Settings(
        database_url="sqlite:///:memory:",
        monitored_tables=["bdm_customer_visit", "scmt_others"],
    )
    app = create_app(settings, storage=MemoryStorage())
    with TestClient(app) as test_client:
        yield test_client


def test_notification_lifecycle(client: TestClient) -> None:
    """Create, read, mark and remove notifications over HTTP."""

    response = client.post(
        "/notifications/", json={"type": "success", "title": "Leave approved"}
    )
    assert response.status_code == 201
    notification_id = response.json()["id"]

    listing = client.get("/notifications/").json()
    assert listing["unread"] == 1
    (item,) = listing["items"]
    assert item["id"] == notification_id
    assert item["title"] == "Leave approved"
    assert item["source"] == "system"
    assert "createdAt" in item

    assert client.post(f"/notifications/{notification_id}/read").status_code == 204
    assert client.get("/notifications/unread-count").json() == {"unread": 0}

    response = client.post(f"/notifications/{notification_id}/read", json={"read": False})
    assert response.status_code == 204
    assert client.get("/notifications/unread-count").json() == {"unread": 1}

    assert client.delete(f"/notifications/{notification_id}").status_code == 204
    assert client.delete(f"/notifications/{notification_id}").status_code == 204
    assert client.get("/notifications/").json() == {"items": [], "unread": 0}


def test_mark_read_unknown_notification_returns_404(client: TestClient) -> None:
    response = client.post("/notifications/missing/read")

    assert response.status_code == 404


def test_create_notification_validates_payload(client: TestClient) -> None:
    assert client.post("/notifications/", json={"title": ""}).status_code == 422
    assert client.post("/notifications/", json={"type": "fatal", "title": "x"}).status_code == 422


def test_read_all_and_clear(client: TestClient) -> None:
    for title in ("a", "b", "c"):
        client.post("/notifications/", json={"title": title, "toast": False})

    assert client.post("/notifications/read-all").status_code == 204
    assert client.get("/notifications/unread-count").json() == {"unread": 0}

    assert client.delete("/notifications/").status_code == 204
    assert client.get("/notifications/").json()["items"] == []


def test_change_feed_ingress_reaches_the_store(client: TestClient) -> None:
    assert client.get("/changes/tables").json() == [
        "bdm_customer_visit",
        "bdm_customer_visit_fb",
        "scmt_others",
        "scmt_others_fb",
    ]

    response = client.post(
        "/changes/bdm_customer_visit",
        json={"eventType": "INSERT", "new": {"id": 1, "customer_name": "Acme Co"}},
    )
    assert response.status_code == 202
    assert response.json() == {"table": "bdm_customer_visit", "delivered": 1}

    response = client.post(
        "/changes/scmt_others_fb", json={"new": {"content": "Shipment delayed"}}
    )
    assert response.json()["delivered"] == 1

    ignored = client.post("/changes/payroll", json={"eventType": "DELETE", "old": {"id": 1}})
    assert ignored.json()["delivered"] == 0

    changes = client.get("/notifications/database-changes").json()
    assert [item["title"] for item in changes] == ["New Feedback", "New Customer Visit"]
    assert changes[1]["description"] == "Acme Co"

    by_table = client.get("/notifications/tables/scmt_others").json()
    assert [item["meta"]["operation"] for item in by_table] == ["feedback"]
    by_operation = client.get("/notifications/operations/insert").json()
    assert [item["meta"]["table"] for item in by_operation] == ["bdm_customer_visit"]
    assert client.get("/notifications/sources/system").json() == []


def test_websocket_streams_snapshots(client: TestClient) -> None:
    client.post("/notifications/", json={"title": "Payslip ready", "toast": False})

    with client.websocket_connect("/notifications/ws") as websocket:
        snapshot = websocket.receive_json()
        assert snapshot["type"] == "snapshot"
        assert snapshot["data"]["unread"] == 1
        assert [item["title"] for item in snapshot["data"]["items"]] == ["Payslip ready"]

        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}

        websocket.send_json({"type": "read_all"})
        update = websocket.receive_json()
        assert update["type"] == "snapshot"
        assert update["data"]["unread"] == 0

        notification_id = update["data"]["items"][0]["id"]
        websocket.send_json({"type": "remove", "id": notification_id})
        assert websocket.receive_json()["data"]["items"] == []

    assert client.get("/notifications/").json()["items"] == []


def test_http_changes_are_pushed_to_open_websockets(client: TestClient) -> None:
    with client.websocket_connect("/notifications/ws") as websocket:
        initial = websocket.receive_json()
        assert initial["data"] == {"items": [], "unread": 0}

        response = client.post(
            "/notifications/", json={"type": "success", "title": "Leave approved"}
        )
        assert response.status_code == 201

        toast = websocket.receive_json()
        assert toast["type"] == "toast"
        assert toast["data"]["level"] == "success"
        assert toast["data"]["message"] == "Leave approved"
        assert toast["data"]["duration"] == 3
        assert toast["data"]["placement"] == "topRight"

        snapshot = websocket.receive_json()
        assert snapshot["type"] == "snapshot"
        assert snapshot["data"]["unread"] == 1
        assert snapshot["data"]["items"][0]["id"] == response.json()["id"]

        client.post("/notifications/read-all")
        assert websocket.receive_json()["data"]["unread"] == 0


def test_change_ingress_is_pushed_to_open_websockets(client: TestClient) -> None:
    with client.websocket_connect("/notifications/ws") as websocket:
        websocket.receive_json()

        client.post(
            "/changes/bdm_customer_visit",
            json={"eventType": "DELETE", "old": {"id": 3, "customer_name": "Acme Co"}},
        )

        toast = websocket.receive_json()
        assert toast["data"]["level"] == "warning"
        assert toast["data"]["message"] == "Customer Visit Deleted"
        assert toast["data"]["description"] == "Record has been removed"
        assert toast["data"]["duration"] == 4

        (item,) = websocket.receive_json()["data"]["items"]
        assert item["source"] == "database"
        assert item["meta"]["record"] == {"id": 3, "customer_name": "Acme Co"}


def test_department_activity_endpoints(client: TestClient) -> None:
    response = client.post(
        "/activity/bdm_customer_visit",
        json={
            "operation": "insert",
            "record": {"id": 5, "customer_name": "Acme Co"},
            "user_id": "bdm-2",
        },
    )
    assert response.status_code == 201
    assert response.json() == {"recorded": True}

    (entry,) = client.get("/activity/").json()
    assert entry["topic"] == "New Customer Visits created in BDM Department: Acme Co"
    assert entry["record_id"] == "5"
    assert entry["changed_by"] == "bdm-2"

    (notification,) = client.get("/notifications/").json()["items"]
    assert notification["title"] == "New Customer Visit"
    assert client.get("/activity/", params={"table": "messages"}).json() == []
