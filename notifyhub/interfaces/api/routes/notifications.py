"""Endpoints and websocket handler for the notification history."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, Response, WebSocket, WebSocketDisconnect, status

from notifyhub.application.notifications import NotificationStore, Notifier
from notifyhub.domain.entities import NotificationRecord
from notifyhub.infrastructure.notifications import schedule, snapshot_message
from notifyhub.interfaces.api.dependencies import get_notifier, get_store
from notifyhub.interfaces.api.schemas import (
    NotificationCreate,
    NotificationCreated,
    NotificationListRead,
    NotificationMarkReadRequest,
    NotificationRead,
    UnreadCountRead,
)
from notifyhub.services import NotificationServices

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _to_schema(records: list[NotificationRecord]) -> list[NotificationRead]:
    return [NotificationRead.from_record(record) for record in records]


@router.get("/", response_model=NotificationListRead)
def list_notifications(store: NotificationStore = Depends(get_store)) -> NotificationListRead:
    """Return every stored notification, newest first."""

    return NotificationListRead(items=_to_schema(store.get()), unread=store.unread_count())


@router.get("/unread-count", response_model=UnreadCountRead)
def unread_count(store: NotificationStore = Depends(get_store)) -> UnreadCountRead:
    return UnreadCountRead(unread=store.unread_count())


@router.get("/database-changes", response_model=list[NotificationRead])
def recent_database_changes(
    limit: int = Query(default=20, ge=0, le=100),
    store: NotificationStore = Depends(get_store),
) -> list[NotificationRead]:
    return _to_schema(store.get_recent_database_changes(limit))


@router.get("/tables/{table}", response_model=list[NotificationRead])
def notifications_by_table(
    table: str, store: NotificationStore = Depends(get_store)
) -> list[NotificationRead]:
    return _to_schema(store.filter_by_table(table))


@router.get("/operations/{operation}", response_model=list[NotificationRead])
def notifications_by_operation(
    operation: str, store: NotificationStore = Depends(get_store)
) -> list[NotificationRead]:
    return _to_schema(store.filter_by_operation(operation))


@router.get("/sources/{source}", response_model=list[NotificationRead])
def notifications_by_source(
    source: str, store: NotificationStore = Depends(get_store)
) -> list[NotificationRead]:
    return _to_schema(store.filter_by_source(source))


@router.post("/", response_model=NotificationCreated, status_code=status.HTTP_201_CREATED)
def create_notification(
    payload: NotificationCreate,
    notifier: Notifier = Depends(get_notifier),
) -> NotificationCreated:
    """Log an application notification, optionally showing it as a toast."""

    if payload.toast:
        notification_id = notifier.open(
            payload.type,
            title=payload.title,
            description=payload.description,
            meta=payload.meta,
        )
    else:
        notification_id = notifier.store.add(
            type=payload.type,
            title=payload.title,
            description=payload.description,
            meta=payload.meta,
        )
    return NotificationCreated(id=notification_id)


@router.post("/read-all", status_code=status.HTTP_204_NO_CONTENT)
def mark_all_read(store: NotificationStore = Depends(get_store)) -> Response:
    store.mark_all_read()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{notification_id}/read", status_code=status.HTTP_204_NO_CONTENT)
def mark_read(
    notification_id: str,
    payload: NotificationMarkReadRequest | None = None,
    store: NotificationStore = Depends(get_store),
) -> Response:
    if store.find(notification_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found"
        )
    store.mark_read(notification_id, payload.read if payload else True)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_notification(
    notification_id: str, store: NotificationStore = Depends(get_store)
) -> Response:
    store.remove(notification_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
def clear_notifications(store: NotificationStore = Depends(get_store)) -> Response:
    store.clear()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Stream store snapshots to a dashboard and apply its read/remove commands."""

    services: NotificationServices = websocket.app.state.services
    connections = services.connections
    store = services.store

    await connections.connect(websocket)
    unsubscribe = store.on_change(
        lambda items, unread: schedule(
            connections.send, websocket, snapshot_message(items, unread)
        )
    )
    try:
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except Exception:
                continue

            if not isinstance(message, dict):
                continue
            _handle_command(websocket, store, message)
            if message.get("type") == "ping":
                await websocket.send_json({"type": "pong"})
    except WebSocketDisconnect:
        pass
    finally:
        unsubscribe()
        connections.disconnect(websocket)


def _handle_command(websocket: WebSocket, store: NotificationStore, message: dict[str, Any]) -> None:
    message_type = message.get("type")
    if message_type == "ack":
        ids = message.get("ids", [])
        if isinstance(ids, list):
            for notification_id in ids:
                store.mark_read(str(notification_id))
    elif message_type == "read_all":
        store.mark_all_read()
    elif message_type == "remove":
        notification_id = message.get("id")
        if notification_id is not None:
            store.remove(str(notification_id))
    elif message_type != "ping":
        logger.debug("Ignoring websocket command %r from %s", message_type, websocket.client)
