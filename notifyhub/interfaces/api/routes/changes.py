"""Ingress for backend row change webhooks."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from notifyhub.application.notifications import ChangeMonitor
from notifyhub.infrastructure.notifications import LocalChangeFeed
from notifyhub.interfaces.api.dependencies import get_feed, get_monitor
from notifyhub.interfaces.api.schemas import ChangeAccepted, ChangePayload

router = APIRouter(prefix="/changes", tags=["changes"])


@router.post("/{table}", response_model=ChangeAccepted, status_code=status.HTTP_202_ACCEPTED)
def publish_change(
    table: str,
    payload: ChangePayload,
    feed: LocalChangeFeed = Depends(get_feed),
) -> ChangeAccepted:
    """Publish a row change to whoever watches ``table``.

    Tables nobody watches are accepted and dropped (``delivered`` is ``0``).
    """

    delivered = feed.publish(table, payload.to_feed_payload())
    return ChangeAccepted(table=table, delivered=delivered)


@router.get("/tables", response_model=list[str])
def watched_tables(
    feed: LocalChangeFeed = Depends(get_feed),
    monitor: ChangeMonitor = Depends(get_monitor),
) -> list[str]:
    """Return every table currently observed by the change monitor."""

    if not monitor.is_running:
        return []
    return feed.subscribed_tables()
