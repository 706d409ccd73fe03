"""Realtime notification helpers for the infrastructure layer."""

from .feed import FeedSubscription, LocalChangeFeed
from .manager import NotificationConnectionManager
from .publisher import WebSocketToastSurface, schedule, snapshot_message

__all__ = [
    "FeedSubscription",
    "LocalChangeFeed",
    "NotificationConnectionManager",
    "WebSocketToastSurface",
    "schedule",
    "snapshot_message",
]
