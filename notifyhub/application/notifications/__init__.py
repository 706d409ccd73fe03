"""Notification history, change classification and delivery."""

from .classifier import describe, severity_for, summarize
from .department_activity import (
    build_activity_topic,
    notify_create,
    notify_delete,
    notify_department_operation,
    notify_discussion,
    notify_update,
)
from .monitor import ChangeFeed, ChangeMonitor
from .notify import Notifier, ToastSurface
from .store import DEFAULT_CAPACITY, DEFAULT_STORAGE_KEY, KeyValueStorage, NotificationStore

__all__ = [
    "ChangeFeed",
    "ChangeMonitor",
    "DEFAULT_CAPACITY",
    "DEFAULT_STORAGE_KEY",
    "KeyValueStorage",
    "NotificationStore",
    "Notifier",
    "ToastSurface",
    "build_activity_topic",
    "describe",
    "notify_create",
    "notify_delete",
    "notify_department_operation",
    "notify_discussion",
    "notify_update",
    "severity_for",
    "summarize",
]
