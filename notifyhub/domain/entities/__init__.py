"""Domain entities exposed by the application."""

from .change_event import (
    OPERATION_DELETE,
    OPERATION_FEEDBACK,
    OPERATION_INSERT,
    OPERATION_UPDATE,
    OPERATIONS,
    ChangeEvent,
    DeleteChange,
    FeedbackChange,
    InsertChange,
    TableLabels,
    UpdateChange,
    build_change,
)
from .department_activity import ACTIVITY_STATUS_ACTIVE, DepartmentActivity
from .notification import (
    NOTIFICATION_TYPE_ERROR,
    NOTIFICATION_TYPE_INFO,
    NOTIFICATION_TYPE_SUCCESS,
    NOTIFICATION_TYPE_WARNING,
    NOTIFICATION_TYPES,
    SOURCE_DATABASE,
    SOURCE_SYSTEM,
    NotificationRecord,
)

__all__ = [
    "ACTIVITY_STATUS_ACTIVE",
    "ChangeEvent",
    "DeleteChange",
    "DepartmentActivity",
    "FeedbackChange",
    "InsertChange",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_TYPE_ERROR",
    "NOTIFICATION_TYPE_INFO",
    "NOTIFICATION_TYPE_SUCCESS",
    "NOTIFICATION_TYPE_WARNING",
    "NotificationRecord",
    "OPERATIONS",
    "OPERATION_DELETE",
    "OPERATION_FEEDBACK",
    "OPERATION_INSERT",
    "OPERATION_UPDATE",
    "SOURCE_DATABASE",
    "SOURCE_SYSTEM",
    "TableLabels",
    "UpdateChange",
    "build_change",
]
