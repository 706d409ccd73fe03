from .activity import (
    DepartmentActivityRead,
    DepartmentOperationCreate,
    DepartmentOperationResult,
)
from .change import ChangeAccepted, ChangePayload
from .notification import (
    NotificationCreate,
    NotificationCreated,
    NotificationListRead,
    NotificationMarkReadRequest,
    NotificationRead,
    UnreadCountRead,
)

__all__ = [
    "ChangeAccepted",
    "ChangePayload",
    "DepartmentActivityRead",
    "DepartmentOperationCreate",
    "DepartmentOperationResult",
    "NotificationCreate",
    "NotificationCreated",
    "NotificationListRead",
    "NotificationMarkReadRequest",
    "NotificationRead",
    "UnreadCountRead",
]
