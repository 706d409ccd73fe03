"""Domain entity describing an operation logged against a department."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

ACTIVITY_STATUS_ACTIVE = "active"


@dataclass
class DepartmentActivity:
    """Human readable audit entry written for each department operation."""

    id: int | None
    topic: str
    operation_type: str
    table_name: str
    department_name: str
    category_name: str
    record_id: str | None = None
    changed_by: str | None = None
    status: str = ACTIVITY_STATUS_ACTIVE
    created_at: datetime | None = None


__all__ = ["ACTIVITY_STATUS_ACTIVE", "DepartmentActivity"]
