"""Pydantic models for the department activity log."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


class DepartmentOperationCreate(BaseModel):
    """Operation performed from a department screen."""

    operation: Literal["insert", "update", "delete", "feedback"]
    record: dict[str, Any] | None = None
    old_record: dict[str, Any] | None = None
    user_id: str | None = Field(default=None, description="Actor responsible for the change")


class DepartmentOperationResult(BaseModel):
    recorded: bool


class DepartmentActivityRead(BaseModel):
    """Activity log entry returned to the client."""

    id: int
    topic: str
    operation_type: str
    table_name: str
    department_name: str
    category_name: str
    record_id: str | None = None
    changed_by: str | None = None
    status: str
    created_at: datetime


__all__ = [
    "DepartmentActivityRead",
    "DepartmentOperationCreate",
    "DepartmentOperationResult",
]
