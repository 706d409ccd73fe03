"""Department activity log endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from notifyhub.application.notifications import Notifier, notify_department_operation
from notifyhub.domain.entities import DepartmentActivity
from notifyhub.infrastructure.repositories import DepartmentActivityRepository
from notifyhub.interfaces.api.dependencies import get_db, get_notifier
from notifyhub.interfaces.api.schemas import (
    DepartmentActivityRead,
    DepartmentOperationCreate,
    DepartmentOperationResult,
)

router = APIRouter(prefix="/activity", tags=["activity"])


def _activity_to_schema(activity: DepartmentActivity) -> DepartmentActivityRead:
    return DepartmentActivityRead(
        id=activity.id or 0,
        topic=activity.topic,
        operation_type=activity.operation_type,
        table_name=activity.table_name,
        department_name=activity.department_name,
        category_name=activity.category_name,
        record_id=activity.record_id,
        changed_by=activity.changed_by,
        status=activity.status,
        created_at=activity.created_at,
    )


@router.get("/", response_model=list[DepartmentActivityRead])
def list_activity(
    table: str | None = Query(default=None),
    limit: int = Query(default=50, ge=1, le=500),
    db: Session = Depends(get_db),
) -> list[DepartmentActivityRead]:
    """Return the most recent department operations."""

    entries = DepartmentActivityRepository(db).list_recent(table_name=table, limit=limit)
    return [_activity_to_schema(entry) for entry in entries]


@router.post(
    "/{table}",
    response_model=DepartmentOperationResult,
    status_code=status.HTTP_201_CREATED,
)
def record_operation(
    table: str,
    payload: DepartmentOperationCreate,
    db: Session = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
) -> DepartmentOperationResult:
    """Announce an operation performed from a department screen."""

    recorded = notify_department_operation(
        db,
        notifier,
        table_name=table,
        operation_type=payload.operation,
        record=payload.record,
        old_record=payload.old_record,
        user_id=payload.user_id,
    )
    return DepartmentOperationResult(recorded=recorded)
