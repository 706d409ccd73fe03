"""Helpers used by business screens to announce department operations."""

from __future__ import annotations

import logging
from typing import Any, Final, Mapping

from sqlalchemy.orm import Session

from notifyhub.application.notifications.notify import Notifier
from notifyhub.domain.catalog import describe_table
from notifyhub.domain.entities import (
    OPERATION_DELETE,
    OPERATION_FEEDBACK,
    OPERATION_INSERT,
    OPERATION_UPDATE,
    DepartmentActivity,
    build_change,
)
from notifyhub.infrastructure.repositories import DepartmentActivityRepository
from notifyhub.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

RECORD_NAME_FIELDS: Final[tuple[str, ...]] = ("meeting", "customer_name", "company", "type")


def build_activity_topic(
    operation_type: str,
    *,
    category: str,
    department_name: str,
    record: Mapping[str, Any] | None,
) -> str:
    """Return the sentence stored in the activity log for an operation."""

    if operation_type == OPERATION_INSERT:
        topic = f"New {category} created in {department_name}"
    elif operation_type == OPERATION_UPDATE:
        topic = f"{category} updated in {department_name}"
    elif operation_type == OPERATION_DELETE:
        topic = f"{category} deleted from {department_name}"
    elif operation_type == OPERATION_FEEDBACK:
        topic = f"New discussion in {category} - {department_name}"
    else:
        topic = f"Activity in {category} - {department_name}"

    if record:
        name = next(
            (record[field] for field in RECORD_NAME_FIELDS if record.get(field)), "Record"
        )
        topic += f": {name}"
    return topic


def notify_department_operation(
    session: Session,
    notifier: Notifier,
    *,
    table_name: str,
    operation_type: str,
    record: Mapping[str, Any] | None,
    old_record: Mapping[str, Any] | None = None,
    user_id: Any = None,
) -> bool:
    """Announce an operation through the notifier and write it to the activity log.

    Returns ``False`` when anything goes wrong; the failure is logged and the
    calling screen carries on.
    """

    try:
        labels = describe_table(table_name)
        change = build_change(
            table_name,
            operation_type,
            record=dict(record or {}),
            old_record=dict(old_record or {}),
            user_id=user_id,
            labels=labels,
        )
        notifier.database_change(change)

        record_id = (record or {}).get("id")
        DepartmentActivityRepository(session).create(
            DepartmentActivity(
                id=None,
                topic=build_activity_topic(
                    operation_type,
                    category=labels.category,
                    department_name=labels.department_name,
                    record=record,
                ),
                operation_type=operation_type,
                table_name=table_name,
                department_name=labels.department_name,
                category_name=labels.category,
                record_id=str(record_id) if record_id is not None else None,
                changed_by=str(user_id) if user_id is not None else None,
                created_at=now_in_app_timezone(),
            )
        )
    except Exception:
        session.rollback()
        logger.exception(
            "Error recording %s operation on %s", operation_type, table_name
        )
        return False
    return True


def notify_create(
    session: Session, notifier: Notifier, table_name: str, record: Mapping[str, Any], **extra: Any
) -> bool:
    return notify_department_operation(
        session, notifier, table_name=table_name, operation_type=OPERATION_INSERT, record=record, **extra
    )


def notify_update(
    session: Session,
    notifier: Notifier,
    table_name: str,
    record: Mapping[str, Any],
    old_record: Mapping[str, Any] | None = None,
    **extra: Any,
) -> bool:
    return notify_department_operation(
        session,
        notifier,
        table_name=table_name,
        operation_type=OPERATION_UPDATE,
        record=record,
        old_record=old_record,
        **extra,
    )


def notify_delete(
    session: Session, notifier: Notifier, table_name: str, record: Mapping[str, Any], **extra: Any
) -> bool:
    return notify_department_operation(
        session, notifier, table_name=table_name, operation_type=OPERATION_DELETE, record=record, **extra
    )


def notify_discussion(
    session: Session, notifier: Notifier, table_name: str, record: Mapping[str, Any], **extra: Any
) -> bool:
    return notify_department_operation(
        session, notifier, table_name=table_name, operation_type=OPERATION_FEEDBACK, record=record, **extra
    )


__all__ = [
    "build_activity_topic",
    "notify_create",
    "notify_delete",
    "notify_department_operation",
    "notify_discussion",
    "notify_update",
]
