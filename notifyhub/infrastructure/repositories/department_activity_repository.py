"""Persistence helpers for department activity entries."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from notifyhub.domain.entities import DepartmentActivity
from notifyhub.infrastructure.models import DepartmentActivityModel
from notifyhub.utils import ensure_app_timezone, now_in_app_timezone


class DepartmentActivityRepository:
    """Provide CRUD operations for :class:`DepartmentActivity` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, activity: DepartmentActivity) -> DepartmentActivity:
        model = DepartmentActivityModel()
        self._apply_entity_to_model(model, activity)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_recent(
        self,
        *,
        table_name: str | None = None,
        limit: int | None = 50,
    ) -> Sequence[DepartmentActivity]:
        query = self.session.query(DepartmentActivityModel)
        if table_name is not None:
            query = query.filter(DepartmentActivityModel.table_name == table_name)
        query = query.order_by(
            DepartmentActivityModel.created_at.desc(), DepartmentActivityModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _apply_entity_to_model(
        model: DepartmentActivityModel, activity: DepartmentActivity
    ) -> None:
        model.topic = activity.topic
        model.operation_type = activity.operation_type
        model.table_name = activity.table_name
        model.department_name = activity.department_name
        model.category_name = activity.category_name
        model.record_id = activity.record_id
        model.changed_by = activity.changed_by
        model.status = activity.status
        model.created_at = activity.created_at or now_in_app_timezone()

    @staticmethod
    def _to_entity(model: DepartmentActivityModel) -> DepartmentActivity:
        return DepartmentActivity(
            id=model.id,
            topic=model.topic,
            operation_type=model.operation_type,
            table_name=model.table_name,
            department_name=model.department_name,
            category_name=model.category_name,
            record_id=model.record_id,
            changed_by=model.changed_by,
            status=model.status,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["DepartmentActivityRepository"]
