"""Row-level change events produced by the backend change feed."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Final, Union

OPERATION_INSERT: Final[str] = "insert"
OPERATION_UPDATE: Final[str] = "update"
OPERATION_DELETE: Final[str] = "delete"
OPERATION_FEEDBACK: Final[str] = "feedback"

OPERATIONS: Final[tuple[str, ...]] = (
    OPERATION_INSERT,
    OPERATION_UPDATE,
    OPERATION_DELETE,
    OPERATION_FEEDBACK,
)


@dataclass(frozen=True)
class TableLabels:
    """Catalog labels resolved for the table a change belongs to."""

    department: str
    department_name: str
    category: str


@dataclass(frozen=True)
class InsertChange:
    """A row was created."""

    operation: ClassVar[str] = OPERATION_INSERT

    table: str
    record: dict[str, Any] = field(default_factory=dict)
    user_id: Any = None
    labels: TableLabels | None = None

    @property
    def subject(self) -> dict[str, Any]:
        return self.record

    @property
    def record_id(self) -> Any:
        return self.record.get("id")


@dataclass(frozen=True)
class UpdateChange:
    """A row was modified; ``old_record`` holds the previous values."""

    operation: ClassVar[str] = OPERATION_UPDATE

    table: str
    record: dict[str, Any] = field(default_factory=dict)
    old_record: dict[str, Any] = field(default_factory=dict)
    user_id: Any = None
    labels: TableLabels | None = None

    @property
    def subject(self) -> dict[str, Any]:
        return self.record

    @property
    def record_id(self) -> Any:
        return self.record.get("id") or self.old_record.get("id")


@dataclass(frozen=True)
class DeleteChange:
    """A row was removed; only its last known values remain."""

    operation: ClassVar[str] = OPERATION_DELETE

    table: str
    old_record: dict[str, Any] = field(default_factory=dict)
    user_id: Any = None
    labels: TableLabels | None = None

    @property
    def subject(self) -> dict[str, Any]:
        return self.old_record

    @property
    def record_id(self) -> Any:
        return self.old_record.get("id")


@dataclass(frozen=True)
class FeedbackChange:
    """A feedback entry was posted against a row of ``table``."""

    operation: ClassVar[str] = OPERATION_FEEDBACK

    table: str
    record: dict[str, Any] = field(default_factory=dict)
    user_id: Any = None
    labels: TableLabels | None = None

    @property
    def subject(self) -> dict[str, Any]:
        return self.record

    @property
    def record_id(self) -> Any:
        return self.record.get("id")


ChangeEvent = Union[InsertChange, UpdateChange, DeleteChange, FeedbackChange]


def build_change(
    table: str,
    operation: str,
    *,
    record: dict[str, Any] | None = None,
    old_record: dict[str, Any] | None = None,
    user_id: Any = None,
    labels: TableLabels | None = None,
) -> ChangeEvent:
    """Return the variant matching ``operation``.

    Unknown operations raise ``ValueError``; callers translating untrusted
    payloads decide their own fallback.
    """

    record = dict(record or {})
    old_record = dict(old_record or {})
    if operation == OPERATION_INSERT:
        return InsertChange(table=table, record=record, user_id=user_id, labels=labels)
    if operation == OPERATION_UPDATE:
        return UpdateChange(
            table=table,
            record=record,
            old_record=old_record,
            user_id=user_id,
            labels=labels,
        )
    if operation == OPERATION_DELETE:
        return DeleteChange(
            table=table, old_record=old_record or record, user_id=user_id, labels=labels
        )
    if operation == OPERATION_FEEDBACK:
        return FeedbackChange(table=table, record=record, user_id=user_id, labels=labels)
    raise ValueError(f"Unsupported change operation '{operation}'")


__all__ = [
    "ChangeEvent",
    "DeleteChange",
    "FeedbackChange",
    "InsertChange",
    "OPERATIONS",
    "OPERATION_DELETE",
    "OPERATION_FEEDBACK",
    "OPERATION_INSERT",
    "OPERATION_UPDATE",
    "TableLabels",
    "UpdateChange",
    "build_change",
]
