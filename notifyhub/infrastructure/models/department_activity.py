"""SQLAlchemy model for the department activity log."""

from sqlalchemy import Column, DateTime, Integer, String, Text

from notifyhub.infrastructure.database import Base
from notifyhub.utils import now_in_app_timezone


class DepartmentActivityModel(Base):
    """Database representation of an operation performed in a department."""

    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    topic = Column(Text, nullable=False)
    operation_type = Column(String(20), nullable=False)
    table_name = Column(String(120), nullable=False, index=True)
    department_name = Column(String(120), nullable=False)
    category_name = Column(String(120), nullable=False)
    record_id = Column(String(64), nullable=True)
    changed_by = Column(String(64), nullable=True)
    status = Column(String(20), nullable=False, default="active")
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )


__all__ = ["DepartmentActivityModel"]
