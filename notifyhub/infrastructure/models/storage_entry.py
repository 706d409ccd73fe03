"""SQLAlchemy model backing the durable key-value slots."""

from sqlalchemy import Column, DateTime, String, Text

from notifyhub.infrastructure.database import Base
from notifyhub.utils import now_in_app_timezone


class StorageEntryModel(Base):
    """A single named slot holding a serialized document."""

    __tablename__ = "local_storage"

    key = Column(String(120), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=now_in_app_timezone,
        onupdate=now_in_app_timezone,
    )


__all__ = ["StorageEntryModel"]
