"""ORM models used by the application infrastructure."""

from .department_activity import DepartmentActivityModel
from .storage_entry import StorageEntryModel

__all__ = ["DepartmentActivityModel", "StorageEntryModel"]
