"""Repository implementations for infrastructure layer."""

from .department_activity_repository import DepartmentActivityRepository

__all__ = ["DepartmentActivityRepository"]
