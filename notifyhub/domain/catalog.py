"""Static lookups translating backend table names into display labels."""

from __future__ import annotations

import re
from typing import Final

from notifyhub.domain.entities import TableLabels

DEPARTMENT_BDM: Final[str] = "bdm"
DEPARTMENT_SALES_OPERATIONS: Final[str] = "sales_operations"
DEPARTMENT_SCMT: Final[str] = "scmt"
DEPARTMENT_UNKNOWN: Final[str] = "unknown"

DEPARTMENTS: Final[tuple[str, ...]] = (
    DEPARTMENT_BDM,
    DEPARTMENT_SALES_OPERATIONS,
    DEPARTMENT_SCMT,
)

FEEDBACK_SUFFIX: Final[str] = "_fb"

TABLE_TO_DEPARTMENT: Final[dict[str, str]] = {
    "bdm_college_session": DEPARTMENT_BDM,
    "bdm_customer_visit": DEPARTMENT_BDM,
    "bdm_principle_visit": DEPARTMENT_BDM,
    "bdm_promotional_activities": DEPARTMENT_BDM,
    "bdm_weekly_meetings": DEPARTMENT_BDM,
    "sales_operations_meetings": DEPARTMENT_SALES_OPERATIONS,
    "sales_operations_tasks": DEPARTMENT_SALES_OPERATIONS,
    "scmt_d_n_d": DEPARTMENT_SCMT,
    "scmt_meetings_and_sessions": DEPARTMENT_SCMT,
    "scmt_others": DEPARTMENT_SCMT,
    "scmt_weekly_meetings": DEPARTMENT_SCMT,
}

DEPARTMENT_DISPLAY_NAMES: Final[dict[str, str]] = {
    DEPARTMENT_BDM: "BDM Department",
    DEPARTMENT_SALES_OPERATIONS: "Sales Operations Department",
    DEPARTMENT_SCMT: "SCMT Department",
}

TABLE_CATEGORIES: Final[dict[str, str]] = {
    "bdm_college_session": "College Sessions",
    "bdm_customer_visit": "Customer Visits",
    "bdm_principle_visit": "Principle Visits",
    "bdm_promotional_activities": "Promotional Activities",
    "bdm_weekly_meetings": "Weekly Meetings",
    "sales_operations_meetings": "Meetings",
    "sales_operations_tasks": "Special Tasks",
    "scmt_d_n_d": "Delivery and Distribution",
    "scmt_meetings_and_sessions": "Meetings and Sessions",
    "scmt_others": "Other Operations",
    "scmt_weekly_meetings": "Weekly Shipments",
}

TABLE_DISPLAY_NAMES: Final[dict[str, str]] = {
    "bdm_college_session": "College Session",
    "bdm_customer_visit": "Customer Visit",
    "bdm_principle_visit": "Principle Visit",
    "bdm_promotional_activities": "Promotional Activity",
    "bdm_weekly_meetings": "Weekly Meeting",
    "sales_operations_meetings": "Sales Meeting",
    "sales_operations_tasks": "Sales Task",
    "scmt_d_n_d": "D&D Activity",
    "scmt_meetings_and_sessions": "SCMT Meeting",
    "scmt_others": "Other Activity",
    "scmt_weekly_meetings": "SCMT Weekly Meeting",
    "meeting_requests": "Meeting Request",
    "messages": "Message",
}

_WORD_START: Final[re.Pattern[str]] = re.compile(r"\b\w")


def humanize(name: str) -> str:
    """Turn ``snake_case`` into ``Snake Case`` keeping the rest of each word."""

    return _WORD_START.sub(lambda match: match.group(0).upper(), name.replace("_", " "))


def is_feedback_table(table: str) -> bool:
    return table.endswith(FEEDBACK_SUFFIX) and len(table) > len(FEEDBACK_SUFFIX)


def base_table(table: str) -> str:
    """Return ``table`` without its feedback suffix."""

    if is_feedback_table(table):
        return table[: -len(FEEDBACK_SUFFIX)]
    return table


def department_for(table: str) -> str:
    return TABLE_TO_DEPARTMENT.get(base_table(table), DEPARTMENT_UNKNOWN)


def department_display_name(department: str) -> str:
    return DEPARTMENT_DISPLAY_NAMES.get(department) or humanize(department)


def category_for(table: str) -> str:
    return TABLE_CATEGORIES.get(table) or humanize(table)


def table_display_name(table: str) -> str:
    return TABLE_DISPLAY_NAMES.get(table) or humanize(table)


def describe_table(table: str) -> TableLabels:
    """Resolve every catalog label for ``table`` at once."""

    department = department_for(table)
    return TableLabels(
        department=department,
        department_name=department_display_name(department),
        category=category_for(base_table(table)),
    )


def monitored_tables() -> list[str]:
    """Return the base tables the dashboard watches by default."""

    return list(TABLE_TO_DEPARTMENT)


__all__ = [
    "DEPARTMENTS",
    "DEPARTMENT_BDM",
    "DEPARTMENT_SALES_OPERATIONS",
    "DEPARTMENT_SCMT",
    "DEPARTMENT_UNKNOWN",
    "FEEDBACK_SUFFIX",
    "base_table",
    "category_for",
    "department_display_name",
    "department_for",
    "describe_table",
    "humanize",
    "is_feedback_table",
    "monitored_tables",
    "table_display_name",
]
