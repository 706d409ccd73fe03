"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_app_timezone,
    epoch_millis,
    get_app_timezone,
    now_in_app_timezone,
    parse_timestamp,
)

__all__ = [
    "ensure_app_timezone",
    "epoch_millis",
    "get_app_timezone",
    "now_in_app_timezone",
    "parse_timestamp",
]
