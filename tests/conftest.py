"""Shared fixtures for the notification tests."""

from __future__ import annotations

import pathlib
import sys
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from notifyhub.application.notifications import NotificationStore, Notifier
from notifyhub.infrastructure.storage import MemoryStorage


class ManualClock:
    """Clock returning a strictly increasing time on every call."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(seconds=1)):
        self.current = start or datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value

    def set(self, value: datetime) -> None:
        self.current = value


class RecordingToasts:
    """Toast surface that remembers every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def success(self, **options: Any) -> None:
        self.calls.append(("success", options))

    def error(self, **options: Any) -> None:
        self.calls.append(("error", options))

    def warning(self, **options: Any) -> None:
        self.calls.append(("warning", options))

    def info(self, **options: Any) -> None:
        self.calls.append(("info", options))

    def open(self, **options: Any) -> None:
        self.calls.append(("open", options))

    @property
    def levels(self) -> list[str]:
        return [level for level, _ in self.calls]


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def persistence_errors() -> list[Exception]:
    return []


@pytest.fixture
def store(storage, clock, persistence_errors) -> NotificationStore:
    return NotificationStore(storage, clock=clock, on_persistence_error=persistence_errors.append)


@pytest.fixture
def toasts() -> RecordingToasts:
    return RecordingToasts()


@pytest.fixture
def notifier(store, toasts) -> Notifier:
    return Notifier(store, toasts)
