"""Tests for the notification maintenance script."""

from __future__ import annotations

import pytest

from notifyhub.application.notifications import NotificationStore
from notifyhub.config import reset_settings_cache
from notifyhub.infrastructure.database import build_engine, build_session_factory, initialize_database
from notifyhub.infrastructure.storage import SqlKeyValueStorage
from scripts.manage_notifications import main


@pytest.fixture
def database_url(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path / 'notifyhub.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    reset_settings_cache()
    yield url
    reset_settings_cache()


@pytest.fixture
def seeded(database_url, clock):
    engine = build_engine(database_url)
    initialize_database(engine)
    store = NotificationStore(SqlKeyValueStorage(build_session_factory(engine)), clock=clock)
    store.add(type="success", title="Payroll closed", description="May 2024")
    store.add(type="warning", title="Loan overdue")
    engine.dispose()


def test_unread_and_read_all(seeded, capsys):
    main(["unread"])
    assert capsys.readouterr().out.strip() == "2"

    main(["read-all"])
    main(["unread"])
    output = capsys.readouterr().out.splitlines()
    assert output == ["All notifications marked as read.", "0"]


def test_list_prints_newest_first(seeded, capsys):
    main(["list", "--limit", "1"])

    (line,) = capsys.readouterr().out.splitlines()
    assert line.startswith("* 2024-01-01")
    assert line.endswith("[warning] Loan overdue")


def test_clear_empties_the_history(seeded, capsys):
    main(["clear"])
    main(["list"])

    assert capsys.readouterr().out.splitlines() == ["Notification history cleared."]
