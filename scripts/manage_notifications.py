"""Utility script to inspect or reset the persisted notification history."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from notifyhub.application.notifications import NotificationStore
from notifyhub.config import get_settings
from notifyhub.infrastructure.database import (
    build_session_factory,
    engine_from_settings,
    initialize_database,
)
from notifyhub.infrastructure.storage import SqlKeyValueStorage


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""

    parser = argparse.ArgumentParser(
        description="Inspect or reset the notification history stored in the database.",
    )
    parser.add_argument(
        "command",
        choices=("list", "unread", "read-all", "clear"),
        help="Action to perform on the stored notifications",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=20,
        help="Maximum number of notifications printed by 'list' (default: 20)",
    )
    return parser.parse_args(argv)


def _raise_on_error(exc: Exception) -> None:
    raise SystemExit(f"Could not access the notification storage: {exc}")


def main(argv: list[str] | None = None) -> None:
    """Run the requested command against the configured database."""

    args = parse_args(argv)
    settings = get_settings()

    engine = engine_from_settings(settings)
    try:
        initialize_database(engine)
    except SQLAlchemyError as exc:
        raise SystemExit(f"Could not prepare the database: {exc}") from exc

    store = NotificationStore(
        SqlKeyValueStorage(build_session_factory(engine)),
        capacity=settings.notifications_capacity,
        storage_key=settings.notifications_storage_key,
        on_persistence_error=_raise_on_error,
    )
    try:
        if args.command == "list":
            for record in store.get()[: args.limit]:
                marker = " " if record.read else "*"
                print(
                    f"{marker} {record.created_at:%Y-%m-%d %H:%M} "
                    f"[{record.type}] {record.title}"
                    + (f" - {record.description}" if record.description else "")
                )
        elif args.command == "unread":
            print(store.unread_count())
        elif args.command == "read-all":
            store.mark_all_read()
            print("All notifications marked as read.")
        else:
            store.clear()
            print("Notification history cleared.")
    finally:
        engine.dispose()


if __name__ == "__main__":
    main()
