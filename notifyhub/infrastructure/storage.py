"""Durable key-value slots used to persist client side state."""

from __future__ import annotations

from sqlalchemy.orm import Session, sessionmaker

from notifyhub.infrastructure.models import StorageEntryModel


class MemoryStorage:
    """Process-local storage, lost on restart unless the instance is shared."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class SqlKeyValueStorage:
    """Store each slot as a row of the ``local_storage`` table."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def get_item(self, key: str) -> str | None:
        with self._session_factory() as session:
            model = session.get(StorageEntryModel, key)
            return model.value if model is not None else None

    def set_item(self, key: str, value: str) -> None:
        with self._session_factory() as session:
            model = session.get(StorageEntryModel, key)
            if model is None:
                model = StorageEntryModel(key=key, value=value)
            else:
                model.value = value
            session.add(model)
            session.commit()

    def remove_item(self, key: str) -> None:
        with self._session_factory() as session:
            model = session.get(StorageEntryModel, key)
            if model is None:
                return
            session.delete(model)
            session.commit()


__all__ = ["MemoryStorage", "SqlKeyValueStorage"]
