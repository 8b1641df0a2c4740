from __future__ import annotations

from sqlalchemy.orm import Session, sessionmaker

from ..models.key_value import KeyValue


class KeyValueStore:
    """String values under string keys, one row per key.

    Errors from the database propagate as SQLAlchemy exceptions; callers
    decide whether a failed read or write is fatal.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def get(self, key: str) -> str | None:
        with self._session_factory() as session:
            row = session.get(KeyValue, key)
            return row.value if row else None

    def set(self, key: str, value: str) -> None:
        with self._session_factory() as session:
            self._upsert(session, key, value)
            session.commit()

    def remove(self, key: str) -> None:
        with self._session_factory() as session:
            row = session.get(KeyValue, key)
            if row:
                session.delete(row)
                session.commit()

    @staticmethod
    def _upsert(session: Session, key: str, value: str) -> None:
        row = session.get(KeyValue, key)
        if row:
            row.value = value
        else:
            session.add(KeyValue(key=key, value=value))
