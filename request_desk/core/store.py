from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator
import logging
import threading

from pydantic import ValidationError as SchemaError
from sqlalchemy.exc import SQLAlchemyError

from ..schemas.entities import Snapshot
from .errors import PersistenceWarning
from .kv_store import KeyValueStore
from .seed import seed_snapshot
from .settings import settings

logger = logging.getLogger(__name__)


class Store:
    """Sole owner of the accounts, departments, employees and requests.

    Reads go through ``snapshot``; every write goes through ``transaction()``,
    which swaps in the mutated copy and persists it in one step. Persist
    failures never undo the in-memory change: they are logged and queued as
    ``PersistenceWarning`` for the caller to report.
    """

    def __init__(self, kv: KeyValueStore, storage_key: str | None = None):
        self._kv = kv
        self._key = storage_key or settings.STORAGE_KEY
        self._lock = threading.RLock()
        self._snapshot = Snapshot()
        self._warnings: list[PersistenceWarning] = []

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    def load(self) -> Snapshot:
        with self._lock:
            try:
                raw = self._kv.get(self._key)
            except SQLAlchemyError as exc:
                logger.exception("failed to read snapshot (key=%s)", self._key)
                self.warn(f"Error loading data ({type(exc).__name__})")
                self._snapshot = seed_snapshot()
                return self._snapshot

            if raw is None:
                logger.info("no stored snapshot under %s; seeding defaults", self._key)
                self._snapshot = seed_snapshot()
                self.persist(self._snapshot)
                return self._snapshot

            try:
                self._snapshot = Snapshot.model_validate_json(raw)
            except (SchemaError, ValueError):
                # The unreadable record stays in storage until the next commit overwrites it.
                logger.exception("stored snapshot is unreadable (key=%s); seeding defaults", self._key)
                self.warn("Error loading data: stored snapshot is unreadable")
                self._snapshot = seed_snapshot()
            return self._snapshot

    def persist(self, snapshot: Snapshot) -> PersistenceWarning | None:
        try:
            self._kv.set(self._key, snapshot.model_dump_json(by_alias=True))
        except SQLAlchemyError as exc:
            logger.exception("failed to persist snapshot (key=%s)", self._key)
            return self.warn(f"Error saving data ({type(exc).__name__})")
        return None

    @contextmanager
    def transaction(self) -> Iterator[Snapshot]:
        """Yield a working copy; commit it only if the block exits cleanly."""
        with self._lock:
            working = self._snapshot.model_copy(deep=True)
            yield working
            self._snapshot = working
            self.persist(working)

    def drain_warnings(self) -> list[PersistenceWarning]:
        with self._lock:
            warnings, self._warnings = self._warnings, []
            return warnings

    def warn(self, message: str) -> PersistenceWarning:
        warning = PersistenceWarning(message)
        with self._lock:
            self._warnings.append(warning)
        return warning
