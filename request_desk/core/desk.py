from __future__ import annotations

from dataclasses import dataclass
import logging

from sqlalchemy.engine import Engine

from ..db import init_db, make_engine, make_session_factory
from ..services.account_service import AccountService
from ..services.directory_service import DirectoryService
from ..services.request_workflow import RequestWorkflow
from .kv_store import KeyValueStore
from .security import SessionManager
from .settings import settings
from .store import Store

logger = logging.getLogger(__name__)


@dataclass
class Desk:
    """Application state: the store, the session and the services over them."""

    store: Store
    sessions: SessionManager
    accounts: AccountService
    directory: DirectoryService
    workflow: RequestWorkflow


def build_desk(engine: Engine | None = None) -> Desk:
    engine = engine or make_engine()
    if settings.AUTO_DB_BOOTSTRAP:
        init_db(engine)

    kv = KeyValueStore(make_session_factory(engine))
    store = Store(kv)
    sessions = SessionManager(kv, on_warning=store.warn)

    store.load()
    restored = sessions.restore(store.snapshot)
    if restored:
        logger.info("session restored (email=%s)", restored.email)

    return Desk(
        store=store,
        sessions=sessions,
        accounts=AccountService(store, sessions),
        directory=DirectoryService(store),
        workflow=RequestWorkflow(store),
    )
