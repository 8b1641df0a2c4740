from datetime import date

from sqlalchemy.exc import OperationalError

import pytest

from request_desk.core.errors import PersistenceWarning
from request_desk.core.kv_store import KeyValueStore
from request_desk.core.store import Store
from request_desk.db import init_db, make_session_factory
from request_desk.schemas.entities import Snapshot


def _disk_full(*args, **kwargs):
    raise OperationalError("INSERT", {}, Exception("disk full"))


@pytest.fixture
def kv(engine):
    init_db(engine)
    return KeyValueStore(make_session_factory(engine))


def test_load_seeds_defaults_when_empty(kv):
    store = Store(kv)
    snapshot = store.load()

    assert [a.email for a in snapshot.accounts] == ["admin@example.com", "user@example.com"]
    assert all(a.verified for a in snapshot.accounts)
    assert [a.role for a in snapshot.accounts] == ["Admin", "User"]
    assert [(d.id, d.name) for d in snapshot.departments] == [(1, "Engineering"), (2, "HR"), (3, "Marketing")]
    assert snapshot.employees == []
    assert snapshot.requests == []
    # seeded state is written right away
    assert kv.get("ipt_demo_v1") is not None


def test_persisted_snapshot_uses_camel_case_keys(kv):
    Store(kv).load()
    raw = kv.get("ipt_demo_v1")
    assert '"firstName"' in raw
    assert '"first_name"' not in raw


def test_reload_reproduces_equal_snapshot(desk, engine, admin, user):
    desk.directory.create_department(admin, "Finance", "Money")
    desk.accounts.create_account(admin, "Second", "Person", "second@example.com", "secret1", verified=True)
    desk.directory.create_employee(admin, "E-1", "second@example.com", "Analyst", 4, date(2020, 1, 1))
    desk.workflow.submit(user, "Equipment", [{"name": "Laptop", "qty": 2}])

    reloaded = Store(KeyValueStore(make_session_factory(engine))).load()
    assert reloaded == desk.store.snapshot

    raw = desk.store.snapshot.model_dump_json(by_alias=True)
    assert Snapshot.model_validate_json(raw) == desk.store.snapshot


def test_unreadable_snapshot_falls_back_to_seed_with_warning(kv):
    kv.set("ipt_demo_v1", "{not json")
    store = Store(kv)
    snapshot = store.load()

    assert len(snapshot.accounts) == 2
    warnings = store.drain_warnings()
    assert len(warnings) == 1
    assert isinstance(warnings[0], PersistenceWarning)
    assert store.drain_warnings() == []


def test_persist_failure_keeps_in_memory_change(kv, monkeypatch):
    store = Store(kv)
    store.load()
    monkeypatch.setattr(kv, "set", _disk_full)

    with store.transaction() as db:
        db.departments = []

    assert store.snapshot.departments == []
    warnings = store.drain_warnings()
    assert len(warnings) == 1
    assert "Error saving data" in str(warnings[0])


def test_failed_transaction_leaves_state_untouched(kv):
    store = Store(kv)
    store.load()
    before = store.snapshot.model_copy(deep=True)

    with pytest.raises(RuntimeError):
        with store.transaction() as db:
            db.accounts.clear()
            raise RuntimeError("boom")

    assert store.snapshot == before
    assert Store(kv).load() == before


def test_read_failure_falls_back_to_seed_with_warning(kv, monkeypatch):
    def unreachable(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("unable to open database file"))

    monkeypatch.setattr(kv, "get", unreachable)
    store = Store(kv)
    snapshot = store.load()

    assert [a.email for a in snapshot.accounts] == ["admin@example.com", "user@example.com"]
    warnings = store.drain_warnings()
    assert len(warnings) == 1
    assert "Error loading data" in str(warnings[0])


def test_warn_queues_message(kv):
    store = Store(kv)
    warning = store.warn("Error saving auth_token (OperationalError)")
    assert isinstance(warning, PersistenceWarning)
    assert store.drain_warnings() == [warning]
