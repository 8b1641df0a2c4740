import pytest
from fastapi.testclient import TestClient

from request_desk.core.desk import build_desk
from request_desk.db import make_engine
from request_desk.main import create_app

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "Password123!"
USER_EMAIL = "user@example.com"
USER_PASSWORD = "user123"


@pytest.fixture
def engine():
    engine = make_engine("sqlite://")
    yield engine
    engine.dispose()


@pytest.fixture
def desk(engine):
    return build_desk(engine)


@pytest.fixture
def admin(desk):
    return desk.store.snapshot.find_account(ADMIN_EMAIL)


@pytest.fixture
def user(desk):
    return desk.store.snapshot.find_account(USER_EMAIL)


@pytest.fixture
def other_user(desk, admin):
    return desk.accounts.create_account(
        admin, "Second", "Person", "second@example.com", "secret1", role="User", verified=True
    )


@pytest.fixture
def client(desk):
    with TestClient(create_app(desk)) as c:
        yield c


def login(client, email, password):
    resp = client.post("/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()
