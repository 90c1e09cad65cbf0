from __future__ import annotations

from datetime import datetime

import pytest

from smart_hr.common.passwords import PasswordHasher
from smart_hr.container import build_container
from smart_hr.core.enums import Role
from smart_hr.database.bootstrap import initialize_database
from smart_hr.main import create_app
from smart_hr.users.session import SessionContext


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 1, 6, 9, 0, 0)


@pytest.fixture
def hasher() -> PasswordHasher:
    # Cheap iterations keep the suite fast; the format is still a real werkzeug hash.
    return PasswordHasher(method="pbkdf2:sha256:1000")


@pytest.fixture
def db_path(tmp_path) -> str:
    return str(tmp_path / "data" / "smartHR.db")


@pytest.fixture
def container(db_path, hasher):
    c = build_container(db_path=db_path, hasher=hasher)
    initialize_database(c.conn, c.hasher)
    return c


@pytest.fixture
def admin_session(container) -> SessionContext:
    session = SessionContext()
    assert container.auth_service.login(session, "admin", "admin123").ok
    return session


@pytest.fixture
def make_employee(container, admin_session):
    def _make(name="Nimal Perera", username="nimal", password="secret", hourly_rate="100"):
        outcome = container.employee_service.create(
            admin_session, name=name, username=username, password=password, hourly_rate=hourly_rate
        )
        assert outcome.ok, outcome.reason
        return outcome.unwrap()

    return _make


@pytest.fixture
def app(db_path):
    app = create_app({"DB_PATH": db_path, "TESTING": True, "SECRET_KEY": "test", "AUTO_INIT_DB": True})
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    resp = client.post("/login", json={"username": "admin", "password": "admin123"})
    assert resp.status_code == 200
    assert resp.get_json()["role"] == Role.ADMIN.value
    return client
