import itertools
import os
import tempfile
from datetime import datetime, timedelta, timezone

# configuração precisa existir antes de importar unievent
os.environ["ENVIRONMENT"] = "testing"
os.environ["RUN_MIGRATIONS_ON_STARTUP"] = "false"
os.environ["SEED_DEMO"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DATA_DIR"] = tempfile.mkdtemp(prefix="unievent-tests-")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import unievent.models  # noqa: F401
from unievent.db.base import Base
from unievent.db.session import enable_sqlite_foreign_keys, get_db
from unievent.main import api

API = "/api/v1"


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    api.dependency_overrides[get_db] = override_get_db
    with TestClient(api) as c:
        yield c
    api.dependency_overrides.clear()


class ApiHelper:
    """Thin wrappers over the public endpoints used to set up scenarios."""

    def __init__(self, client: TestClient):
        self.client = client
        self._seq = itertools.count(1)

    def college(self, name=None) -> int:
        name = name or f"College {next(self._seq)}"
        response = self.client.post(f"{API}/colleges", json={"name": name})
        assert response.status_code == 201, response.text
        return response.json()["id"]

    def login(self, email, password="secret123") -> dict:
        response = self.client.post(f"{API}/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    def admin(self, college_id, email=None):
        n = next(self._seq)
        email = email or f"admin{n}@example.com"
        response = self.client.post(
            f"{API}/auth/register/admin",
            json={
                "email": email,
                "password": "secret123",
                "first_name": "Admin",
                "last_name": str(n),
                "college_id": college_id,
            },
        )
        assert response.status_code == 201, response.text
        return response.json()["adminId"], self.login(email)

    def student(self, college_id, email=None, first_name=None, **extra):
        n = next(self._seq)
        email = email or f"student{n}@example.com"
        payload = {
            "email": email,
            "password": "secret123",
            "first_name": first_name or f"Student{n}",
            "last_name": "Tester",
            "student_id": f"R{n:04d}",
            "college_id": college_id,
        }
        payload.update(extra)
        response = self.client.post(f"{API}/auth/register/student", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["studentId"], self.login(email)

    def event(self, headers, **overrides):
        payload = {
            "title": "Tech Talk",
            "event_date": (datetime.now(timezone.utc) + timedelta(days=7)).isoformat(),
            "venue": "Main Hall",
            "capacity": 2,
            "category": "workshop",
            "status": "active",
        }
        payload.update(overrides)
        payload = {k: v for k, v in payload.items() if v is not None}
        response = self.client.post(f"{API}/events", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()

    def register(self, headers, event_id):
        return self.client.post(f"{API}/registrations", json={"event_id": event_id}, headers=headers)

    def qr_checkin(self, headers, qr_data):
        return self.client.post(f"{API}/attendance/qr-checkin", json={"qr_data": qr_data}, headers=headers)

    def manual_attendance(self, headers, event_id, student_id):
        return self.client.post(
            f"{API}/attendance/manual", json={"event_id": event_id, "student_id": student_id}, headers=headers
        )


@pytest.fixture()
def helper(client):
    return ApiHelper(client)


@pytest.fixture()
def campus(helper):
    """One college with an admin and a capacity-2 active event."""
    college_id = helper.college()
    admin_id, admin_headers = helper.admin(college_id)
    created = helper.event(admin_headers)
    return {
        "college_id": college_id,
        "admin_id": admin_id,
        "admin": admin_headers,
        "event_id": created["event_id"],
        "qr_data": created["qr_data"],
    }
