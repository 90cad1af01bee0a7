import os
import tempfile
from datetime import datetime, timedelta, timezone

# Point the app at throwaway storage before any project module reads settings
_TMP_DIR = tempfile.mkdtemp(prefix="garbage-tracker-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_TMP_DIR, "test.db")
os.environ["UPLOAD_DIR"] = os.path.join(_TMP_DIR, "uploads")
os.environ["STORAGE_BACKEND"] = "database"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config.database import Base, get_db
from main import app
from api.admin.admin_service import (
    MemoryAdminStore,
    DatabaseAdminStore,
    seed_default_admin,
)
from api.garbage_reports.garbage_reports_service import MemoryReportStore, DatabaseReportStore
from api.sessions.sessions_service import SessionRegistry, InMemorySessionStore
from utils.deps import get_admin_store, get_report_store, get_session_registry

ADMIN_EMAIL = "admin@garbagetracker.com"
ADMIN_PASSWORD = "admin123"


class FakeClock:
    """Manually driven clock; ``step`` is added after every read."""

    def __init__(self, start=None, step=timedelta(0)):
        self.now = start or datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self):
        current = self.now
        self.now = self.now + self.step
        return current

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture(params=["memory", "database"])
def backend(request):
    return request.param


@pytest.fixture
def report_store(backend, clock, request):
    if backend == "memory":
        return MemoryReportStore(clock=clock)
    return DatabaseReportStore(request.getfixturevalue("db_session"), clock=clock)


@pytest.fixture
def admin_store(backend, request):
    if backend == "memory":
        return MemoryAdminStore()
    return DatabaseAdminStore(request.getfixturevalue("db_session"))


@pytest.fixture
def seeded_admin(admin_store):
    return seed_default_admin(admin_store, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def registry(clock):
    return SessionRegistry(store=InMemorySessionStore(), clock=clock)


@pytest.fixture
def client(backend, request):
    """
    API client over fresh stores for the selected backend, with the
    default admin seeded and a real clock.
    """
    registry = SessionRegistry(store=InMemorySessionStore())
    if backend == "memory":
        reports = MemoryReportStore()
        admins = MemoryAdminStore()
        app.dependency_overrides[get_report_store] = lambda: reports
        app.dependency_overrides[get_admin_store] = lambda: admins
    else:
        session = request.getfixturevalue("db_session")
        admins = DatabaseAdminStore(session)

        def _get_db():
            yield session

        app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_session_registry] = lambda: registry
    seed_default_admin(admins, ADMIN_EMAIL, ADMIN_PASSWORD)

    # no context manager: skip the lifespan, the admin is already seeded
    test_client = TestClient(app)
    try:
        yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def admin_token(client):
    resp = client.post("/api/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    return resp.json()["sessionId"]


def image_file(name="trash.jpg", content=b"\xff\xd8\xff\xe0fake-jpeg-bytes", content_type="image/jpeg"):
    return {"image": (name, content, content_type)}


def report_form(**overrides):
    data = {
        "location": "12 Main St",
        "reporterName": "Jane",
        "reporterEmail": "jane@example.com",
    }
    data.update(overrides)
    return {k: v for k, v in data.items() if v is not None}
