"""
conftest.py for backend/tests/

Every test gets a fresh in-memory SQLite database. The API's get_db,
get_image_store and get_broadcaster dependencies are overridden so no real
database, Cloudinary account or WebSocket client is needed.

Run from backend/:
    pytest tests -v
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from api.dependencies import get_broadcaster, get_db, get_image_store
from api.main import app
from core.config import settings
from db.database import Base
from db import models  # noqa: F401  (registers tables)


class FakeImageStore:
    """Records uploads and hands back predictable URLs."""

    def __init__(self):
        self.uploads = []

    def upload(self, file, filename=None):
        self.uploads.append((filename, file.read()))
        return f"https://images.test/{filename}"


class RecordingPublisher:
    """Stands in for the live channel; keeps every (topic, payload) published."""

    def __init__(self):
        self.events = []

    async def publish(self, topic, payload):
        self.events.append((topic, payload))
        return 0

    def topics(self):
        return [topic for topic, _ in self.events]


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


# ---------------------------------------------------------------------------
# API client
# ---------------------------------------------------------------------------

@pytest.fixture()
def image_store():
    return FakeImageStore()


@pytest.fixture()
def publisher():
    return RecordingPublisher()


@pytest.fixture()
def client(session_factory, image_store, publisher, monkeypatch):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_store] = lambda: image_store
    app.dependency_overrides[get_broadcaster] = lambda: publisher
    monkeypatch.setattr(settings, "bcrypt_rounds", 4)  # fastest bcrypt allows

    yield TestClient(app)

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Builders: create rows through the API and return the JSON body
# ---------------------------------------------------------------------------

@pytest.fixture()
def make_university(client):
    def _make(name="Northfield University", location="Leeds"):
        resp = client.post("/api/v1/universities", data={"name": name, "location": location})
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _make


@pytest.fixture()
def make_sport(client):
    def _make(name="Football", type="TEAM", university_id=None):
        body = {"name": name, "type": type}
        if university_id:
            body["universityId"] = university_id
        resp = client.post("/api/v1/sports", json=body)
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _make


@pytest.fixture()
def make_fixture(client):
    def _make(sport_id, home="Northfield", away="Southgate", venue="Main Pitch",
              gender="MALE", date="2026-03-01T15:00:00Z"):
        resp = client.post("/api/v1/fixtures", json={
            "sportId": sport_id,
            "homeTeam": home,
            "awayTeam": away,
            "date": date,
            "venue": venue,
            "gender": gender,
        })
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _make
