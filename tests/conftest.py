"""Shared fixtures: an in-memory database, a test client and user factories."""

import os
from datetime import timedelta

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_BACKEND"] = "memory"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["SECURITY_HEADERS_ENABLED"] = "true"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from worship_api import storage  # noqa: E402
from worship_api.database import Base, SessionLocal, engine  # noqa: E402
from worship_api.main import app  # noqa: E402
from worship_api.models import Role, User  # noqa: E402
from worship_api.rate_limiter import reset_memory_cache  # noqa: E402
from worship_api.security_utils import create_access_token, hash_password  # noqa: E402
from worship_api.shared.time_utils import utcnow  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    reset_memory_cache()
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_user():
    """Insert a user directly and return its id, email and auth headers."""

    def factory(name="Test User", email=None, roles=(Role.musician,), password="password123", active=True):
        email = email or f"{name.lower().replace(' ', '.')}@church.org"
        role_values = [Role(r).value for r in roles]
        session = SessionLocal()
        try:
            user = User(
                name=name,
                email=email,
                password=hash_password(password),
                roles=role_values,
                is_active=active,
            )
            session.add(user)
            session.commit()
            user_id = user.id
        finally:
            session.close()

        token = create_access_token(user_id, role_values)
        return {
            "id": user_id,
            "email": email,
            "password": password,
            "headers": {"Authorization": f"Bearer {token}"},
        }

    return factory


@pytest.fixture
def admin(make_user):
    return make_user("Admin Person", roles=(Role.admin,))


@pytest.fixture
def leader(make_user):
    return make_user("Lead Singer", roles=(Role.leader, Role.musician))


@pytest.fixture
def musician(make_user):
    return make_user("Bass Player", roles=(Role.musician,))


@pytest.fixture
def service_type(client, admin):
    resp = client.post(
        "/serviceTypes",
        json={"name": "Sunday Morning", "defaultStartTime": "10:00", "rrule": "FREQ=WEEKLY;BYDAY=SU"},
        headers=admin["headers"],
    )
    assert resp.status_code == 201
    return resp.json()["data"]


@pytest.fixture
def planned_set(client, admin, leader, service_type):
    """A service three weeks out whose draft worship set is led by `leader`."""
    service_date = (utcnow() + timedelta(days=21)).replace(hour=10, minute=0, second=0, microsecond=0)
    resp = client.post(
        "/services",
        json={"date": service_date.isoformat(), "serviceTypeId": service_type["id"]},
        headers=admin["headers"],
    )
    assert resp.status_code == 201, resp.json()
    service = resp.json()["data"]
    set_id = service["worshipSet"]["id"]

    resp = client.put(
        f"/worshipSets/{set_id}/assign-leader", json={"leaderUserId": leader["id"]}, headers=admin["headers"]
    )
    assert resp.status_code == 200, resp.json()
    return {"service_id": service["id"], "set_id": set_id, "service_date": service_date}


@pytest.fixture
def make_song(client, admin):
    """Create a song with one version and return both ids."""

    def factory(title="Amazing Grace", familiarity=80, default_key="G"):
        resp = client.post(
            "/songs",
            json={"title": title, "artist": "John Newton", "familiarityScore": familiarity},
            headers=admin["headers"],
        )
        assert resp.status_code == 201, resp.json()
        song_id = resp.json()["data"]["id"]

        resp = client.post(
            "/songVersions",
            json={"songId": song_id, "name": "Standard", "defaultKey": default_key, "bpm": 72},
            headers=admin["headers"],
        )
        assert resp.status_code == 201, resp.json()
        return {"song_id": song_id, "version_id": resp.json()["data"]["id"]}

    return factory


@pytest.fixture
def fake_storage(monkeypatch):
    """Record object storage calls instead of talking to a bucket."""
    calls = {"uploaded": [], "deleted": []}

    def fake_upload(path, content, content_type):
        calls["uploaded"].append((path, content_type, len(content)))

    def fake_delete(path):
        calls["deleted"].append(path)

    monkeypatch.setattr(storage, "upload_file", fake_upload)
    monkeypatch.setattr(storage, "delete_file", fake_delete)
    monkeypatch.setattr(storage, "public_url", lambda path: f"https://files.example.com/{path}")
    return calls
