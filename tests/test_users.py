"""Signup, login, password reset and the user guards."""

from datetime import timedelta
from urllib.parse import parse_qs, urlparse

from worship_api.domain.users import service as user_service_module
from worship_api.models import PasswordResetToken, Role
from worship_api.security_utils import generate_reset_token, hash_token
from worship_api.shared.time_utils import utcnow


# --- Signup ---

def test_signup_creates_musician(client):
    resp = client.post(
        "/users/signup",
        json={"name": "Grace Hopper", "email": "Grace@Church.org", "password": "hunter2hunter2"},
    )
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["email"] == "grace@church.org"
    assert data["name"] == "Grace Hopper"
    assert "password" not in data


def test_signup_ignores_requested_roles(client, admin):
    resp = client.post(
        "/users/signup",
        json={"name": "Sneaky", "email": "sneaky@church.org", "password": "password123", "roles": ["admin"]},
    )
    assert resp.status_code == 201
    user_id = resp.json()["data"]["id"]

    detail = client.get(f"/users/{user_id}", headers=admin["headers"])
    assert detail.json()["data"]["roles"] == ["musician"]


def test_signup_duplicate_email(client, musician):
    resp = client.post(
        "/users/signup",
        json={"name": "Twin", "email": musician["email"], "password": "password123"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": {"message": "Email already in use"}}


def test_signup_validation_error_envelope(client):
    resp = client.post("/users/signup", json={"name": "Short", "email": "short@church.org", "password": "abc"})
    assert resp.status_code == 400
    error = resp.json()["error"]
    assert error["message"] == "Validation failed"
    assert any(d["field"] == "password" for d in error["details"])


def test_signup_rejects_non_e164_phone(client):
    resp = client.post(
        "/users/signup",
        json={"name": "Phone", "email": "phone@church.org", "password": "password123", "phoneE164": "555-1234"},
    )
    assert resp.status_code == 400


def test_signup_rate_limited(client):
    for i in range(3):
        resp = client.post(
            "/users/signup",
            json={"name": f"User {i}", "email": f"user{i}@church.org", "password": "password123"},
        )
        assert resp.status_code == 201

    resp = client.post(
        "/users/signup", json={"name": "User 4", "email": "user4@church.org", "password": "password123"}
    )
    assert resp.status_code == 429
    assert resp.json()["error"]["message"] == "Too many signup attempts, please try again later"
    assert "Retry-After" in resp.headers


# --- Login ---

def test_login_returns_token(client, leader):
    resp = client.post("/users/login", json={"email": leader["email"], "password": leader["password"]})
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["token"]
    assert data["user"]["id"] == leader["id"]
    assert set(data["user"]["roles"]) == {"leader", "musician"}

    me = client.get("/users/me", headers={"Authorization": f"Bearer {data['token']}"})
    assert me.status_code == 200
    assert me.json()["data"]["email"] == leader["email"]


def test_login_wrong_password(client, musician):
    resp = client.post("/users/login", json={"email": musician["email"], "password": "not-the-password"})
    assert resp.status_code == 401
    assert resp.json()["error"]["message"] == "Invalid credentials"


def test_login_inactive_user(client, make_user):
    user = make_user("Gone Away", active=False)
    resp = client.post("/users/login", json={"email": user["email"], "password": user["password"]})
    assert resp.status_code == 401


def test_login_rate_limited(client, musician):
    for _ in range(5):
        client.post("/users/login", json={"email": musician["email"], "password": "wrong-password"})
    resp = client.post("/users/login", json={"email": musician["email"], "password": musician["password"]})
    assert resp.status_code == 429
    assert resp.json()["error"]["message"] == "Too many login attempts, please try again later"


# --- Authentication guards ---

def test_missing_token(client):
    resp = client.get("/users/me")
    assert resp.status_code == 401
    assert resp.json() == {"error": {"message": "Missing token"}}


def test_invalid_token(client):
    resp = client.get("/users/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401
    assert resp.json()["error"]["message"] == "Invalid token"


def test_deactivated_user_token_rejected(client, admin, musician):
    resp = client.delete(f"/users/{musician['id']}", headers=admin["headers"])
    assert resp.status_code == 204

    resp = client.get("/users/me", headers=musician["headers"])
    assert resp.status_code == 401
    assert resp.json()["error"]["message"] == "Account is deactivated"


def test_list_users_requires_admin(client, admin, musician):
    assert client.get("/users", headers=musician["headers"]).status_code == 403
    resp = client.get("/users", headers=admin["headers"])
    assert resp.status_code == 200
    assert {u["id"] for u in resp.json()["data"]} == {admin["id"], musician["id"]}


def test_invalid_uuid_path(client, admin):
    resp = client.get("/users/not-a-uuid", headers=admin["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Invalid UUID format for parameter 'id'"


def test_user_can_view_self_but_not_others(client, musician, leader):
    assert client.get(f"/users/{musician['id']}", headers=musician["headers"]).status_code == 200
    assert client.get(f"/users/{leader['id']}", headers=musician["headers"]).status_code == 403


def test_non_admin_cannot_change_roles(client, musician):
    resp = client.put(f"/users/{musician['id']}", json={"roles": ["admin"]}, headers=musician["headers"])
    assert resp.status_code == 403
    assert resp.json()["error"]["message"] == "Only admins can update roles"


def test_admin_creates_user_with_roles(client, admin):
    resp = client.post(
        "/users",
        json={"name": "New Leader", "email": "new.leader@church.org", "password": "password123", "roles": ["leader"]},
        headers=admin["headers"],
    )
    assert resp.status_code == 201
    assert resp.json()["data"]["roles"] == [Role.leader.value]


# --- Password reset ---

def test_forgot_password_unknown_email(client):
    resp = client.post("/users/forgot-password", json={"email": "nobody@church.org"})
    assert resp.status_code == 200
    assert resp.json()["data"]["message"] == user_service_module.FORGOT_PASSWORD_MESSAGE


def test_password_reset_flow(client, musician, monkeypatch):
    sent = {}

    async def fake_send(to, reset_link):
        sent["to"] = to
        sent["link"] = reset_link
        return {"id": "test"}

    monkeypatch.setattr(user_service_module, "send_password_reset_email", fake_send)

    resp = client.post("/users/forgot-password", json={"email": musician["email"]})
    assert resp.status_code == 200
    assert sent["to"] == musician["email"]
    token = parse_qs(urlparse(sent["link"]).query)["token"][0]

    resp = client.post("/users/reset-password", json={"token": token, "password": "brand-new-pass"})
    assert resp.status_code == 200

    login = client.post("/users/login", json={"email": musician["email"], "password": "brand-new-pass"})
    assert login.status_code == 200

    reused = client.post("/users/reset-password", json={"token": token, "password": "another-pass"})
    assert reused.status_code == 400
    assert reused.json()["error"]["message"] == "This reset link has already been used"


def test_reset_password_bad_token(client):
    resp = client.post("/users/reset-password", json={"token": "deadbeef", "password": "password123"})
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Invalid or expired reset link"


def test_reset_password_expired_token(client, db, musician):
    raw_token = generate_reset_token()
    db.add(
        PasswordResetToken(
            token=hash_token(raw_token),
            user_id=musician["id"],
            expires_at=utcnow() - timedelta(minutes=1),
        )
    )
    db.commit()

    resp = client.post("/users/reset-password", json={"token": raw_token, "password": "brand-new-pass"})
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "This reset link has expired"

    login = client.post("/users/login", json={"email": musician["email"], "password": musician["password"]})
    assert login.status_code == 200
