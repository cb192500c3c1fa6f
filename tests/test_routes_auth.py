from datetime import timedelta

from fastapi.testclient import TestClient

from clinic.api import auth as auth_routes
from clinic.api.dependencies import get_clock
from clinic.core.config import AppConfig
from clinic.main import app
from clinic.models import User
from clinic.services.auth import create_access_token, hash_password, verify_password

ADMIN = {"email": "admin@clinic.test", "password": "s3cret-pass"}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_password_hashing():
    hashed = hash_password("hunter22")

    assert hashed != "hunter22"
    assert verify_password("hunter22", hashed)
    assert not verify_password("hunter23", hashed)
    assert not verify_password("hunter22", "plain-text-legacy")
    assert not verify_password("hunter22", "")


def test_reset_admin_then_login(client):
    reset = client.post("/api/auth/reset-admin", json=ADMIN)
    assert reset.json()["role"] == "ADMIN"

    response = client.post("/api/auth/login", json=ADMIN)

    assert response.status_code == 200
    body = response.json()
    assert body["tokenType"] == "bearer"
    assert body["user"] == {"id": reset.json()["id"], "email": "admin@clinic.test", "role": "ADMIN"}


def test_reset_admin_without_body_uses_seed_account(client):
    response = client.post("/api/auth/reset-admin")

    assert response.json()["email"] == "admin@gmail.com"
    assert client.post("/api/auth/login", json={"email": "admin@gmail.com", "password": "admin12345"}).status_code == 200


def test_reset_admin_is_disabled_in_production(client, monkeypatch):
    monkeypatch.setattr(auth_routes, "get_settings", lambda: AppConfig(APP_ENV="production"))

    response = client.post("/api/auth/reset-admin", json=ADMIN)

    assert response.status_code == 403
    assert response.json() == {"error": "FORBIDDEN"}


def test_wrong_password(client):
    client.post("/api/auth/reset-admin", json=ADMIN)

    response = client.post("/api/auth/login", json={"email": ADMIN["email"], "password": "nope"})

    assert response.status_code == 401
    assert response.json() == {"error": "INVALID_CREDENTIALS"}


def test_login_requires_both_fields(client):
    assert client.post("/api/auth/login", json={"email": ADMIN["email"]}).status_code == 422


def test_me(client, auth_headers):
    response = client.get("/api/auth/me", headers=auth_headers)

    assert response.json()["email"] == "admin@clinic.test"
    assert client.get("/api/auth/me").status_code == 401


def test_expired_token_is_rejected(client):
    user = User(id=1, email="admin@clinic.test", role="ADMIN", password_hash="")
    token = create_access_token(user, expires_delta=timedelta(minutes=-5))

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json() == {"error": "UNAUTH"}


def test_change_password(client):
    client.post("/api/auth/reset-admin", json=ADMIN)

    response = client.post(
        "/api/auth/change-password",
        json={"email": ADMIN["email"], "oldPassword": ADMIN["password"], "newPassword": "n3w-pass"},
    )

    assert response.json() == {"ok": True, "message": "Password updated."}
    assert client.post("/api/auth/login", json={"email": ADMIN["email"], "password": "n3w-pass"}).status_code == 200
    assert client.post("/api/auth/login", json=ADMIN).status_code == 401


def test_change_password_errors(client):
    client.post("/api/auth/reset-admin", json=ADMIN)

    missing = client.post("/api/auth/change-password", json={"email": ADMIN["email"]})
    unknown = client.post(
        "/api/auth/change-password",
        json={"email": "ghost@clinic.test", "oldPassword": "x", "newPassword": "y"},
    )
    wrong = client.post(
        "/api/auth/change-password",
        json={"email": ADMIN["email"], "oldPassword": "wrong", "newPassword": "y"},
    )

    assert missing.json() == {"error": "MISSING_FIELDS", "missing": ["oldPassword", "newPassword"]}
    assert (unknown.status_code, unknown.json()) == (404, {"error": "USER_NOT_FOUND"})
    assert (wrong.status_code, wrong.json()) == (400, {"error": "OLD_PASSWORD_INCORRECT"})


def test_unexpected_errors_are_opaque(client):
    def broken_clock():
        raise RuntimeError("clock unavailable")

    app.dependency_overrides[get_clock] = broken_clock
    response = TestClient(app, raise_server_exceptions=False).get(
        "/api/appointments/slots", params={"date": "2030-01-20"}
    )

    assert response.status_code == 500
    assert response.json() == {"error": "SERVER_ERROR"}


def test_reset_admin_needs_an_admin_token_once_an_admin_exists(client, auth_headers):
    anonymous = client.post("/api/auth/reset-admin", json={**ADMIN, "password": "taken-over"})

    assert anonymous.status_code == 401
    assert anonymous.json() == {"error": "UNAUTH"}
    assert client.post("/api/auth/login", json=ADMIN).status_code == 200


def test_admin_can_reset_with_a_token(client, auth_headers):
    response = client.post("/api/auth/reset-admin", json={**ADMIN, "password": "rotated-pass"}, headers=auth_headers)

    assert response.status_code == 200
    assert client.post("/api/auth/login", json={**ADMIN, "password": "rotated-pass"}).status_code == 200


def test_non_admin_token_cannot_reset(client, auth_headers):
    user = User(id=99, email="staff@clinic.test", role="SECRETARY", password_hash="")
    headers = {"Authorization": f"Bearer {create_access_token(user)}"}

    response = client.post("/api/auth/reset-admin", json=ADMIN, headers=headers)

    assert response.status_code == 403
    assert response.json() == {"error": "FORBIDDEN"}
