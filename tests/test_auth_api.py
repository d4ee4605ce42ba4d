import time

from fastapi.testclient import TestClient

from clinic_api.app.core.security import create_access_token, decode_access_token
from conftest import ADMIN_PASSWORD, ADMIN_USERNAME, bearer, login


def test_login_returns_decodable_token(client: TestClient, settings):
    res = client.post("/api/auth/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert res.status_code == 200, res.text
    body = res.json()
    assert body["token_type"] == "bearer"
    assert body["expires_in"] == 6 * 60 * 60
    assert body["user"]["username"] == ADMIN_USERNAME
    assert body["user"]["role"] == "admin"
    assert "password_hash" not in body["user"]

    claims = decode_access_token(body["token"], settings.secret_key)
    assert claims["username"] == ADMIN_USERNAME
    assert claims["role"] == "admin"


def test_wrong_password_is_rejected(client: TestClient):
    res = client.post("/api/auth/login", json={"username": ADMIN_USERNAME, "password": "wrongpassword"})
    assert res.status_code == 401
    assert res.json() == {"error": "Invalid credentials"}
    assert "token" not in res.json()


def test_unknown_user_is_rejected(client: TestClient):
    res = client.post("/api/auth/login", json={"username": "nobody", "password": "whatever"})
    assert res.status_code == 401


def test_login_requires_fields(client: TestClient):
    res = client.post("/api/auth/login", json={"username": ADMIN_USERNAME})
    assert res.status_code == 400
    assert "password" in res.json()["error"]


def test_admin_route_without_token(client: TestClient):
    res = client.get("/api/appointments")
    assert res.status_code == 401
    assert res.json() == {"error": "Token missing"}
    assert res.headers["www-authenticate"] == "Bearer"


def test_admin_route_with_garbage_token(client: TestClient):
    res = client.get("/api/appointments", headers=bearer("not-a-token"))
    assert res.status_code == 401


def test_admin_route_with_staff_token(client: TestClient, staff_headers):
    res = client.get("/api/appointments", headers=staff_headers)
    assert res.status_code == 403
    assert res.json() == {"error": "Forbidden"}


def test_expired_token_is_rejected(client: TestClient, settings):
    issued = time.time() - (6 * 60 * 60 + 1)
    token = create_access_token(
        {"sub": ADMIN_USERNAME, "id": 1, "username": ADMIN_USERNAME, "role": "admin"},
        settings.secret_key,
        settings.access_token_expire_minutes,
        now=issued,
    )
    res = client.get("/api/users", headers=bearer(token))
    assert res.status_code == 401
    assert res.json() == {"error": "Token expired"}


def test_me_returns_claims(client: TestClient, admin_headers):
    res = client.get("/api/auth/me", headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["username"] == ADMIN_USERNAME


def test_change_password(client: TestClient, admin_headers):
    res = client.post(
        "/api/auth/change-password",
        json={"current_password": "not-it", "new_password": "brand-new-pass"},
        headers=admin_headers,
    )
    assert res.status_code == 401

    res = client.post(
        "/api/auth/change-password",
        json={"current_password": ADMIN_PASSWORD, "new_password": "brand-new-pass"},
        headers=admin_headers,
    )
    assert res.status_code == 200, res.text

    login(client, ADMIN_USERNAME, "brand-new-pass")
    res = client.post("/api/auth/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert res.status_code == 401


def test_health(client: TestClient):
    res = client.get("/api/health")
    assert res.status_code == 200
    assert res.json()["status"] == "ok"
    assert res.json()["ts"].endswith("Z")
