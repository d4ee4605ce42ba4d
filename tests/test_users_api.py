import json
from pathlib import Path

from fastapi.testclient import TestClient

from conftest import ADMIN_USERNAME, login


def _users_on_disk(settings):
    return json.loads((Path(settings.data_dir) / "users.json").read_text(encoding="utf-8"))["users"]


def test_bootstrap_admin_is_created(client: TestClient, settings):
    users = _users_on_disk(settings)
    assert [u["username"] for u in users] == [ADMIN_USERNAME]
    assert users[0]["role"] == "admin"
    assert "password" not in users[0]
    assert users[0]["password_hash"]


def test_create_user_hashes_password(client: TestClient, admin_headers, settings):
    res = client.post(
        "/api/users",
        json={"username": "nurse", "password": "tempPassword123!", "full_name": "Nurse Joy", "email": "joy@example.com"},
        headers=admin_headers,
    )
    assert res.status_code == 201, res.text
    user = res.json()
    assert user["username"] == "nurse"
    assert user["role"] == "staff"
    assert "password_hash" not in user and "password" not in user

    stored = next(u for u in _users_on_disk(settings) if u["username"] == "nurse")
    assert stored["password_hash"] != "tempPassword123!"
    assert "tempPassword123!" not in json.dumps(stored)
    login(client, "nurse", "tempPassword123!")


def test_list_never_exposes_hashes(client: TestClient, admin_headers):
    users = client.get("/api/users", headers=admin_headers).json()
    assert users
    assert all("password_hash" not in u for u in users)


def test_duplicate_username(client: TestClient, admin_headers):
    res = client.post("/api/users", json={"username": ADMIN_USERNAME, "password": "whatever123"}, headers=admin_headers)
    assert res.status_code == 400
    assert res.json() == {"error": "Username already exists"}


def test_update_rehashes_only_new_password(client: TestClient, admin_headers, settings):
    user_id = client.post(
        "/api/users", json={"username": "doc", "password": "first-password"}, headers=admin_headers
    ).json()["id"]
    before = next(u for u in _users_on_disk(settings) if u["id"] == user_id)["password_hash"]

    res = client.put(f"/api/users/{user_id}", json={"full_name": "Dr. Who", "password": ""}, headers=admin_headers)
    assert res.status_code == 200, res.text
    assert res.json()["full_name"] == "Dr. Who"
    assert next(u for u in _users_on_disk(settings) if u["id"] == user_id)["password_hash"] == before

    res = client.put(f"/api/users/{user_id}", json={"password": "second-password"}, headers=admin_headers)
    assert res.status_code == 200
    login(client, "doc", "second-password")


def test_short_password_on_update(client: TestClient, admin_headers):
    user_id = client.post(
        "/api/users", json={"username": "doc", "password": "first-password"}, headers=admin_headers
    ).json()["id"]
    res = client.put(f"/api/users/{user_id}", json={"password": "short"}, headers=admin_headers)
    assert res.status_code == 400


def test_delete_user(client: TestClient, admin_headers):
    user_id = client.post(
        "/api/users", json={"username": "temp", "password": "temp-password"}, headers=admin_headers
    ).json()["id"]
    res = client.delete(f"/api/users/{user_id}", headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["removed"]["username"] == "temp"
    assert "password_hash" not in res.json()["removed"]
    assert client.get(f"/api/users/{user_id}", headers=admin_headers).status_code == 404
    assert client.delete(f"/api/users/{user_id}", headers=admin_headers).status_code == 404


def test_admin_cannot_delete_self(client: TestClient, admin_headers):
    res = client.delete("/api/users/1", headers=admin_headers)
    assert res.status_code == 400
    assert res.json() == {"error": "Cannot delete your own account"}


def test_renamed_admin_still_cannot_delete_self(client: TestClient, admin_headers):
    client.post(
        "/api/users", json={"username": "second", "password": "second-admin", "role": "admin"}, headers=admin_headers
    )
    res = client.put("/api/users/1", json={"username": "renamed"}, headers=admin_headers)
    assert res.status_code == 200
    res = client.delete("/api/users/1", headers=admin_headers)
    assert res.status_code == 400
    assert res.json() == {"error": "Cannot delete your own account"}


def test_last_admin_cannot_be_demoted(client: TestClient, admin_headers):
    res = client.put("/api/users/1", json={"role": "staff"}, headers=admin_headers)
    assert res.status_code == 400

    client.post(
        "/api/users", json={"username": "second", "password": "second-admin", "role": "admin"}, headers=admin_headers
    )
    res = client.put("/api/users/1", json={"role": "staff"}, headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["role"] == "staff"


def test_users_require_admin(client: TestClient, staff_headers):
    assert client.get("/api/users").status_code == 401
    assert client.get("/api/users", headers=staff_headers).status_code == 403
    assert client.post("/api/users", json={"username": "x", "password": "xxxxxxxx"}, headers=staff_headers).status_code == 403
