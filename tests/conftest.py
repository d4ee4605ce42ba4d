import os
import tempfile

# Must be set before clinic_api.app.main is imported: the module builds
# an app from the environment at import time.
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="clinic-api-tests-"))

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from clinic_api.app.core.config import Settings
from clinic_api.app.main import create_app

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin-pass-123"
STAFF_USERNAME = "reception"
STAFF_PASSWORD = "reception-pass-123"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        secret_key="unit-test-secret",
        data_dir=str(tmp_path / "data"),
        admin_username=ADMIN_USERNAME,
        admin_password=ADMIN_PASSWORD,
        log_file="",
    )


@pytest.fixture
def client(settings: Settings):
    # Entering the context runs the lifespan, which seeds the admin account.
    with TestClient(create_app(settings)) as c:
        yield c


def login(client: TestClient, username: str, password: str) -> str:
    res = client.post("/api/auth/login", json={"username": username, "password": password})
    assert res.status_code == 200, res.text
    return res.json()["token"]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client: TestClient) -> dict:
    return bearer(login(client, ADMIN_USERNAME, ADMIN_PASSWORD))


@pytest.fixture
def staff_headers(client: TestClient, admin_headers: dict) -> dict:
    res = client.post(
        "/api/users",
        json={"username": STAFF_USERNAME, "password": STAFF_PASSWORD, "full_name": "Front Desk"},
        headers=admin_headers,
    )
    assert res.status_code == 201, res.text
    return bearer(login(client, STAFF_USERNAME, STAFF_PASSWORD))
