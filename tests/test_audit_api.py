from fastapi.testclient import TestClient

from clinic_api.app.services.audit_service import AuditService


def test_admin_actions_are_audited(client: TestClient, admin_headers):
    created = client.post("/api/services", json={"name": "X-Ray"}, headers=admin_headers).json()
    client.delete(f"/api/services/{created['id']}", headers=admin_headers)

    entries = client.get("/api/audit", headers=admin_headers).json()
    actions = [(e["action"], e["object_type"]) for e in entries]
    assert actions[:2] == [("delete", "services"), ("create", "services")]
    assert ("login", "users") in actions
    assert entries[0]["actor"] == "admin"
    assert entries[0]["details"]["removed"]["name"] == "X-Ray"


def test_limit(client: TestClient, admin_headers):
    for i in range(3):
        client.post("/api/services", json={"name": f"S{i}"}, headers=admin_headers)
    assert len(client.get("/api/audit?limit=2", headers=admin_headers).json()) == 2


def test_audit_requires_admin(client: TestClient, staff_headers):
    assert client.get("/api/audit", headers=staff_headers).status_code == 403


def test_record_swallows_failures(tmp_path):
    audit = AuditService(str(tmp_path))
    audit.path.mkdir()
    # The log path is a directory, so the append fails and is only logged.
    audit.record("admin", "create", "services", 1)
    assert audit.path.is_dir()
