import json
import threading
from pathlib import Path

import pytest

from clinic_api.app.core.errors import CorruptDataError
from clinic_api.app.core.store import DocumentStore
from clinic_api.app.services.catalog_service import ServiceCatalogService


def test_missing_file_loads_empty_default(tmp_path: Path):
    store = DocumentStore(str(tmp_path))
    assert store.load("services") == {"services": []}
    assert store.load("blog") == {"articles": []}


def test_empty_file_loads_empty_default(tmp_path: Path):
    (tmp_path / "users.json").write_text("", encoding="utf-8")
    assert DocumentStore(str(tmp_path)).records("users") == []


def test_invalid_json_raises_corrupt_data(tmp_path: Path):
    (tmp_path / "services.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(CorruptDataError):
        DocumentStore(str(tmp_path)).load("services")


def test_legacy_bare_array_is_wrapped(tmp_path: Path):
    (tmp_path / "appointments.json").write_text(json.dumps([{"id": 1, "name": "A"}]), encoding="utf-8")
    assert DocumentStore(str(tmp_path)).load("appointments") == {"appointments": [{"id": 1, "name": "A"}]}


def test_save_writes_wrapping_object(tmp_path: Path):
    store = DocumentStore(str(tmp_path / "nested"))
    store.save("services", {"services": [{"id": 1, "name": "X-Ray"}]})
    on_disk = json.loads((tmp_path / "nested" / "services.json").read_text(encoding="utf-8"))
    assert on_disk == {"services": [{"id": 1, "name": "X-Ray"}]}
    # No temporary files left behind.
    assert [p.name for p in (tmp_path / "nested").iterdir()] == ["services.json"]


def test_mutate_discards_changes_when_block_raises(tmp_path: Path):
    store = DocumentStore(str(tmp_path))
    store.save("services", {"services": [{"id": 1}]})
    with pytest.raises(RuntimeError):
        with store.mutate("services") as records:
            records.append({"id": 2})
            raise RuntimeError("boom")
    assert store.records("services") == [{"id": 1}]


def test_unknown_collection(tmp_path: Path):
    with pytest.raises(KeyError):
        DocumentStore(str(tmp_path)).load("patients")


def test_concurrent_creates_get_unique_ids(tmp_path: Path):
    import asyncio

    store = DocumentStore(str(tmp_path))
    service = ServiceCatalogService(store)

    def worker(n: int) -> None:
        for i in range(10):
            asyncio.run(service.create_record({"name": f"svc-{n}-{i}"}))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    ids = [r["id"] for r in store.records("services")]
    assert len(ids) == 40
    assert sorted(ids) == list(range(1, 41))
