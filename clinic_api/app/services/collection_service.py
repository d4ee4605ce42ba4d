"""
Shared CRUD logic for JSON-backed collections.

Every resource (services, blog articles, appointments, contact
submissions, users) follows the same contract:

* **list** returns all records of the collection;
* **get** scans for a record by id and raises ``NotFoundError`` if absent;
* **create** assigns an id, appends the record and saves the collection;
* **update** merges the supplied fields onto an existing record;
* **delete** removes a record and returns it.

Ids are compared as strings so that a path parameter ``"3"`` finds the
record stored with id ``3``.  Numeric collections assign
``max(existing ids) + 1``; subclasses override :meth:`next_id` for other
schemes.  All mutations run inside ``DocumentStore.mutate`` and so
re-read the collection under its lock before writing it back.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..core.errors import NotFoundError
from ..core.store import DocumentStore

if TYPE_CHECKING:
    from .audit_service import AuditService

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


def utc_now() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and ``Z``."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class CollectionService:
    collection: str = ""
    label: str = "Record"

    def __init__(self, store: DocumentStore, audit: Optional[AuditService] = None) -> None:
        self.store = store
        self.audit = audit

    # -- hooks ---------------------------------------------------------

    def next_id(self, records: List[Record]) -> Any:
        # Hand-edited files may hold numeric ids as strings ("3").
        numeric = []
        for r in records:
            value = r.get("id")
            if isinstance(value, bool):
                continue
            try:
                numeric.append(int(str(value)))
            except ValueError:
                continue
        return max(numeric, default=0) + 1

    def prepare_new(self, data: Record, records: List[Record]) -> Record:
        return data

    def prepare_update(self, current: Record, changes: Record, records: List[Record]) -> Record:
        return changes

    def before_delete(self, records: List[Record], record: Record, actor: Optional[str]) -> None:
        pass

    def present(self, record: Record) -> Record:
        """Shape a stored record for API output."""
        return record

    # -- helpers -------------------------------------------------------

    @staticmethod
    def matches(record: Record, record_id: Any) -> bool:
        return str(record.get("id")) == str(record_id)

    def _index_of(self, records: List[Record], record_id: Any) -> int:
        for idx, record in enumerate(records):
            if self.matches(record, record_id):
                return idx
        raise NotFoundError(f"{self.label} not found")

    def _audit(self, actor: Optional[str], action: str, record_id: Any, details: Optional[dict] = None) -> None:
        if self.audit is not None:
            self.audit.record(actor, action, self.collection, record_id, details)

    # -- contract ------------------------------------------------------

    async def list_records(self) -> List[Record]:
        return [self.present(r) for r in self.store.records(self.collection)]

    async def get_record(self, record_id: Any) -> Record:
        for record in self.store.records(self.collection):
            if self.matches(record, record_id):
                return self.present(record)
        raise NotFoundError(f"{self.label} not found")

    async def create_record(self, data: Record, actor: Optional[str] = None) -> Record:
        """Append a new record and return it.

        Any ``id`` in ``data`` is discarded; the collection's id scheme
        always decides.
        """
        fields = dict(data)
        fields.pop("id", None)
        with self.store.mutate(self.collection) as records:
            fields = self.prepare_new(fields, records)
            record = {"id": self.next_id(records), **fields}
            records.append(record)
        logger.info("Created %s %s", self.collection, record["id"])
        self._audit(actor, "create", record["id"])
        return self.present(record)

    async def update_record(self, record_id: Any, changes: Record, actor: Optional[str] = None) -> Record:
        fields = dict(changes)
        fields.pop("id", None)
        with self.store.mutate(self.collection) as records:
            idx = self._index_of(records, record_id)
            fields = self.prepare_update(records[idx], fields, records)
            records[idx] = {**records[idx], **fields}
            record = records[idx]
        logger.info("Updated %s %s", self.collection, record["id"])
        self._audit(actor, "update", record["id"], {"fields": sorted(fields)})
        return self.present(record)

    async def delete_record(self, record_id: Any, actor: Optional[str] = None) -> Record:
        with self.store.mutate(self.collection) as records:
            idx = self._index_of(records, record_id)
            self.before_delete(records, records[idx], actor)
            removed = records.pop(idx)
        logger.info("Deleted %s %s", self.collection, removed["id"])
        removed = self.present(removed)
        self._audit(actor, "delete", removed["id"], {"removed": removed})
        return removed
