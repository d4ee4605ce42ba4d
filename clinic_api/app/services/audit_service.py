"""
Audit service for recording and querying admin actions.

Entries are appended as JSON lines to ``<data_dir>/audit.log``.  Each
line records who did what to which object, e.g.::

    {"timestamp": "...", "actor": "admin", "action": "delete",
     "object_type": "services", "object_id": 3, "details": {...}}

Writing an audit entry is a side effect: ``record`` never raises, so a
full disk or a permission problem cannot fail the request that
triggered it.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core.errors import StorageUnavailableError
from .collection_service import utc_now

logger = logging.getLogger(__name__)

AUDIT_FILENAME = "audit.log"


class AuditService:
    """Append-only audit trail stored next to the collection documents."""

    def __init__(self, data_dir: str) -> None:
        self.path = Path(data_dir) / AUDIT_FILENAME
        self._lock = threading.Lock()

    def log(
        self,
        actor: Optional[str],
        action: str,
        object_type: str,
        object_id: Any = None,
        details: Optional[dict] = None,
    ) -> None:
        """Append one audit entry.

        Parameters
        ----------
        actor : Optional[str]
            Username of the caller, ``None`` for anonymous or system actions.
        action : str
            Short verb such as ``"create"``, ``"update"``, ``"delete"``
            or ``"login"``.
        object_type : str
            Collection the action applies to.
        object_id : Any
            Id of the affected record, if any.
        details : Optional[dict]
            Extra structured data.  Must be JSON serializable.
        """
        entry = {
            "timestamp": utc_now(),
            "actor": actor,
            "action": action,
            "object_type": object_type,
            "object_id": object_id,
            "details": details,
        }
        line = json.dumps(entry, ensure_ascii=False, default=str)
        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")

    def record(self, *args: Any, **kwargs: Any) -> None:
        """Like ``log`` but swallows (and logs) any failure."""
        try:
            self.log(*args, **kwargs)
        except Exception:
            logger.exception("Failed to write audit entry")

    def list_logs(self, limit: int = 100) -> List[Dict[str, Any]]:
        """Return up to ``limit`` entries, newest first.

        Lines that are not valid JSON are skipped with a warning.
        """
        if not self.path.exists():
            return []
        try:
            with self._lock:
                lines = self.path.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            logger.error("Error reading %s: %s", self.path, e)
            raise StorageUnavailableError("Cannot read audit log") from e
        entries: List[Dict[str, Any]] = []
        for line in reversed(lines):
            if len(entries) >= limit:
                break
            if not line.strip():
                continue
            try:
                entries.append(json.loads(line))
            except json.JSONDecodeError:
                logger.warning("Skipping malformed audit line in %s", self.path)
        return entries
