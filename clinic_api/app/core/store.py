"""
JSON document store.

Each collection (services, blog articles, appointments, contact
submissions, users) lives in its own JSON file as an object wrapping a
single array of records, e.g. ``{"services": [...]}``.  Files are always
read and written whole: there is no cache and no partial update, so the
store is consistent with the last successful write.

Mutations go through :meth:`DocumentStore.mutate`, which holds a
per-collection lock for the full read-modify-write cycle.  Two requests
creating records concurrently therefore cannot compute the same next id
or overwrite each other's changes.  The locks are in-process only; run a
single worker per data directory.
"""

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List

from .errors import CorruptDataError, StorageUnavailableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollectionSpec:
    filename: str
    key: str


COLLECTIONS: Dict[str, CollectionSpec] = {
    "services": CollectionSpec("services.json", "services"),
    "blog": CollectionSpec("blog.json", "articles"),
    "appointments": CollectionSpec("appointments.json", "appointments"),
    "submissions": CollectionSpec("contact_submissions.json", "submissions"),
    "users": CollectionSpec("users.json", "users"),
}


class DocumentStore:
    """Load and save whole-collection JSON documents under ``data_dir``."""

    def __init__(self, data_dir: str) -> None:
        self.data_dir = Path(data_dir)
        self._locks: Dict[str, threading.RLock] = {name: threading.RLock() for name in COLLECTIONS}

    @staticmethod
    def spec(collection: str) -> CollectionSpec:
        try:
            return COLLECTIONS[collection]
        except KeyError:
            raise KeyError(f"Unknown collection '{collection}'") from None

    def path(self, collection: str) -> Path:
        return self.data_dir / self.spec(collection).filename

    def ensure_data_dir(self) -> None:
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageUnavailableError(f"Cannot create data directory {self.data_dir}: {e}") from e

    def load(self, collection: str) -> Dict[str, List[Dict[str, Any]]]:
        """Read a collection document from disk.

        Parameters
        ----------
        collection : str
            Collection name, one of ``COLLECTIONS``.

        Returns
        -------
        dict
            ``{key: [records...]}``.  An absent or empty file yields an
            empty list under the collection key.  A legacy file holding a
            bare JSON array is wrapped under the key.

        Raises
        ------
        CorruptDataError
            If the file is not valid JSON or has an unexpected shape.
        StorageUnavailableError
            If the file exists but cannot be read.
        """
        spec = self.spec(collection)
        path = self.path(collection)
        if not path.exists():
            return {spec.key: []}
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error("Error reading %s: %s", path, e)
            raise StorageUnavailableError(f"Cannot read {collection}") from e
        if not raw.strip():
            return {spec.key: []}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("Corrupt JSON in %s: %s", path, e)
            raise CorruptDataError(f"Stored {collection} data is not valid JSON") from e

        if isinstance(data, list):
            return {spec.key: data}
        if not isinstance(data, dict) or not isinstance(data.get(spec.key, []), list):
            raise CorruptDataError(f"Stored {collection} data has an unexpected shape")
        data.setdefault(spec.key, [])
        return data

    def save(self, collection: str, document: Dict[str, Any]) -> None:
        """Overwrite a collection document.

        The JSON is written to a temporary file next to the target and
        then moved into place, so readers never observe a half-written
        file.
        """
        path = self.path(collection)
        self.ensure_data_dir()
        temp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="w", dir=path.parent, prefix=f".{path.name}.", delete=False, encoding="utf-8"
            ) as tf:
                json.dump(document, tf, indent=2, ensure_ascii=False)
                temp_path = Path(tf.name)
            os.replace(temp_path, path)
        except OSError as e:
            logger.error("Error writing %s: %s", path, e)
            if temp_path is not None and temp_path.exists():
                temp_path.unlink()
            raise StorageUnavailableError(f"Cannot write {collection}") from e

    def records(self, collection: str) -> List[Dict[str, Any]]:
        return self.load(collection)[self.spec(collection).key]

    @contextmanager
    def mutate(self, collection: str) -> Iterator[List[Dict[str, Any]]]:
        """Read-modify-write a collection under its lock.

        Yields the live list of records.  The document is saved when the
        ``with`` block exits normally; if the block raises, nothing is
        written.
        """
        spec = self.spec(collection)
        with self._locks[collection]:
            document = self.load(collection)
            yield document[spec.key]
            self.save(collection, document)
