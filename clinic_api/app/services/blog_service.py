"""
Business logic for blog articles.

Unlike the other collections, articles use string ids of the form
``post-<12 hex chars>``.  They are always generated here, never taken
from the client, so links to an article stay stable and unique.
"""

import uuid
from typing import Any, Dict, List

from .collection_service import CollectionService, utc_now


class BlogService(CollectionService):
    collection = "blog"
    label = "Article"

    def next_id(self, records: List[Dict[str, Any]]) -> str:
        taken = {str(r.get("id")) for r in records}
        while True:
            candidate = f"post-{uuid.uuid4().hex[:12]}"
            if candidate not in taken:
                return candidate

    def prepare_new(self, data: Dict[str, Any], records: List[Dict[str, Any]]) -> Dict[str, Any]:
        if not data.get("created_at"):
            data["created_at"] = utc_now()
        return data

    def prepare_update(
        self, current: Dict[str, Any], changes: Dict[str, Any], records: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        changes["updated_at"] = utc_now()
        return changes
