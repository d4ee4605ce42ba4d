"""
Business logic for contact form submissions.
"""

from typing import Any, Dict, List

from ..schemas.contact import SubmissionStatus
from .collection_service import CollectionService, utc_now


class SubmissionService(CollectionService):
    collection = "submissions"
    label = "Submission"

    def prepare_new(self, data: Dict[str, Any], records: List[Dict[str, Any]]) -> Dict[str, Any]:
        data["submitted_at"] = utc_now()
        data["status"] = SubmissionStatus.NEW.value
        return data
