"""
Business logic for appointment requests.

Requests arrive from the public booking form and are stored with
status ``pending`` and a ``requested_at`` timestamp.  Staff later change
the status (and optionally attach notes) through ``update_record``.
"""

from typing import Any, Dict, List

from ..schemas.appointment import AppointmentStatus
from .collection_service import CollectionService, utc_now


class AppointmentService(CollectionService):
    collection = "appointments"
    label = "Appointment"

    def prepare_new(self, data: Dict[str, Any], records: List[Dict[str, Any]]) -> Dict[str, Any]:
        data["requested_at"] = utc_now()
        data["status"] = AppointmentStatus.PENDING.value
        return data

    def prepare_update(
        self, current: Dict[str, Any], changes: Dict[str, Any], records: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        changes["updated_at"] = utc_now()
        return changes
