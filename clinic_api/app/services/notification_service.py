"""
Notifications about new appointment requests.

Every appointment is logged as one line in ``<data_dir>/appointments.log``
so front-desk staff can follow incoming requests.  The endpoint
schedules :meth:`NotificationService.appointment_requested` as a
background task; failures are logged and never reach the client.
"""

import logging
from pathlib import Path
from typing import Any, Dict

from .collection_service import utc_now

logger = logging.getLogger(__name__)

APPOINTMENT_LOG_FILENAME = "appointments.log"


class NotificationService:
    def __init__(self, data_dir: str) -> None:
        self.appointment_log = Path(data_dir) / APPOINTMENT_LOG_FILENAME

    def appointment_requested(self, appointment: Dict[str, Any]) -> None:
        line = (
            f"[{utc_now()}] Appointment id={appointment.get('id')} "
            f"name={appointment.get('name')} email={appointment.get('email')} "
            f"phone={appointment.get('phone')}\n"
        )
        try:
            with self.appointment_log.open("a", encoding="utf-8") as f:
                f.write(line)
        except OSError:
            logger.exception("Failed to write %s", self.appointment_log)
            return
        logger.info("Appointment %s requested by %s", appointment.get("id"), appointment.get("email"))
