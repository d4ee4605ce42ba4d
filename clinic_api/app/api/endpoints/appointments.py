"""
Appointment endpoints.

Anyone may request an appointment; the request is stored as
``pending`` and a notification line is written in the background.
Listing, reading and updating appointments is restricted to
administrators.  The status only changes through ``PATCH``.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, BackgroundTasks, Depends, status

from ...core.security import require_admin
from ...schemas.appointment import AppointmentCreate, AppointmentUpdate
from ...services.appointment_service import AppointmentService
from ...services.notification_service import NotificationService
from ..deps import get_appointment_service, get_notification_service

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def request_appointment(
    appointment: AppointmentCreate,
    background_tasks: BackgroundTasks,
    appointments: AppointmentService = Depends(get_appointment_service),
    notifier: NotificationService = Depends(get_notification_service),
) -> Dict[str, Any]:
    record = await appointments.create_record(appointment.model_dump(exclude_none=True))
    # Runs after the response is sent; failures are logged, not returned.
    background_tasks.add_task(notifier.appointment_requested, record)
    return {"success": True, "message": "Appointment requested", "id": record["id"]}


@router.get("", response_model=List[Dict[str, Any]])
async def list_appointments(
    current_user: dict = Depends(require_admin),
    appointments: AppointmentService = Depends(get_appointment_service),
) -> List[Dict[str, Any]]:
    return await appointments.list_records()


@router.get("/{appointment_id}")
async def get_appointment(
    appointment_id: str,
    current_user: dict = Depends(require_admin),
    appointments: AppointmentService = Depends(get_appointment_service),
) -> Dict[str, Any]:
    return await appointments.get_record(appointment_id)


@router.patch("/{appointment_id}")
async def update_appointment(
    appointment_id: str,
    updates: AppointmentUpdate,
    current_user: dict = Depends(require_admin),
    appointments: AppointmentService = Depends(get_appointment_service),
) -> Dict[str, Any]:
    """Update the status (``pending``, ``confirmed``, ``cancelled``, ``completed``) or notes."""
    changes = {k: v for k, v in updates.model_dump(mode="json").items() if v is not None}
    return await appointments.update_record(appointment_id, changes, actor=current_user.get("username"))
