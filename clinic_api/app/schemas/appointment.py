"""
Pydantic models for appointment requests.

Appointments are requested anonymously from the public site and start
in the ``pending`` state.  Staff move them to ``confirmed``,
``cancelled`` or ``completed`` through the admin update endpoint; the
status is never inferred.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class AppointmentCreate(BaseModel):
    name: str = Field(..., min_length=1, examples=["Jane Doe"])
    email: str = Field(..., min_length=1, examples=["jane@example.com"])
    phone: str = Field(..., min_length=1, examples=["5551234567"])
    message: str = Field(..., min_length=1, examples=["Follow-up for my blood test"])
    service: Optional[str] = None
    preferred_date: Optional[str] = None


class AppointmentUpdate(BaseModel):
    """Admin update of an appointment.  Omitted fields are left unchanged."""

    status: Optional[AppointmentStatus] = None
    notes: Optional[str] = None
