"""
Pydantic models for staff accounts.

``password`` is accepted on input only; the stored record keeps a
salted hash under ``password_hash`` and ``UserRead`` never exposes it.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Role(str, Enum):
    ADMIN = "admin"
    STAFF = "staff"


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, examples=["reception"])
    password: str = Field(..., min_length=8, examples=["tempPassword123!"])
    role: Role = Role.STAFF
    full_name: Optional[str] = Field(None, examples=["Front Desk"])
    email: Optional[str] = None


class UserUpdate(BaseModel):
    """All fields optional; a password is re-hashed only when supplied."""

    username: Optional[str] = Field(None, min_length=1)
    # An empty string means "keep the current password".
    password: Optional[str] = None
    role: Optional[Role] = None
    full_name: Optional[str] = None
    email: Optional[str] = None


class UserRead(BaseModel):
    id: int
    username: str
    role: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
