"""
Pydantic models for authentication.
"""

from typing import Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, examples=["admin"])
    password: str = Field(..., min_length=1, examples=["s3cret-pass"])


class UserSummary(BaseModel):
    """Identity returned alongside a freshly issued token."""

    id: int
    username: str
    role: str
    full_name: Optional[str] = None


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    # Lifetime of the token in seconds.
    expires_in: int
    user: UserSummary


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8)
