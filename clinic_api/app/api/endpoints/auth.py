"""
Authentication endpoints.

``POST /api/auth/login`` exchanges a username and password for a bearer
token valid for ``ACCESS_TOKEN_EXPIRE_MINUTES`` (six hours by default).
Tokens are not refreshed; clients log in again once theirs expires.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from ...core.config import Settings
from ...core.errors import UnauthorizedError
from ...core.security import create_access_token, get_current_user, get_settings
from ...schemas.auth import ChangePasswordRequest, LoginRequest, TokenResponse, UserSummary
from ...services.audit_service import AuditService
from ...services.user_service import UserService
from ..deps import get_audit_service, get_user_service

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
async def login(
    credentials: LoginRequest,
    users: UserService = Depends(get_user_service),
    audit: AuditService = Depends(get_audit_service),
    settings: Settings = Depends(get_settings),
) -> TokenResponse:
    """Authenticate a staff member and return a signed token.

    Wrong usernames and wrong passwords get the same 401 response so the
    endpoint does not reveal which accounts exist.
    """
    user = await users.authenticate(credentials.username, credentials.password)
    if not user:
        raise UnauthorizedError("Invalid credentials")
    token = create_access_token(
        {"sub": user["username"], "id": user["id"], "username": user["username"], "role": user["role"]},
        settings.secret_key,
        settings.access_token_expire_minutes,
    )
    audit.record(user["username"], "login", "users", user["id"])
    return TokenResponse(
        token=token,
        expires_in=settings.access_token_expire_minutes * 60,
        user=UserSummary(
            id=user["id"], username=user["username"], role=user["role"], full_name=user.get("full_name")
        ),
    )


@router.get("/me")
async def read_current_user(current_user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    """Return the claims of the presented token."""
    return current_user


@router.post("/change-password")
async def change_password(
    body: ChangePasswordRequest,
    current_user: Dict[str, Any] = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    await users.change_password(current_user.get("id"), body.current_password, body.new_password)
    return {"success": True}
