"""
Staff account endpoints (admin only).

Passwords are accepted on create and update but never returned; the
responses use ``UserRead``, which has no password field.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from ...core.security import require_admin
from ...schemas.user import UserCreate, UserRead, UserUpdate
from ...services.user_service import UserService
from ..deps import get_user_service

router = APIRouter()


@router.get("", response_model=List[UserRead])
async def list_users(
    current_user: dict = Depends(require_admin),
    users: UserService = Depends(get_user_service),
) -> List[dict]:
    return await users.list_records()


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    user: UserCreate,
    current_user: dict = Depends(require_admin),
    users: UserService = Depends(get_user_service),
) -> dict:
    """Create a staff account.  Usernames must be unique."""
    return await users.create_record(user.model_dump(mode="json", exclude_none=True), actor=current_user.get("username"))


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: str,
    current_user: dict = Depends(require_admin),
    users: UserService = Depends(get_user_service),
) -> dict:
    return await users.get_record(user_id)


@router.put("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: str,
    updates: UserUpdate,
    current_user: dict = Depends(require_admin),
    users: UserService = Depends(get_user_service),
) -> dict:
    """Update profile fields, role or password.

    The password is re-hashed only when a non-empty one is supplied.
    Demoting the last administrator is rejected with 400.
    """
    changes = {k: v for k, v in updates.model_dump(mode="json").items() if v is not None}
    return await users.update_record(user_id, changes, actor=current_user.get("username"))


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    current_user: dict = Depends(require_admin),
    users: UserService = Depends(get_user_service),
) -> dict:
    """Remove an account from the active set.

    An admin cannot delete their own account, and the last administrator
    cannot be deleted.  The removed record is kept in the audit log.
    """
    removed = await users.delete_user(user_id, current_user)
    return {"success": True, "removed": removed}
