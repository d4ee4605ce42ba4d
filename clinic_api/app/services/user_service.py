"""
Business logic for staff accounts.

Passwords are hashed with PBKDF2 before they touch the disk; the stored
record keeps ``password_hash`` only, and :meth:`UserService.present`
strips it from everything returned to callers.  Usernames are unique.
The service refuses changes that would leave the clinic without an
administrator, and an admin cannot delete their own account.
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.errors import UnauthorizedError, ValidationError
from ..core.security import hash_password, verify_password
from ..schemas.user import Role
from .collection_service import CollectionService, utc_now

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


def _admin_ids(records: List[Dict[str, Any]]) -> List[str]:
    return [str(r.get("id")) for r in records if r.get("role") == Role.ADMIN.value]


def _check_unique(records: List[Dict[str, Any]], username: str, exclude_id: Any = None) -> None:
    for r in records:
        if r.get("username") == username and str(r.get("id")) != str(exclude_id):
            raise ValidationError("Username already exists")


class UserService(CollectionService):
    collection = "users"
    label = "User"

    def present(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return {k: v for k, v in record.items() if k not in ("password", "password_hash")}

    def prepare_new(self, data: Dict[str, Any], records: List[Dict[str, Any]]) -> Dict[str, Any]:
        password = data.pop("password", None)
        data.pop("password_hash", None)
        if not password:
            raise ValidationError("Password is required")
        _check_unique(records, data.get("username"))
        now = utc_now()
        data["password_hash"] = hash_password(password)
        data.setdefault("role", Role.STAFF.value)
        data["created_at"] = now
        data["updated_at"] = now
        return data

    def prepare_update(
        self, current: Dict[str, Any], changes: Dict[str, Any], records: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        password = changes.pop("password", None)
        changes.pop("password_hash", None)
        if password:
            if len(password) < MIN_PASSWORD_LENGTH:
                raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
            changes["password_hash"] = hash_password(password)
        if changes.get("username") is not None:
            _check_unique(records, changes["username"], exclude_id=current.get("id"))
        demoted = changes.get("role", current.get("role")) != Role.ADMIN.value
        if demoted and _admin_ids(records) == [str(current.get("id"))]:
            raise ValidationError("Cannot remove the admin role from the last administrator")
        changes["updated_at"] = utc_now()
        return changes

    def before_delete(self, records: List[Dict[str, Any]], record: Dict[str, Any], actor: Optional[str]) -> None:
        if _admin_ids(records) == [str(record.get("id"))]:
            raise ValidationError("Cannot delete the last administrator")

    async def delete_user(self, user_id: Any, current_user: Dict[str, Any]) -> Dict[str, Any]:
        """Delete an account on behalf of ``current_user`` (decoded token claims).

        The caller is identified by the ``id`` claim, so renaming an
        account does not let its owner delete it.
        """
        if str(current_user.get("id")) == str(user_id):
            raise ValidationError("Cannot delete your own account")
        return await self.delete_record(user_id, actor=current_user.get("username"))

    def find_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        """Return the stored record (hash included) or ``None``."""
        for record in self.store.records(self.collection):
            if record.get("username") == username:
                return record
        return None

    async def authenticate(self, username: str, password: str) -> Optional[Dict[str, Any]]:
        """Return the public view of the account if the credentials match."""
        record = self.find_by_username(username)
        if record is None or not verify_password(password, record.get("password_hash")):
            logger.warning("Failed login for %s", username)
            return None
        logger.info("User %s logged in", username)
        return self.present(record)

    async def change_password(self, user_id: Any, current_password: str, new_password: str) -> Dict[str, Any]:
        """Change a user's own password after re-checking the current one."""
        with self.store.mutate(self.collection) as records:
            idx = self._index_of(records, user_id)
            if not verify_password(current_password, records[idx].get("password_hash")):
                raise UnauthorizedError("Current password is incorrect")
            changes = self.prepare_update(records[idx], {"password": new_password}, records)
            records[idx] = {**records[idx], **changes}
            record = records[idx]
        logger.info("User %s changed their password", record.get("username"))
        self._audit(record.get("username"), "change_password", record["id"])
        return self.present(record)

    async def ensure_bootstrap_admin(self, username: str, password: str) -> Optional[Dict[str, Any]]:
        """Create the first administrator when the users collection is empty.

        Returns the created account, or ``None`` when accounts already
        exist or no bootstrap password is configured.
        """
        if self.store.records(self.collection):
            return None
        if not password:
            logger.warning("No user accounts exist and ADMIN_PASSWORD is not set; admin routes are unreachable")
            return None
        user = await self.create_record(
            {"username": username, "password": password, "role": Role.ADMIN.value, "full_name": "Administrator"}
        )
        logger.info("Created bootstrap administrator %s", username)
        return user
