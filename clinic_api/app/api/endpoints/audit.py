"""
Audit log endpoint (admin only).

Returns the newest audit entries first: logins plus every create,
update and delete performed through the admin API.
"""

from typing import List

from fastapi import APIRouter, Depends, Query

from ...core.security import require_admin
from ...services.audit_service import AuditService
from ..deps import get_audit_service

router = APIRouter()


@router.get("")
async def list_audit_logs(
    limit: int = Query(100, ge=1, le=1000, description="Maximum number of entries to return"),
    current_user: dict = Depends(require_admin),
    audit: AuditService = Depends(get_audit_service),
) -> List[dict]:
    return audit.list_logs(limit=limit)
