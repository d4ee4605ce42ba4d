"""
Contact submission endpoints (admin only).
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from ...core.security import require_admin
from ...schemas.contact import SubmissionUpdate
from ...services.submission_service import SubmissionService
from ..deps import get_submission_service

router = APIRouter()


@router.get("", response_model=List[Dict[str, Any]])
async def list_submissions(
    current_user: dict = Depends(require_admin),
    submissions: SubmissionService = Depends(get_submission_service),
) -> List[Dict[str, Any]]:
    return await submissions.list_records()


@router.get("/{submission_id}")
async def get_submission(
    submission_id: str,
    current_user: dict = Depends(require_admin),
    submissions: SubmissionService = Depends(get_submission_service),
) -> Dict[str, Any]:
    return await submissions.get_record(submission_id)


@router.patch("/{submission_id}")
async def update_submission(
    submission_id: str,
    updates: SubmissionUpdate,
    current_user: dict = Depends(require_admin),
    submissions: SubmissionService = Depends(get_submission_service),
) -> Dict[str, Any]:
    """Change the triage status of a submission (``new``, ``read`` or ``archived``)."""
    changes = {k: v for k, v in updates.model_dump(mode="json").items() if v is not None}
    return await submissions.update_record(submission_id, changes, actor=current_user.get("username"))
