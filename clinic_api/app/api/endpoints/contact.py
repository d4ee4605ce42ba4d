"""
Public contact form endpoint.

Submissions are stored with status ``new``; staff read and triage them
through ``/api/submissions``.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from ...schemas.contact import ContactSubmissionCreate
from ...services.submission_service import SubmissionService
from ..deps import get_submission_service

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def submit_contact_form(
    submission: ContactSubmissionCreate,
    submissions: SubmissionService = Depends(get_submission_service),
) -> Dict[str, Any]:
    record = await submissions.create_record(submission.model_dump())
    return {"success": True, "message": "Received", "id": record["id"]}
