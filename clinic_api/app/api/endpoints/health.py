"""Liveness probe."""

from typing import Dict

from fastapi import APIRouter

from ...services.collection_service import utc_now

router = APIRouter()


@router.get("")
async def health() -> Dict[str, str]:
    return {"status": "ok", "ts": utc_now()}
