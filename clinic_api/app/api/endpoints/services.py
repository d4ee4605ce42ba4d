"""
Clinic service catalogue endpoints.

Listing and reading services is public (the marketing site renders
them); creating, updating and deleting require an administrator.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from ...core.security import require_admin
from ...schemas.service import ServiceCreate, ServiceUpdate
from ...services.catalog_service import ServiceCatalogService
from ..deps import get_catalog_service

router = APIRouter()


@router.get("", response_model=List[Dict[str, Any]])
async def list_services(catalog: ServiceCatalogService = Depends(get_catalog_service)) -> List[Dict[str, Any]]:
    return await catalog.list_records()


@router.get("/{service_id}")
async def get_service(
    service_id: str,
    catalog: ServiceCatalogService = Depends(get_catalog_service),
) -> Dict[str, Any]:
    return await catalog.get_record(service_id)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_service(
    service: ServiceCreate,
    current_user: dict = Depends(require_admin),
    catalog: ServiceCatalogService = Depends(get_catalog_service),
) -> Dict[str, Any]:
    """Create a service.  The response is the stored record including its new ``id``."""
    return await catalog.create_record(service.model_dump(exclude_unset=True), actor=current_user.get("username"))


@router.put("/{service_id}")
async def update_service(
    service_id: str,
    updates: ServiceUpdate,
    current_user: dict = Depends(require_admin),
    catalog: ServiceCatalogService = Depends(get_catalog_service),
) -> Dict[str, Any]:
    """Merge the supplied fields onto a service; unspecified fields remain unchanged.

    Explicit nulls are dropped so a service never loses its name or title.
    """
    changes = {k: v for k, v in updates.model_dump(exclude_unset=True).items() if v is not None}
    return await catalog.update_record(service_id, changes, actor=current_user.get("username"))


@router.delete("/{service_id}")
async def delete_service(
    service_id: str,
    current_user: dict = Depends(require_admin),
    catalog: ServiceCatalogService = Depends(get_catalog_service),
) -> Dict[str, Any]:
    removed = await catalog.delete_record(service_id, actor=current_user.get("username"))
    return {"success": True, "removed": removed}
