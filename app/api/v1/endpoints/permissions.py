"""Permissions API: catalog list, get, create, delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request

from app.api.v1.dependencies import (
    get_permission_repo,
    get_permission_service,
    require_permission,
)
from app.application.services.permission_service import PermissionService
from app.core.limiter import limit_writes
from app.domain.permissions import PermissionCode
from app.infrastructure.persistence.repositories.permission_repo import (
    PermissionRepository,
)
from app.schemas.permission import PermissionCreate, PermissionResponse

router = APIRouter()


@router.post("", response_model=PermissionResponse, status_code=201)
@limit_writes
async def create_permission(
    request: Request,
    body: PermissionCreate,
    permission_svc: Annotated[PermissionService, Depends(get_permission_service)],
    _: Annotated[
        object, Depends(require_permission(PermissionCode.HR_PERMISSIONS_CREATE))
    ],
):
    """Create a catalog permission (code is resource.action; 409 if taken)."""
    created = await permission_svc.create_permission(
        code=body.code, name=body.name, description=body.description
    )
    return PermissionResponse.model_validate(created)


@router.get("", response_model=list[PermissionResponse])
async def list_permissions(
    permission_repo: Annotated[PermissionRepository, Depends(get_permission_repo)],
    _: Annotated[object, Depends(require_permission(PermissionCode.HR_PERMISSIONS_VIEW))],
    skip: int = 0,
    limit: int = 100,
    resource: str | None = None,
):
    """List catalog permissions ordered by code; resource filters by prefix."""
    perms = await permission_repo.list_permissions(
        skip=skip, limit=limit, resource=resource
    )
    return [PermissionResponse.model_validate(p) for p in perms]


@router.get("/{permission_id}", response_model=PermissionResponse)
async def get_permission(
    permission_id: int,
    permission_repo: Annotated[PermissionRepository, Depends(get_permission_repo)],
    _: Annotated[object, Depends(require_permission(PermissionCode.HR_PERMISSIONS_VIEW))],
):
    perm = await permission_repo.get_permission(permission_id)
    if not perm:
        raise HTTPException(status_code=404, detail="Permission not found")
    return PermissionResponse.model_validate(perm)


@router.delete("/{permission_id}", status_code=204)
@limit_writes
async def delete_permission(
    request: Request,
    permission_id: int,
    permission_svc: Annotated[PermissionService, Depends(get_permission_service)],
    _: Annotated[
        object, Depends(require_permission(PermissionCode.HR_PERMISSIONS_DELETE))
    ],
):
    """Delete a permission and every grant of it."""
    await permission_svc.delete_permission(permission_id)
