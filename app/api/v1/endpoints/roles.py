"""Roles API: list, get, create, update, and role-permission grants."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request

from app.api.v1.dependencies import (
    get_role_repo,
    get_role_service,
    require_permission,
)
from app.application.dtos.user import UserResult
from app.application.services.role_service import RoleService
from app.core.limiter import limit_writes
from app.domain.permissions import PermissionCode
from app.infrastructure.persistence.repositories.role_repo import RoleRepository
from app.schemas.permission import PermissionResponse
from app.schemas.role import (
    RoleCreateRequest,
    RolePermissionAssign,
    RoleResponse,
    RoleUpdate,
)

router = APIRouter()


@router.post("", response_model=RoleResponse, status_code=201)
@limit_writes
async def create_role(
    request: Request,
    body: RoleCreateRequest,
    role_svc: Annotated[RoleService, Depends(get_role_service)],
    current_user: Annotated[
        UserResult, Depends(require_permission(PermissionCode.HR_ROLES_CREATE))
    ],
):
    """Create a role. Optionally grant permissions by code (unknown code -> 400)."""
    created = await role_svc.create_role_with_permissions(
        code=body.code,
        name=body.name,
        description=body.description,
        permission_codes=body.permission_codes,
        granted_by=current_user.id,
    )
    return RoleResponse.model_validate(created)


@router.get("", response_model=list[RoleResponse])
async def list_roles(
    role_repo: Annotated[RoleRepository, Depends(get_role_repo)],
    _: Annotated[object, Depends(require_permission(PermissionCode.HR_ROLES_VIEW))],
    skip: int = 0,
    limit: int = 100,
    include_inactive: bool = False,
):
    """List roles (paginated)."""
    roles = await role_repo.list_roles(
        skip=skip, limit=limit, include_inactive=include_inactive
    )
    return [RoleResponse.model_validate(r) for r in roles]


@router.get("/{role_id}", response_model=RoleResponse)
async def get_role(
    role_id: int,
    role_repo: Annotated[RoleRepository, Depends(get_role_repo)],
    _: Annotated[object, Depends(require_permission(PermissionCode.HR_ROLES_VIEW))],
):
    """Get role by id."""
    role = await role_repo.get_role(role_id)
    if not role:
        raise HTTPException(status_code=404, detail="Role not found")
    return RoleResponse.model_validate(role)


@router.patch("/{role_id}", response_model=RoleResponse)
@limit_writes
async def update_role(
    request: Request,
    role_id: int,
    body: RoleUpdate,
    role_svc: Annotated[RoleService, Depends(get_role_service)],
    _: Annotated[object, Depends(require_permission(PermissionCode.HR_ROLES_UPDATE))],
):
    """Update role (name, description, is_active). Deactivation applies to all holders."""
    updated = await role_svc.update_role(
        role_id,
        name=body.name,
        description=body.description,
        is_active=body.is_active,
    )
    return RoleResponse.model_validate(updated)


@router.get("/{role_id}/permissions", response_model=list[PermissionResponse])
async def list_role_permissions(
    role_id: int,
    role_svc: Annotated[RoleService, Depends(get_role_service)],
    _: Annotated[
        object, Depends(require_permission(PermissionCode.HR_ROLE_PERMISSIONS_VIEW))
    ],
):
    """List permissions granted to a role."""
    perms = await role_svc.get_role_permissions(role_id)
    return [PermissionResponse.model_validate(p) for p in perms]


@router.post(
    "/{role_id}/permissions", response_model=PermissionResponse, status_code=201
)
@limit_writes
async def grant_role_permission(
    request: Request,
    role_id: int,
    body: RolePermissionAssign,
    role_svc: Annotated[RoleService, Depends(get_role_service)],
    current_user: Annotated[
        UserResult,
        Depends(require_permission(PermissionCode.HR_ROLE_PERMISSIONS_CREATE)),
    ],
):
    """Grant a catalog permission to a role (409 if already granted)."""
    perm = await role_svc.grant_permission(
        role_id, body.permission_code, granted_by=current_user.id
    )
    return PermissionResponse.model_validate(perm)


@router.delete("/{role_id}/permissions/{permission_id}", status_code=204)
@limit_writes
async def revoke_role_permission(
    request: Request,
    role_id: int,
    permission_id: int,
    role_svc: Annotated[RoleService, Depends(get_role_service)],
    _: Annotated[
        object, Depends(require_permission(PermissionCode.HR_ROLE_PERMISSIONS_DELETE))
    ],
):
    """Remove a grant from a role (404 if not granted)."""
    await role_svc.revoke_permission(role_id, permission_id)
