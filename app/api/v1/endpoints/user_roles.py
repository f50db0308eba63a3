"""User-roles API: list roles for user (including /me/roles), assign/remove role."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request

from app.api.v1.dependencies import (
    get_current_user,
    get_role_service,
    get_user_repo,
    require_permission,
)
from app.application.dtos.user import UserResult
from app.application.services.role_service import RoleService
from app.core.limiter import limit_writes
from app.domain.permissions import PermissionCode
from app.infrastructure.persistence.repositories.user_repo import UserRepository
from app.schemas.user import UserRoleResponse

router = APIRouter()


@router.get("/me/roles", response_model=list[UserRoleResponse])
async def list_my_roles(
    current_user: Annotated[UserResult, Depends(get_current_user)],
    role_svc: Annotated[RoleService, Depends(get_role_service)],
):
    """List roles assigned to the current authenticated user."""
    roles = await role_svc.get_user_roles(current_user.id)
    return [UserRoleResponse.model_validate(r) for r in roles]


@router.get("/{user_id}/roles", response_model=list[UserRoleResponse])
async def list_user_roles(
    user_id: int,
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    role_svc: Annotated[RoleService, Depends(get_role_service)],
    _: Annotated[
        object, Depends(require_permission(PermissionCode.HR_USER_ROLES_VIEW))
    ],
):
    """List roles assigned to a user. Returns 404 if user does not exist."""
    if not await user_repo.get_user(user_id):
        raise HTTPException(status_code=404, detail="User not found")
    roles = await role_svc.get_user_roles(user_id)
    return [UserRoleResponse.model_validate(r) for r in roles]


@router.post("/{user_id}/roles/{role_id}", status_code=204)
@limit_writes
async def assign_role_to_user(
    request: Request,
    user_id: int,
    role_id: int,
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    role_svc: Annotated[RoleService, Depends(get_role_service)],
    current_user: Annotated[
        UserResult, Depends(require_permission(PermissionCode.HR_USER_ROLES_CREATE))
    ],
):
    """Assign role to user (409 if already held). Invalidates the user's cached permissions."""
    if not await user_repo.get_user(user_id):
        raise HTTPException(status_code=404, detail="User not found")
    await role_svc.assign_role(user_id, role_id, assigned_by=current_user.id)


@router.delete("/{user_id}/roles/{role_id}", status_code=204)
@limit_writes
async def remove_role_from_user(
    request: Request,
    user_id: int,
    role_id: int,
    role_svc: Annotated[RoleService, Depends(get_role_service)],
    _: Annotated[
        object, Depends(require_permission(PermissionCode.HR_USER_ROLES_DELETE))
    ],
):
    """Remove role from user (404 if not held)."""
    await role_svc.revoke_role(user_id, role_id)
