"""Org structure API: scoped unit listing, tree views and structural writes.

Every read is restricted to the units the caller may see: all units for
the full tier, the managed subtrees for the unit tier, and the caller's
own assigned units otherwise.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from app.api.v1.dependencies import (
    get_authorization_service,
    get_current_user,
    get_org_hierarchy,
    get_org_structure_service,
    get_org_unit_repo,
    require_permission,
    require_scope,
)
from app.application.dtos.org_unit import OrgUnitCreate as OrgUnitCreateData
from app.application.dtos.user import UserResult
from app.application.services.authorization_service import AuthorizationService
from app.application.services.org_hierarchy_service import OrgHierarchyService
from app.application.services.org_structure_service import OrgStructureService
from app.core.limiter import limit_writes
from app.domain.access_scope import AccessScope
from app.domain.enums import AccessTier, OrgUnitStatus
from app.domain.exceptions import AuthorizationException
from app.domain.permissions import PermissionCode, resource_of
from app.infrastructure.persistence.repositories.org_unit_repo import OrgUnitRepository
from app.schemas.org_unit import (
    OrgTreeNode,
    OrgUnitCreate,
    OrgUnitIdsResponse,
    OrgUnitResponse,
    OrgUnitStatusUpdate,
    OrgUnitUpdate,
)

router = APIRouter()


async def _require_visible(
    auth_svc: AuthorizationService, user_id: int, unit_id: int
) -> frozenset[int] | None:
    visible = await auth_svc.visible_unit_ids(user_id)
    if visible is not None and unit_id not in visible:
        raise AuthorizationException(
            permission_code=PermissionCode.ORG_UNIT_READ.value, target_unit_id=unit_id
        )
    return visible


async def _require_parent(
    auth_svc: AuthorizationService,
    user_id: int,
    code: PermissionCode,
    parent_id: int | None,
) -> None:
    """Placing a unit under parent_id needs parent_id in scope; top level needs full scope."""
    if parent_id is not None:
        await auth_svc.require(user_id, code, target_unit_id=parent_id)
        return
    scope = await auth_svc.resolve_scope(user_id, resource_of(code.value))
    if scope.tier is not AccessTier.FULL:
        raise AuthorizationException(permission_code=code.value)


@router.get("/units", response_model=list[OrgUnitResponse])
async def list_units(
    scope: Annotated[AccessScope, Depends(require_scope(PermissionCode.ORG_UNIT_READ))],
    unit_repo: Annotated[OrgUnitRepository, Depends(get_org_unit_repo)],
    search: Annotated[str | None, Query(max_length=100)] = None,
    unit_type: Annotated[str | None, Query(alias="type")] = None,
    status: OrgUnitStatus | None = None,
    parent_id: int | None = None,
    include_deleted: bool = False,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    """List units in the caller's scope. Search matches name or code."""
    units = await unit_repo.list_units(
        scope,
        search=search,
        unit_type=unit_type,
        status=status.value if status else None,
        parent_id=parent_id,
        include_deleted=include_deleted,
        skip=skip,
        limit=limit,
    )
    return [OrgUnitResponse.model_validate(u) for u in units]


@router.get("/units/tree", response_model=list[OrgTreeNode])
async def get_tree(
    current_user: Annotated[
        UserResult, Depends(require_permission(PermissionCode.HR_ORG_TREE_VIEW))
    ],
    auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    hierarchy: Annotated[OrgHierarchyService, Depends(get_org_hierarchy)],
):
    """Nested tree of the units the caller may see (non-deleted units only)."""
    tree = await hierarchy.load_tree()
    visible = await auth_svc.visible_unit_ids(current_user.id)
    return OrgTreeNode.from_tree(tree.build_tree(within=visible))


@router.get("/user-units", response_model=list[OrgUnitResponse])
async def list_user_units(
    current_user: Annotated[UserResult, Depends(get_current_user)],
    auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    unit_repo: Annotated[OrgUnitRepository, Depends(get_org_unit_repo)],
):
    """Units accessible to the current user (no permission needed beyond login)."""
    scope = await auth_svc.resolve_accessible_units(current_user.id)
    units = await unit_repo.list_units(scope, limit=10_000)
    return [OrgUnitResponse.model_validate(u) for u in units]


@router.get("/units/{unit_id}", response_model=OrgUnitResponse)
async def get_unit(
    unit_id: int,
    current_user: Annotated[
        UserResult, Depends(require_permission(PermissionCode.ORG_UNIT_READ))
    ],
    auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    unit_repo: Annotated[OrgUnitRepository, Depends(get_org_unit_repo)],
):
    await _require_visible(auth_svc, current_user.id, unit_id)
    unit = await unit_repo.get_unit(unit_id)
    if not unit:
        raise HTTPException(status_code=404, detail="Org unit not found")
    return OrgUnitResponse.model_validate(unit)


@router.get("/units/{unit_id}/children", response_model=OrgUnitIdsResponse)
async def get_children(
    unit_id: int,
    current_user: Annotated[
        UserResult, Depends(require_permission(PermissionCode.ORG_UNIT_READ))
    ],
    auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    hierarchy: Annotated[OrgHierarchyService, Depends(get_org_hierarchy)],
):
    """Direct children of a unit, limited to visible units."""
    visible = await _require_visible(auth_svc, current_user.id, unit_id)
    children = await hierarchy.children_of(unit_id)
    if visible is not None:
        children &= visible
    return OrgUnitIdsResponse(unit_id=unit_id, unit_ids=sorted(children))


@router.get("/units/{unit_id}/descendants", response_model=OrgUnitIdsResponse)
async def get_descendants(
    unit_id: int,
    current_user: Annotated[
        UserResult, Depends(require_permission(PermissionCode.ORG_UNIT_READ))
    ],
    auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    hierarchy: Annotated[OrgHierarchyService, Depends(get_org_hierarchy)],
):
    """Subtree of a unit (the unit included), limited to visible units."""
    visible = await _require_visible(auth_svc, current_user.id, unit_id)
    descendants = await hierarchy.descendants_of(unit_id)
    if visible is not None:
        descendants &= visible
    return OrgUnitIdsResponse(unit_id=unit_id, unit_ids=sorted(descendants))


@router.post("/units", response_model=OrgUnitResponse, status_code=201)
@limit_writes
async def create_unit(
    request: Request,
    body: OrgUnitCreate,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    structure_svc: Annotated[OrgStructureService, Depends(get_org_structure_service)],
):
    """Create a unit (409 on duplicate code, 404 on unknown parent).

    The parent must be in the caller's scope; a top-level unit needs full scope.
    """
    await _require_parent(
        auth_svc, current_user.id, PermissionCode.ORG_UNIT_CREATE, body.parent_id
    )
    created = await structure_svc.create_unit(
        OrgUnitCreateData(
            code=body.code,
            name=body.name,
            type=body.type,
            parent_id=body.parent_id,
            description=body.description,
        )
    )
    return OrgUnitResponse.model_validate(created)


@router.patch("/units/{unit_id}", response_model=OrgUnitResponse)
@limit_writes
async def update_unit(
    request: Request,
    unit_id: int,
    body: OrgUnitUpdate,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    structure_svc: Annotated[OrgStructureService, Depends(get_org_structure_service)],
):
    """Edit or move a unit. Moving under its own subtree is rejected (409).

    The caller must be able to update both the unit and its new parent;
    moving to top level needs full scope.
    """
    await auth_svc.require(
        current_user.id, PermissionCode.ORG_UNIT_UPDATE, target_unit_id=unit_id
    )
    kwargs: dict[str, object] = {
        "name": body.name,
        "unit_type": body.type,
        "description": body.description,
    }
    if "parent_id" in body.model_fields_set:
        await _require_parent(
            auth_svc, current_user.id, PermissionCode.ORG_UNIT_UPDATE, body.parent_id
        )
        kwargs["parent_id"] = body.parent_id
    updated = await structure_svc.update_unit(unit_id, **kwargs)
    return OrgUnitResponse.model_validate(updated)


@router.patch("/units/{unit_id}/status", response_model=OrgUnitResponse)
@limit_writes
async def set_unit_status(
    request: Request,
    unit_id: int,
    body: OrgUnitStatusUpdate,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    structure_svc: Annotated[OrgStructureService, Depends(get_org_structure_service)],
):
    """Activate, deactivate or soft delete (status=deleted) a unit."""
    code = (
        PermissionCode.ORG_UNIT_DELETE
        if body.status is OrgUnitStatus.DELETED
        else PermissionCode.ORG_UNIT_UPDATE
    )
    await auth_svc.require(current_user.id, code, target_unit_id=unit_id)
    updated = await structure_svc.set_status(unit_id, body.status)
    return OrgUnitResponse.model_validate(updated)
