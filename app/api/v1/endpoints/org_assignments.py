"""Org assignments API: scoped list, create and end."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from app.api.v1.dependencies import (
    get_authorization_service,
    get_current_user,
    get_org_assignment_repo,
    get_org_assignment_service,
    require_scope,
)
from app.application.dtos.org_assignment import (
    OrgAssignmentCreate as OrgAssignmentCreateData,
)
from app.application.dtos.user import UserResult
from app.application.services.authorization_service import AuthorizationService
from app.application.services.org_assignment_service import OrgAssignmentService
from app.core.limiter import limit_writes
from app.domain.access_scope import AccessScope
from app.domain.enums import AssignmentType
from app.domain.permissions import PermissionCode
from app.infrastructure.persistence.repositories.org_assignment_repo import (
    OrgAssignmentRepository,
)
from app.schemas.org_assignment import (
    OrgAssignmentCreate,
    OrgAssignmentEnd,
    OrgAssignmentResponse,
)

router = APIRouter()


@router.get("", response_model=list[OrgAssignmentResponse])
async def list_assignments(
    scope: Annotated[
        AccessScope, Depends(require_scope(PermissionCode.ORG_ASSIGNMENT_READ))
    ],
    assignment_repo: Annotated[
        OrgAssignmentRepository, Depends(get_org_assignment_repo)
    ],
    employee_id: int | None = None,
    org_unit_id: int | None = None,
    assignment_type: AssignmentType | None = None,
    active_on: date | None = None,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    """List assignments in units the caller manages (own rows for the self tier)."""
    rows = await assignment_repo.list_assignments(
        scope,
        employee_id=employee_id,
        org_unit_id=org_unit_id,
        assignment_type=assignment_type.value if assignment_type else None,
        active_as_of=active_on,
        skip=skip,
        limit=limit,
    )
    return [OrgAssignmentResponse.model_validate(a) for a in rows]


@router.post("", response_model=OrgAssignmentResponse, status_code=201)
@limit_writes
async def create_assignment(
    request: Request,
    body: OrgAssignmentCreate,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    assignment_svc: Annotated[
        OrgAssignmentService, Depends(get_org_assignment_service)
    ],
):
    """Place an employee in a unit the caller manages.

    409 on a second active primary assignment for the same employee and unit.
    """
    await auth_svc.require(
        current_user.id,
        PermissionCode.ORG_ASSIGNMENT_CREATE,
        target_unit_id=body.org_unit_id,
    )
    created = await assignment_svc.create_assignment(
        OrgAssignmentCreateData(
            employee_id=body.employee_id,
            org_unit_id=body.org_unit_id,
            position_id=body.position_id,
            is_primary=body.is_primary,
            assignment_type=body.assignment_type.value,
            allocation=body.allocation,
            start_date=body.start_date,
            end_date=body.end_date,
        )
    )
    return OrgAssignmentResponse.model_validate(created)


@router.post("/{assignment_id}/end", response_model=OrgAssignmentResponse)
@limit_writes
async def end_assignment(
    request: Request,
    assignment_id: int,
    body: OrgAssignmentEnd,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    assignment_repo: Annotated[
        OrgAssignmentRepository, Depends(get_org_assignment_repo)
    ],
    assignment_svc: Annotated[
        OrgAssignmentService, Depends(get_org_assignment_service)
    ],
):
    """Close an assignment's validity window (end_date defaults to today)."""
    current = await assignment_repo.get_assignment(assignment_id)
    if current is None:
        raise HTTPException(status_code=404, detail="Org assignment not found")
    await auth_svc.require(
        current_user.id,
        PermissionCode.ORG_ASSIGNMENT_UPDATE,
        target_unit_id=current.org_unit_id,
    )
    ended = await assignment_svc.end_assignment(assignment_id, body.end_date)
    return OrgAssignmentResponse.model_validate(ended)
