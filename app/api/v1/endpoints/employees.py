"""HR employees API: scoped list and search, get, edit, soft delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import (
    get_employee_service,
    get_employee_service_for_write,
    require_scope,
)
from app.application.services.employee_service import EmployeeService
from app.core.limiter import limit_writes
from app.domain.access_scope import AccessScope
from app.domain.enums import EmployeeStatus
from app.domain.permissions import PermissionCode
from app.schemas.employee import EmployeeResponse, EmployeeUpdate

router = APIRouter()

_RESOURCE = "hr.employees"


@router.get("", response_model=list[EmployeeResponse])
async def list_employees(
    scope: Annotated[
        AccessScope,
        Depends(require_scope(PermissionCode.HR_EMPLOYEES_VIEW, _RESOURCE)),
    ],
    employee_svc: Annotated[EmployeeService, Depends(get_employee_service)],
    search: Annotated[str | None, Query(max_length=100)] = None,
    status: EmployeeStatus | None = None,
    org_unit_id: int | None = None,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    """List employees in scope. Search (name or employee number) is ANDed with the scope."""
    rows = await employee_svc.list_employees(
        scope,
        search=search,
        status=status.value if status else None,
        org_unit_id=org_unit_id,
        skip=skip,
        limit=limit,
    )
    return [EmployeeResponse.model_validate(e) for e in rows]


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: int,
    scope: Annotated[
        AccessScope,
        Depends(require_scope(PermissionCode.HR_EMPLOYEES_VIEW, _RESOURCE)),
    ],
    employee_svc: Annotated[EmployeeService, Depends(get_employee_service)],
):
    employee = await employee_svc.get_employee(scope, employee_id)
    return EmployeeResponse.model_validate(employee)


@router.patch("/{employee_id}", response_model=EmployeeResponse)
@limit_writes
async def update_employee(
    request: Request,
    employee_id: int,
    body: EmployeeUpdate,
    scope: Annotated[
        AccessScope,
        Depends(require_scope(PermissionCode.HR_EMPLOYEES_UPDATE, _RESOURCE)),
    ],
    employee_svc: Annotated[EmployeeService, Depends(get_employee_service_for_write)],
):
    """Edit HR attributes of an employee inside the caller's scope."""
    updated = await employee_svc.update_employee(
        scope,
        employee_id,
        first_name=body.first_name,
        last_name=body.last_name,
        employment_type=body.employment_type.value if body.employment_type else None,
        status=body.status.value if body.status else None,
        hired_at=body.hired_at,
    )
    return EmployeeResponse.model_validate(updated)


@router.delete("/{employee_id}", response_model=EmployeeResponse)
@limit_writes
async def delete_employee(
    request: Request,
    employee_id: int,
    scope: Annotated[
        AccessScope,
        Depends(require_scope(PermissionCode.HR_EMPLOYEES_DELETE, _RESOURCE)),
    ],
    employee_svc: Annotated[EmployeeService, Depends(get_employee_service_for_write)],
):
    """Soft delete: marks the employee terminated as of today."""
    terminated = await employee_svc.terminate_employee(scope, employee_id)
    return EmployeeResponse.model_validate(terminated)
