"""Application DTOs: frozen dataclasses passed between layers (no ORM types)."""

from app.application.dtos.employee import EmployeeResult
from app.application.dtos.org_assignment import OrgAssignmentCreate, OrgAssignmentResult
from app.application.dtos.org_unit import OrgUnitCreate, OrgUnitResult
from app.application.dtos.permission import PermissionResult
from app.application.dtos.role import RoleResult, UserRoleResult
from app.application.dtos.user import UserResult

__all__ = [
    "EmployeeResult",
    "OrgAssignmentCreate",
    "OrgAssignmentResult",
    "OrgUnitCreate",
    "OrgUnitResult",
    "PermissionResult",
    "RoleResult",
    "UserResult",
    "UserRoleResult",
]
