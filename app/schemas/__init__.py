"""Pydantic request/response schemas for the API."""

from app.schemas.auth import AccessScopeResponse, LoginRequest, MyPermissionsResponse, TokenResponse
from app.schemas.employee import EmployeeResponse, EmployeeUpdate
from app.schemas.health import HealthResponse, ReadinessResponse
from app.schemas.org_assignment import (
    OrgAssignmentCreate,
    OrgAssignmentEnd,
    OrgAssignmentResponse,
)
from app.schemas.org_unit import (
    OrgTreeNode,
    OrgUnitCreate,
    OrgUnitIdsResponse,
    OrgUnitResponse,
    OrgUnitStatusUpdate,
    OrgUnitUpdate,
)
from app.schemas.permission import PermissionCreate, PermissionResponse
from app.schemas.role import (
    RoleCreateRequest,
    RolePermissionAssign,
    RoleResponse,
    RoleUpdate,
)
from app.schemas.user import UserResponse, UserRoleResponse

__all__ = [
    "AccessScopeResponse",
    "EmployeeResponse",
    "EmployeeUpdate",
    "HealthResponse",
    "LoginRequest",
    "MyPermissionsResponse",
    "OrgAssignmentCreate",
    "OrgAssignmentEnd",
    "OrgAssignmentResponse",
    "OrgTreeNode",
    "OrgUnitCreate",
    "OrgUnitIdsResponse",
    "OrgUnitResponse",
    "OrgUnitStatusUpdate",
    "OrgUnitUpdate",
    "PermissionCreate",
    "PermissionResponse",
    "ReadinessResponse",
    "RoleCreateRequest",
    "RolePermissionAssign",
    "RoleResponse",
    "RoleUpdate",
    "TokenResponse",
    "UserResponse",
    "UserRoleResponse",
]
