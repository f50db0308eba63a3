"""Repositories: data access per aggregate (SQLAlchemy async)."""

from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.employee_repo import EmployeeRepository
from app.infrastructure.persistence.repositories.org_assignment_repo import (
    OrgAssignmentRepository,
)
from app.infrastructure.persistence.repositories.org_unit_repo import OrgUnitRepository
from app.infrastructure.persistence.repositories.permission_repo import (
    PermissionRepository,
)
from app.infrastructure.persistence.repositories.role_permission_repo import (
    RolePermissionRepository,
)
from app.infrastructure.persistence.repositories.role_repo import RoleRepository
from app.infrastructure.persistence.repositories.scope_filter import scope_filter
from app.infrastructure.persistence.repositories.user_repo import UserRepository
from app.infrastructure.persistence.repositories.user_role_repo import (
    UserRoleRepository,
)

__all__ = [
    "BaseRepository",
    "EmployeeRepository",
    "OrgAssignmentRepository",
    "OrgUnitRepository",
    "PermissionRepository",
    "RolePermissionRepository",
    "RoleRepository",
    "UserRepository",
    "UserRoleRepository",
    "scope_filter",
]
