"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.employee import Employee, JobPosition
from app.infrastructure.persistence.models.mixins import (
    IdTimestampModel,
    IntIdMixin,
    TimestampMixin,
)
from app.infrastructure.persistence.models.org_assignment import OrgAssignment
from app.infrastructure.persistence.models.org_unit import OrgUnit
from app.infrastructure.persistence.models.permission import (
    Permission,
    RolePermission,
    UserRole,
)
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.models.user import User

__all__ = [
    "User",
    "Role",
    "Permission",
    "RolePermission",
    "UserRole",
    "OrgUnit",
    "JobPosition",
    "Employee",
    "OrgAssignment",
    "IntIdMixin",
    "TimestampMixin",
    "IdTimestampModel",
]
