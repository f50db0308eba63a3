"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import (
    IEmployeeRepository,
    IOrgAssignmentReader,
    IOrgAssignmentRepository,
    IOrgUnitReader,
    IOrgUnitRepository,
    IPermissionCatalogReader,
    IPermissionRepository,
    IRoleAssignmentReader,
    IRoleRepository,
    IUserRepository,
    IUserRoleRepository,
)
from app.application.interfaces.services import (
    CommitHook,
    ICacheService,
    IOrgHierarchy,
    IPermissionCache,
    IPermissionResolver,
)

__all__ = [
    "CommitHook",
    "ICacheService",
    "IEmployeeRepository",
    "IOrgAssignmentReader",
    "IOrgAssignmentRepository",
    "IOrgHierarchy",
    "IOrgUnitReader",
    "IOrgUnitRepository",
    "IPermissionCache",
    "IPermissionCatalogReader",
    "IPermissionRepository",
    "IPermissionResolver",
    "IRoleAssignmentReader",
    "IRoleRepository",
    "IUserRepository",
    "IUserRoleRepository",
]
