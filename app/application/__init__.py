"""Application layer: DTOs, interfaces, services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, cache).
"""

from app.application.interfaces import (
    ICacheService,
    IOrgAssignmentReader,
    IOrgHierarchy,
    IOrgUnitReader,
    IPermissionCache,
    IPermissionCatalogReader,
    IPermissionResolver,
    IRoleAssignmentReader,
)
from app.application.services.authorization_service import AuthorizationService
from app.application.services.org_assignment_index import OrgAssignmentIndex
from app.application.services.org_hierarchy_service import OrgHierarchyService
from app.application.services.permission_resolver import PermissionResolver

__all__ = [
    "AuthorizationService",
    "ICacheService",
    "IOrgAssignmentReader",
    "IOrgHierarchy",
    "IOrgUnitReader",
    "IPermissionCache",
    "IPermissionCatalogReader",
    "IPermissionResolver",
    "IRoleAssignmentReader",
    "OrgAssignmentIndex",
    "OrgHierarchyService",
    "PermissionResolver",
]
