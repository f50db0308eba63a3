"""Application services: authorization, hierarchy, assignment index, catalog and structure writes."""

from app.application.services.authorization_service import AuthorizationService
from app.application.services.employee_service import EmployeeService
from app.application.services.org_assignment_index import OrgAssignmentIndex
from app.application.services.org_assignment_service import OrgAssignmentService
from app.application.services.org_hierarchy_service import OrgHierarchyService
from app.application.services.org_structure_service import OrgStructureService
from app.application.services.permission_resolver import PermissionResolver
from app.application.services.permission_service import PermissionService
from app.application.services.role_service import RoleService

__all__ = [
    "AuthorizationService",
    "EmployeeService",
    "OrgAssignmentIndex",
    "OrgAssignmentService",
    "OrgHierarchyService",
    "OrgStructureService",
    "PermissionResolver",
    "PermissionService",
    "RoleService",
]
