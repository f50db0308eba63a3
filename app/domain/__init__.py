"""Domain layer: enums, exceptions, permission codes, org tree and scope policy.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.access_scope import AccessScope, ScopePolicy, ScopePolicyRegistry
from app.domain.enums import AccessTier, AssignmentType, OrgUnitStatus, UserStatus
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    CampusAdminException,
    DuplicateAssignmentException,
    DuplicateCodeException,
    HierarchyCycleException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.org_tree import OrgNode, OrgTree
from app.domain.permissions import (
    PermissionCode,
    has_all_permissions,
    has_any_permission,
    has_permission,
)

__all__ = [
    # Scope
    "AccessScope",
    "ScopePolicy",
    "ScopePolicyRegistry",
    # Enums
    "AccessTier",
    "AssignmentType",
    "OrgUnitStatus",
    "UserStatus",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "CampusAdminException",
    "DuplicateAssignmentException",
    "DuplicateCodeException",
    "HierarchyCycleException",
    "ResourceNotFoundException",
    "ValidationException",
    # Hierarchy
    "OrgNode",
    "OrgTree",
    # Permissions
    "PermissionCode",
    "has_all_permissions",
    "has_any_permission",
    "has_permission",
]
