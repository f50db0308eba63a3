"""API v1 dependencies (composition root).

Routes import from here; repositories and services are built only in
this package.
"""

from app.api.v1.dependencies.auth import AuthSecurity, get_auth_security
from app.api.v1.dependencies.db import get_db, get_db_transactional
from app.api.v1.dependencies.org import (
    get_employee_service,
    get_employee_service_for_write,
    get_org_assignment_repo,
    get_org_assignment_service,
    get_org_hierarchy,
    get_org_structure_service,
    get_org_unit_repo,
)
from app.api.v1.dependencies.user_rbac import (
    get_authorization_service,
    get_current_user,
    get_current_user_optional,
    get_permission_cache,
    get_permission_repo,
    get_permission_service,
    get_role_repo,
    get_role_service,
    get_user_repo,
    require_permission,
    require_scope,
)

__all__ = [
    "AuthSecurity",
    "get_auth_security",
    "get_authorization_service",
    "get_current_user",
    "get_current_user_optional",
    "get_db",
    "get_db_transactional",
    "get_employee_service",
    "get_employee_service_for_write",
    "get_org_assignment_repo",
    "get_org_assignment_service",
    "get_org_hierarchy",
    "get_org_structure_service",
    "get_org_unit_repo",
    "get_permission_cache",
    "get_permission_repo",
    "get_permission_service",
    "get_role_repo",
    "get_role_service",
    "get_user_repo",
    "require_permission",
    "require_scope",
]
