"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    auth,
    employees,
    health,
    org_assignments,
    org_units,
    permissions,
    roles,
    user_roles,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(
    user_roles.router, prefix="/users", tags=["user-roles"]
)
api_router.include_router(roles.router, prefix="/roles", tags=["roles"])
api_router.include_router(permissions.router, prefix="/permissions", tags=["permissions"])
api_router.include_router(org_units.router, prefix="/org", tags=["org-structure"])
api_router.include_router(
    org_assignments.router, prefix="/org/assignments", tags=["org-assignments"]
)
api_router.include_router(employees.router, prefix="/hr/employees", tags=["hr-employees"])
