"""User, RBAC (roles/permissions), and auth dependencies (composition root)."""

from __future__ import annotations

import logging
from functools import partial
from typing import Annotated

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import UserResult
from app.application.services.authorization_service import AuthorizationService
from app.application.services.org_assignment_index import OrgAssignmentIndex
from app.application.services.org_hierarchy_service import OrgHierarchyService
from app.application.services.permission_resolver import PermissionResolver
from app.application.services.permission_service import PermissionService
from app.application.services.role_service import RoleService
from app.core.config import get_settings
from app.domain.access_scope import AccessScope, ScopePolicyRegistry
from app.domain.permissions import PermissionCode
from app.infrastructure.cache.permission_cache import PermissionCache
from app.infrastructure.persistence.database import (
    after_commit,
    get_db,
    get_db_transactional,
)
from app.infrastructure.persistence.repositories import (
    OrgAssignmentRepository,
    OrgUnitRepository,
    PermissionRepository,
    RolePermissionRepository,
    RoleRepository,
    UserRepository,
    UserRoleRepository,
)
from app.shared.context import set_current_user_id

from . import auth

logger = logging.getLogger(__name__)

_http_bearer = HTTPBearer(auto_error=False)


async def get_user_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserRepository:
    """User repository for read operations."""
    return UserRepository(db)


async def get_role_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> RoleRepository:
    """Role repository for read operations (list, get by id)."""
    return RoleRepository(db)


async def get_role_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> RoleRepository:
    """Role repository for create/update."""
    return RoleRepository(db)


async def get_permission_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PermissionRepository:
    """Permission repository for read operations."""
    return PermissionRepository(db)


async def get_permission_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> PermissionRepository:
    """Permission repository for create/delete (transactional)."""
    return PermissionRepository(db)


async def get_role_permission_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> RolePermissionRepository:
    """Role-permission repository for assign/remove (transactional)."""
    return RolePermissionRepository(db)


async def get_user_role_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> UserRoleRepository:
    """User-role repository for assign/remove (transactional)."""
    return UserRoleRepository(db)


def get_permission_cache(request: Request) -> PermissionCache | None:
    """Process-lifetime permission cache set in app lifespan (None in bare test apps)."""
    return getattr(request.app.state, "permission_cache", None)


async def get_authorization_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    permission_cache: Annotated[PermissionCache | None, Depends(get_permission_cache)],
) -> AuthorizationService:
    """Build the per-request AuthorizationService.

    Hierarchy and assignment memos live on this instance and are dropped
    with the request; only permission sets outlive it (in the cache).
    """
    settings = get_settings()
    return AuthorizationService(
        permission_resolver=PermissionResolver(
            role_reader=UserRoleRepository(db),
            catalog_reader=RolePermissionRepository(db),
        ),
        hierarchy=OrgHierarchyService(OrgUnitRepository(db)),
        assignment_index=OrgAssignmentIndex(
            OrgAssignmentRepository(db),
            primary_only=settings.scope_primary_assignments_only,
        ),
        permission_cache=permission_cache,
        policies=ScopePolicyRegistry.from_config(settings.scope_policies),
        default_resource=settings.default_scoped_resource,
    )


def get_role_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    role_repo: Annotated[RoleRepository, Depends(get_role_repo_for_write)],
    permission_repo: Annotated[PermissionRepository, Depends(get_permission_repo_for_write)],
    role_permission_repo: Annotated[
        RolePermissionRepository, Depends(get_role_permission_repo_for_write)
    ],
    user_role_repo: Annotated[UserRoleRepository, Depends(get_user_role_repo_for_write)],
    permission_cache: Annotated[PermissionCache | None, Depends(get_permission_cache)],
) -> RoleService:
    """Role service for role, grant and user-role writes (composition root).

    The repositories share the request's transactional session; cache
    invalidation is queued on it and runs after commit.
    """
    return RoleService(
        role_repo=role_repo,
        permission_repo=permission_repo,
        role_permission_repo=role_permission_repo,
        user_role_repo=user_role_repo,
        user_repo=UserRepository(db),
        permission_cache=permission_cache,
        on_commit=partial(after_commit, db),
    )


def get_permission_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    permission_repo: Annotated[
        PermissionRepository, Depends(get_permission_repo_for_write)
    ],
    permission_cache: Annotated[PermissionCache | None, Depends(get_permission_cache)],
) -> PermissionService:
    """Permission service (composition root)."""
    return PermissionService(
        permission_repo=permission_repo,
        permission_cache=permission_cache,
        on_commit=partial(after_commit, db),
    )


async def get_current_user_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    auth_security: Annotated[auth.AuthSecurity, Depends(auth.get_auth_security)],
) -> UserResult | None:
    """Return current user from JWT if present; else None. Use for optional auth routes."""
    if not credentials:
        return None
    try:
        user_id = auth_security.user_id_from_token(credentials.credentials)
    except ValueError as e:
        logger.debug("Rejected bearer token: %s", e)
        return None
    user = await user_repo.get_user(user_id)
    if not user or not user.is_active:
        return None
    set_current_user_id(user.id)
    return user


async def get_current_user(
    current_user: Annotated[UserResult | None, Depends(get_current_user_optional)],
) -> UserResult:
    """Return current user from JWT; raise 401 if missing or invalid."""
    if current_user is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return current_user


def require_permission(code: str | PermissionCode):
    """Dependency factory: require JWT auth and the flat permission code.

    Target-specific checks (unit or user) happen in the route once the
    target is known, via AuthorizationService.require().
    """

    async def _require(
        current_user: Annotated[UserResult, Depends(get_current_user)],
        auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    ) -> UserResult:
        await auth_svc.require(current_user.id, code)
        return current_user

    return _require


def require_scope(code: str | PermissionCode, resource: str | None = None):
    """Dependency factory: require code, then resolve the caller's scope for list queries.

    resource defaults to settings.default_scoped_resource, the scope that
    every org-scoped listing shares.
    """

    async def _scope(
        current_user: Annotated[UserResult, Depends(get_current_user)],
        auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    ) -> AccessScope:
        await auth_svc.require(current_user.id, code)
        return await auth_svc.resolve_accessible_units(
            current_user.id, resource
        )

    return _scope
