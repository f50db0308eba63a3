"""Role application service: role catalog, role grants, and user-role assignment.

Every write that changes who holds which code invalidates the permission
cache: grants and role edits drop every user's entry, user-role changes
drop the affected user's entry. With an on_commit hook the invalidation
waits for the transaction to commit, so a concurrent request cannot cache
the pre-commit grants again.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from app.application.dtos.permission import PermissionResult
from app.application.dtos.role import RoleResult, UserRoleResult
from app.application.interfaces.services import CommitHook, IPermissionCache
from app.domain.exceptions import (
    DuplicateCodeException,
    ResourceNotFoundException,
    ValidationException,
)


class RoleService:
    """Create roles, manage their permissions, and assign them to users."""

    def __init__(
        self,
        role_repo: Any,
        permission_repo: Any,
        role_permission_repo: Any,
        user_role_repo: Any,
        user_repo: Any,
        permission_cache: IPermissionCache | None = None,
        on_commit: CommitHook | None = None,
    ) -> None:
        self._role_repo = role_repo
        self._permission_repo = permission_repo
        self._role_permission_repo = role_permission_repo
        self._user_role_repo = user_role_repo
        self._user_repo = user_repo
        self._cache = permission_cache
        self._on_commit = on_commit

    async def create_role_with_permissions(
        self,
        code: str,
        name: str,
        description: str | None = None,
        permission_codes: list[str] | None = None,
        granted_by: int | None = None,
    ) -> RoleResult:
        """Create role and optionally grant permissions by code.

        Raises:
            DuplicateCodeException: If a role with code already exists.
            ValidationException: If a permission code is not in the catalog.
        """
        existing = await self._role_repo.get_by_code(code)
        if existing:
            raise DuplicateCodeException("role", code)
        perms: list[PermissionResult] = []
        for perm_code in dict.fromkeys(permission_codes or []):
            perm = await self._permission_repo.get_by_code(perm_code)
            if not perm:
                raise ValidationException(
                    f"Invalid permission code: {perm_code}", field="permission_codes"
                )
            perms.append(perm)
        created = await self._role_repo.create_role(
            code=code, name=name, description=description
        )
        for perm in perms:
            await self._role_permission_repo.assign_permission_to_role(
                role_id=created.id, permission_id=perm.id, granted_by=granted_by
            )
        return created

    async def update_role(
        self,
        role_id: int,
        *,
        name: str | None = None,
        description: str | None = None,
        is_active: bool | None = None,
    ) -> RoleResult:
        """Edit role; deactivating removes its permissions from every holder."""
        updated = await self._role_repo.update_role(
            role_id, name=name, description=description, is_active=is_active
        )
        if updated is None:
            raise ResourceNotFoundException("role", role_id)
        if is_active is not None:
            await self._invalidate_all()
        return updated

    async def get_role_permissions(self, role_id: int) -> list[PermissionResult]:
        await self._require_role(role_id)
        return await self._role_permission_repo.get_permissions_for_role(role_id)

    async def grant_permission(
        self, role_id: int, permission_code: str, granted_by: int | None = None
    ) -> PermissionResult:
        """Grant a catalog permission to role. Duplicate grant raises."""
        await self._require_role(role_id)
        perm = await self._permission_repo.get_by_code(permission_code)
        if not perm:
            raise ResourceNotFoundException("permission", permission_code)
        await self._role_permission_repo.assign_permission_to_role(
            role_id=role_id, permission_id=perm.id, granted_by=granted_by
        )
        await self._invalidate_all()
        return perm

    async def revoke_permission(self, role_id: int, permission_id: int) -> None:
        """Remove a grant; takes effect for every holder of the role."""
        removed = await self._role_permission_repo.remove_permission_from_role(
            role_id, permission_id
        )
        if not removed:
            raise ResourceNotFoundException(
                "role_permission", f"{role_id}/{permission_id}"
            )
        await self._invalidate_all()

    async def get_user_roles(self, user_id: int) -> list[UserRoleResult]:
        return await self._user_role_repo.get_user_roles(user_id)

    async def assign_role(
        self, user_id: int, role_id: int, assigned_by: int | None = None
    ) -> None:
        """Assign role to user.

        Raises:
            ResourceNotFoundException: If user or role does not exist.
            DuplicateAssignmentException: If user already holds role.
        """
        if await self._user_repo.get_user(user_id) is None:
            raise ResourceNotFoundException("user", user_id)
        await self._require_role(role_id)
        await self._user_role_repo.assign_role_to_user(
            user_id=user_id, role_id=role_id, assigned_by=assigned_by
        )
        await self._invalidate_user(user_id)

    async def revoke_role(self, user_id: int, role_id: int) -> None:
        """Revoke role from user. Raises ResourceNotFoundException if not held."""
        removed = await self._user_role_repo.remove_role_from_user(user_id, role_id)
        if not removed:
            raise ResourceNotFoundException("user_role", f"{user_id}/{role_id}")
        await self._invalidate_user(user_id)

    async def _require_role(self, role_id: int) -> RoleResult:
        role = await self._role_repo.get_role(role_id)
        if role is None:
            raise ResourceNotFoundException("role", role_id)
        return role

    async def _invalidate_user(self, user_id: int) -> None:
        if self._cache is not None:
            await self._after_commit(lambda: self._cache.invalidate_user(user_id))

    async def _invalidate_all(self) -> None:
        if self._cache is not None:
            await self._after_commit(self._cache.invalidate)

    async def _after_commit(self, callback: Callable[[], Awaitable[None]]) -> None:
        if self._on_commit is None:
            await callback()
        else:
            self._on_commit(callback)
