"""Permission application service: catalog writes with duplicate check and cache invalidation."""

from __future__ import annotations

from typing import Any

from app.application.dtos.permission import PermissionResult
from app.application.interfaces.services import CommitHook, IPermissionCache
from app.domain.exceptions import (
    DuplicateCodeException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.permissions import split_code


class PermissionService:
    """Create and delete catalog permissions."""

    def __init__(
        self,
        permission_repo: Any,
        permission_cache: IPermissionCache | None = None,
        on_commit: CommitHook | None = None,
    ) -> None:
        self._repo = permission_repo
        self._cache = permission_cache
        self._on_commit = on_commit

    async def create_permission(
        self, code: str, name: str, description: str | None = None
    ) -> PermissionResult:
        """Create permission. Raises DuplicateCodeException if code already exists."""
        resource, action = split_code(code)
        if not resource or not action:
            raise ValidationException(
                "Permission code must have the form resource.action", field="code"
            )
        existing = await self._repo.get_by_code(code)
        if existing:
            raise DuplicateCodeException("permission", code)
        return await self._repo.create_permission(
            code=code, name=name, description=description
        )

    async def delete_permission(self, permission_id: int) -> None:
        """Delete permission and its role grants; every holder loses it."""
        if not await self._repo.delete_permission(permission_id):
            raise ResourceNotFoundException("permission", permission_id)
        if self._cache is None:
            return
        if self._on_commit is None:
            await self._cache.invalidate()
        else:
            self._on_commit(self._cache.invalidate)
