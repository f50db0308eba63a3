"""Permission repository. Read methods return PermissionResult (DTO)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.permission import PermissionResult
from app.infrastructure.persistence.models.permission import Permission
from app.infrastructure.persistence.repositories.base import BaseRepository


def _permission_to_result(p: Permission) -> PermissionResult:
    return PermissionResult(
        id=p.id,
        code=p.code,
        name=p.name,
        description=p.description,
    )


class PermissionRepository(BaseRepository[Permission]):
    """Permission catalog rows."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Permission)

    async def create_permission(
        self, code: str, name: str, description: str | None = None
    ) -> PermissionResult:
        created = await self.create(
            Permission(code=code, name=name, description=description)
        )
        return _permission_to_result(created)

    async def get_by_code(self, code: str) -> PermissionResult | None:
        result = await self.db.execute(select(Permission).where(Permission.code == code))
        row = result.scalar_one_or_none()
        return _permission_to_result(row) if row else None

    async def get_permission(self, permission_id: int) -> PermissionResult | None:
        orm = await self.get_by_id(permission_id)
        return _permission_to_result(orm) if orm else None

    async def list_permissions(
        self, skip: int = 0, limit: int = 100, resource: str | None = None
    ) -> list[PermissionResult]:
        """List permissions ordered by code; resource filters by code prefix."""
        q = select(Permission)
        if resource:
            q = q.where(Permission.code.startswith(f"{resource}."))
        q = q.order_by(Permission.code).offset(skip).limit(limit)
        result = await self.db.execute(q)
        return [_permission_to_result(p) for p in result.scalars().all()]

    async def delete_permission(self, permission_id: int) -> bool:
        """Delete a permission (role links cascade). False if absent."""
        orm = await self.get_by_id(permission_id)
        if orm is None:
            return False
        await self.delete(orm)
        return True
