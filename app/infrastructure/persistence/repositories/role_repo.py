"""Role repository. Read methods return RoleResult (DTO); entity getters return ORM for writes."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.role import RoleResult
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.repositories.base import BaseRepository


def _role_to_result(r: Role) -> RoleResult:
    """Map ORM Role to application RoleResult."""
    return RoleResult(
        id=r.id,
        code=r.code,
        name=r.name,
        description=r.description,
        is_active=r.is_active,
    )


class RoleRepository(BaseRepository[Role]):
    """Role repository. Read methods return RoleResult; use get_by_id for update."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Role)

    async def create_role(
        self,
        code: str,
        name: str,
        description: str | None = None,
        *,
        is_active: bool = True,
    ) -> RoleResult:
        """Create a role; return read-model DTO."""
        role = Role(code=code, name=name, description=description, is_active=is_active)
        created = await self.create(role)
        return _role_to_result(created)

    async def get_by_code(self, code: str) -> RoleResult | None:
        result = await self.db.execute(select(Role).where(Role.code == code))
        row = result.scalar_one_or_none()
        return _role_to_result(row) if row else None

    async def get_role(self, role_id: int) -> RoleResult | None:
        orm = await self.get_by_id(role_id)
        return _role_to_result(orm) if orm else None

    async def list_roles(
        self, skip: int = 0, limit: int = 100, *, include_inactive: bool = False
    ) -> list[RoleResult]:
        q = select(Role)
        if not include_inactive:
            q = q.where(Role.is_active.is_(True))
        q = q.order_by(Role.code).offset(skip).limit(limit)
        result = await self.db.execute(q)
        return [_role_to_result(r) for r in result.scalars().all()]

    async def update_role(
        self,
        role_id: int,
        *,
        name: str | None = None,
        description: str | None = None,
        is_active: bool | None = None,
    ) -> RoleResult | None:
        """Apply non-None fields; returns None if the role does not exist."""
        role = await self.get_by_id(role_id)
        if role is None:
            return None
        if name is not None:
            role.name = name
        if description is not None:
            role.description = description
        if is_active is not None:
            role.is_active = is_active
        updated = await self.update(role)
        return _role_to_result(updated)
