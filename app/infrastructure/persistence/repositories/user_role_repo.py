"""UserRole repository: user–role assignments (single entity responsibility)."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.role import UserRoleResult
from app.domain.exceptions import DuplicateAssignmentException
from app.infrastructure.persistence.models.permission import UserRole
from app.infrastructure.persistence.models.role import Role


class UserRoleRepository:
    """User–role link table only. Assign/remove and list roles for a user."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_role_ids_for_user(self, user_id: int) -> list[int]:
        """Ids of every role linked to user (active or not; the catalog read filters)."""
        result = await self.db.execute(
            select(UserRole.role_id).where(UserRole.user_id == user_id)
        )
        return list(result.scalars().all())

    async def get_user_roles(self, user_id: int) -> list[UserRoleResult]:
        result = await self.db.execute(
            select(Role)
            .join(UserRole, UserRole.role_id == Role.id)
            .where(UserRole.user_id == user_id)
            .order_by(Role.code)
        )
        return [
            UserRoleResult(
                user_id=user_id, role_id=r.id, role_code=r.code, role_name=r.name
            )
            for r in result.scalars().all()
        ]

    async def assign_role_to_user(
        self, user_id: int, role_id: int, assigned_by: int | None = None
    ) -> None:
        """Link user and role. Raises DuplicateAssignmentException if already linked."""
        ur = UserRole(user_id=user_id, role_id=role_id, assigned_by=assigned_by)
        try:
            async with self.db.begin_nested():
                self.db.add(ur)
        except IntegrityError:
            raise DuplicateAssignmentException(
                "Role already assigned to user",
                assignment_type="user_role",
                details_extra={"user_id": user_id, "role_id": role_id},
            ) from None

    async def remove_role_from_user(self, user_id: int, role_id: int) -> bool:
        """Unlink user and role. Returns False if the link did not exist."""
        result = await self.db.execute(
            delete(UserRole).where(
                UserRole.user_id == user_id, UserRole.role_id == role_id
            )
        )
        return (result.rowcount or 0) > 0
