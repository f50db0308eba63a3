"""RolePermission repository: role–permission grants (single entity responsibility).

Also serves the catalog read used by permission resolution: role ids ->
permission codes, skipping inactive roles.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.permission import PermissionResult
from app.domain.exceptions import DuplicateAssignmentException
from app.infrastructure.persistence.models.permission import (
    Permission,
    RolePermission,
)
from app.infrastructure.persistence.models.role import Role


class RolePermissionRepository:
    """Role–permission link table only. Grant/revoke and query permissions for roles."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_codes_for_roles(self, role_ids: Iterable[int]) -> set[str]:
        """Distinct permission codes granted to any of the active roles."""
        ids = list(role_ids)
        if not ids:
            return set()
        result = await self.db.execute(
            select(Permission.code)
            .join(RolePermission, RolePermission.permission_id == Permission.id)
            .join(Role, Role.id == RolePermission.role_id)
            .where(RolePermission.role_id.in_(ids), Role.is_active.is_(True))
            .distinct()
        )
        return set(result.scalars().all())

    async def get_permissions_for_role(self, role_id: int) -> list[PermissionResult]:
        result = await self.db.execute(
            select(Permission)
            .join(RolePermission, RolePermission.permission_id == Permission.id)
            .where(RolePermission.role_id == role_id)
            .order_by(Permission.code)
        )
        return [
            PermissionResult(id=p.id, code=p.code, name=p.name, description=p.description)
            for p in result.scalars().all()
        ]

    async def assign_permission_to_role(
        self, role_id: int, permission_id: int, granted_by: int | None = None
    ) -> None:
        """Grant permission to role. Raises DuplicateAssignmentException if already granted."""
        rp = RolePermission(
            role_id=role_id, permission_id=permission_id, granted_by=granted_by
        )
        try:
            async with self.db.begin_nested():
                self.db.add(rp)
        except IntegrityError:
            raise DuplicateAssignmentException(
                "Permission already assigned to role",
                assignment_type="role_permission",
                details_extra={"role_id": role_id, "permission_id": permission_id},
            ) from None

    async def remove_permission_from_role(self, role_id: int, permission_id: int) -> bool:
        """Revoke grant. Returns False if the link did not exist."""
        result = await self.db.execute(
            delete(RolePermission).where(
                RolePermission.role_id == role_id,
                RolePermission.permission_id == permission_id,
            )
        )
        return (result.rowcount or 0) > 0
