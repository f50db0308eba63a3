"""OrgUnit repository: tree edges for hierarchy traversal plus structure writes."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.org_unit import OrgUnitCreate, OrgUnitResult
from app.domain.access_scope import AccessScope
from app.domain.enums import OrgUnitStatus
from app.domain.org_tree import OrgNode
from app.infrastructure.persistence.models.employee import Employee
from app.infrastructure.persistence.models.org_assignment import OrgAssignment
from app.infrastructure.persistence.models.org_unit import OrgUnit
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.org_assignment_repo import active_on
from app.infrastructure.persistence.repositories.scope_filter import scope_filter
from app.shared.utils.datetime import utc_today
from app.shared.utils.sanitization import escape_like


def _unit_to_result(u: OrgUnit) -> OrgUnitResult:
    return OrgUnitResult(
        id=u.id,
        parent_id=u.parent_id,
        type=u.type,
        status=u.status,
        code=u.code,
        name=u.name,
        description=u.description,
    )


class OrgUnitRepository(BaseRepository[OrgUnit]):
    """Org units. Edge reads ignore status so scoping follows the stored tree."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, OrgUnit)

    async def exists(self, unit_id: int) -> bool:
        result = await self.db.execute(select(OrgUnit.id).where(OrgUnit.id == unit_id))
        return result.scalar_one_or_none() is not None

    async def list_child_ids(self, parent_ids: Iterable[int]) -> list[tuple[int, int]]:
        ids = list(parent_ids)
        if not ids:
            return []
        result = await self.db.execute(
            select(OrgUnit.id, OrgUnit.parent_id).where(OrgUnit.parent_id.in_(ids))
        )
        return [(child_id, parent_id) for child_id, parent_id in result.all()]

    async def list_tree_nodes(self) -> list[OrgNode]:
        result = await self.db.execute(
            select(
                OrgUnit.id,
                OrgUnit.parent_id,
                OrgUnit.code,
                OrgUnit.name,
                OrgUnit.type,
                OrgUnit.status,
            ).where(OrgUnit.status != OrgUnitStatus.DELETED.value)
        )
        return [
            OrgNode(
                id=row.id,
                parent_id=row.parent_id,
                code=row.code,
                name=row.name,
                type=row.type,
                status=row.status,
            )
            for row in result.all()
        ]

    async def get_unit(self, unit_id: int) -> OrgUnitResult | None:
        orm = await self.get_by_id(unit_id)
        return _unit_to_result(orm) if orm else None

    async def get_by_code(self, code: str) -> OrgUnitResult | None:
        result = await self.db.execute(select(OrgUnit).where(OrgUnit.code == code))
        row = result.scalar_one_or_none()
        return _unit_to_result(row) if row else None

    async def list_units(
        self,
        scope: AccessScope,
        *,
        search: str | None = None,
        unit_type: str | None = None,
        status: str | None = None,
        parent_id: int | None = None,
        include_deleted: bool = False,
        as_of: date | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[OrgUnitResult]:
        """List units inside scope. Search and filters share the scope's WHERE.

        SELF scope over units means the units the user is assigned to.
        """
        day = as_of or utc_today()
        conditions = [
            scope_filter(
                scope,
                unit_column=OrgUnit.id,
                self_clause=lambda uid: OrgUnit.id.in_(
                    select(OrgAssignment.org_unit_id)
                    .join(Employee, Employee.id == OrgAssignment.employee_id)
                    .where(Employee.user_id == uid, active_on(day))
                ),
            )
        ]
        if search:
            pattern = f"%{escape_like(search)}%"
            conditions.append(
                or_(
                    OrgUnit.name.ilike(pattern, escape="\\"),
                    OrgUnit.code.ilike(pattern, escape="\\"),
                )
            )
        if unit_type:
            conditions.append(OrgUnit.type == unit_type)
        if status:
            conditions.append(OrgUnit.status == status)
        elif not include_deleted:
            conditions.append(OrgUnit.status != OrgUnitStatus.DELETED.value)
        if parent_id is not None:
            conditions.append(OrgUnit.parent_id == parent_id)
        result = await self.db.execute(
            select(OrgUnit)
            .where(and_(*conditions))
            .order_by(OrgUnit.name)
            .offset(skip)
            .limit(limit)
        )
        return [_unit_to_result(u) for u in result.scalars().all()]

    async def create_unit(self, data: OrgUnitCreate) -> OrgUnitResult:
        created = await self.create(
            OrgUnit(
                code=data.code,
                name=data.name,
                type=data.type,
                parent_id=data.parent_id,
                description=data.description,
            )
        )
        return _unit_to_result(created)

    async def update_unit(self, unit_id: int, **fields: object) -> OrgUnitResult | None:
        """Set the given attributes (name, type, status, description, parent_id)."""
        orm = await self.get_by_id(unit_id)
        if orm is None:
            return None
        for key, value in fields.items():
            setattr(orm, key, value)
        updated = await self.update(orm)
        return _unit_to_result(updated)
