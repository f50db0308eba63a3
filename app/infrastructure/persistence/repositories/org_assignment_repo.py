"""OrgAssignment repository: employee placements and the user -> unit index."""

from __future__ import annotations

from datetime import date

from sqlalchemy import ColumnElement, and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.org_assignment import OrgAssignmentCreate, OrgAssignmentResult
from app.domain.access_scope import AccessScope
from app.infrastructure.persistence.models.employee import Employee
from app.infrastructure.persistence.models.org_assignment import OrgAssignment
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.scope_filter import scope_filter


def active_on(as_of: date) -> ColumnElement[bool]:
    """Open-ended, or end_date not yet passed."""
    return or_(OrgAssignment.end_date.is_(None), OrgAssignment.end_date >= as_of)


def _assignment_to_result(a: OrgAssignment) -> OrgAssignmentResult:
    return OrgAssignmentResult(
        id=a.id,
        employee_id=a.employee_id,
        org_unit_id=a.org_unit_id,
        position_id=a.position_id,
        is_primary=a.is_primary,
        assignment_type=a.assignment_type,
        allocation=a.allocation,
        start_date=a.start_date,
        end_date=a.end_date,
    )


class OrgAssignmentRepository(BaseRepository[OrgAssignment]):
    """Org assignments. Read methods return OrgAssignmentResult."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, OrgAssignment)

    async def get_employee_id_for_user(self, user_id: int) -> int | None:
        result = await self.db.execute(
            select(Employee.id).where(Employee.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def list_active_for_employee(
        self, employee_id: int, as_of: date
    ) -> list[OrgAssignmentResult]:
        result = await self.db.execute(
            select(OrgAssignment)
            .where(OrgAssignment.employee_id == employee_id, active_on(as_of))
            .order_by(OrgAssignment.is_primary.desc(), OrgAssignment.id)
        )
        return [_assignment_to_result(a) for a in result.scalars().all()]

    async def get_assignment(self, assignment_id: int) -> OrgAssignmentResult | None:
        orm = await self.get_by_id(assignment_id)
        return _assignment_to_result(orm) if orm else None

    async def has_active_primary(
        self, employee_id: int, org_unit_id: int, as_of: date
    ) -> bool:
        result = await self.db.execute(
            select(OrgAssignment.id)
            .where(
                OrgAssignment.employee_id == employee_id,
                OrgAssignment.org_unit_id == org_unit_id,
                OrgAssignment.is_primary.is_(True),
                active_on(as_of),
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def create_assignment(self, data: OrgAssignmentCreate) -> OrgAssignmentResult:
        created = await self.create(
            OrgAssignment(
                employee_id=data.employee_id,
                org_unit_id=data.org_unit_id,
                position_id=data.position_id,
                is_primary=data.is_primary,
                assignment_type=data.assignment_type,
                allocation=data.allocation,
                start_date=data.start_date,
                end_date=data.end_date,
            )
        )
        return _assignment_to_result(created)

    async def end_assignment(
        self, assignment_id: int, end_date: date
    ) -> OrgAssignmentResult | None:
        orm = await self.get_by_id(assignment_id)
        if orm is None:
            return None
        orm.end_date = end_date
        updated = await self.update(orm)
        return _assignment_to_result(updated)

    async def list_assignments(
        self,
        scope: AccessScope,
        *,
        employee_id: int | None = None,
        org_unit_id: int | None = None,
        assignment_type: str | None = None,
        active_as_of: date | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[OrgAssignmentResult]:
        """List assignments inside scope; optional filters are ANDed with it."""
        conditions = [
            scope_filter(
                scope,
                unit_column=OrgAssignment.org_unit_id,
                self_clause=lambda uid: OrgAssignment.employee_id.in_(
                    select(Employee.id).where(Employee.user_id == uid)
                ),
            )
        ]
        if employee_id is not None:
            conditions.append(OrgAssignment.employee_id == employee_id)
        if org_unit_id is not None:
            conditions.append(OrgAssignment.org_unit_id == org_unit_id)
        if assignment_type:
            conditions.append(OrgAssignment.assignment_type == assignment_type)
        if active_as_of is not None:
            conditions.append(active_on(active_as_of))
        result = await self.db.execute(
            select(OrgAssignment)
            .where(and_(*conditions))
            .order_by(OrgAssignment.id)
            .offset(skip)
            .limit(limit)
        )
        return [_assignment_to_result(a) for a in result.scalars().all()]
