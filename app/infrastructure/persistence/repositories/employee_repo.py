"""Employee repository: scoped listing and HR attribute updates."""

from __future__ import annotations

from datetime import date

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.employee import EmployeeResult
from app.domain.access_scope import AccessScope
from app.infrastructure.persistence.models.employee import Employee
from app.infrastructure.persistence.models.org_assignment import OrgAssignment
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.org_assignment_repo import active_on
from app.infrastructure.persistence.repositories.scope_filter import scope_filter
from app.shared.utils.datetime import utc_today
from app.shared.utils.sanitization import escape_like


def _employee_to_result(e: Employee, unit_ids: set[int] | None = None) -> EmployeeResult:
    return EmployeeResult(
        id=e.id,
        user_id=e.user_id,
        employee_no=e.employee_no,
        first_name=e.first_name,
        last_name=e.last_name,
        employment_type=e.employment_type,
        status=e.status,
        hired_at=e.hired_at,
        terminated_at=e.terminated_at,
        org_unit_ids=tuple(sorted(unit_ids or ())),
    )


class EmployeeRepository(BaseRepository[Employee]):
    """Employees. A record's units are those of its active org assignments."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Employee)

    async def _active_units(self, employee_ids: list[int], as_of: date) -> dict[int, set[int]]:
        units: dict[int, set[int]] = {eid: set() for eid in employee_ids}
        if not employee_ids:
            return units
        result = await self.db.execute(
            select(OrgAssignment.employee_id, OrgAssignment.org_unit_id).where(
                OrgAssignment.employee_id.in_(employee_ids), active_on(as_of)
            )
        )
        for employee_id, unit_id in result.all():
            units[employee_id].add(unit_id)
        return units

    async def get_employee(self, employee_id: int) -> EmployeeResult | None:
        orm = await self.get_by_id(employee_id)
        if orm is None:
            return None
        units = await self._active_units([orm.id], utc_today())
        return _employee_to_result(orm, units[orm.id])

    async def list_employees(
        self,
        scope: AccessScope,
        *,
        search: str | None = None,
        status: str | None = None,
        org_unit_id: int | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[EmployeeResult]:
        """List employees inside scope; search and filters share the scope's WHERE."""
        today = utc_today()
        conditions = [
            scope_filter(
                scope,
                user_column=Employee.user_id,
                units_clause=lambda ids: Employee.id.in_(
                    select(OrgAssignment.employee_id).where(
                        OrgAssignment.org_unit_id.in_(ids), active_on(today)
                    )
                ),
            )
        ]
        if search:
            pattern = f"%{escape_like(search)}%"
            conditions.append(
                or_(
                    Employee.first_name.ilike(pattern, escape="\\"),
                    Employee.last_name.ilike(pattern, escape="\\"),
                    Employee.employee_no.ilike(pattern, escape="\\"),
                )
            )
        if status:
            conditions.append(Employee.status == status)
        if org_unit_id is not None:
            conditions.append(
                Employee.id.in_(
                    select(OrgAssignment.employee_id).where(
                        OrgAssignment.org_unit_id == org_unit_id, active_on(today)
                    )
                )
            )
        result = await self.db.execute(
            select(Employee)
            .where(and_(*conditions))
            .order_by(Employee.last_name, Employee.first_name)
            .offset(skip)
            .limit(limit)
        )
        rows = list(result.scalars().all())
        units = await self._active_units([e.id for e in rows], today)
        return [_employee_to_result(e, units[e.id]) for e in rows]

    async def update_employee(self, employee_id: int, **fields: object) -> EmployeeResult | None:
        """Set the given HR attributes; returns None if absent."""
        orm = await self.get_by_id(employee_id)
        if orm is None:
            return None
        for key, value in fields.items():
            setattr(orm, key, value)
        updated = await self.update(orm)
        units = await self._active_units([updated.id], utc_today())
        return _employee_to_result(updated, units[updated.id])
