"""Org assignment application service: place employees in units and end placements."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import Any

from app.application.dtos.org_assignment import OrgAssignmentCreate, OrgAssignmentResult
from app.domain.exceptions import (
    DuplicateAssignmentException,
    ResourceNotFoundException,
    ValidationException,
)
from app.shared.utils.datetime import utc_today


class OrgAssignmentService:
    """Create and end org assignments.

    Assignment changes alter unit scope, not permission codes, so no cache
    invalidation is needed: scope is recomputed on every request.
    """

    def __init__(
        self,
        assignment_repo: Any,
        unit_repo: Any,
        employee_repo: Any,
        today: Callable[[], date] = utc_today,
    ) -> None:
        self._repo = assignment_repo
        self._unit_repo = unit_repo
        self._employee_repo = employee_repo
        self._today = today

    async def create_assignment(self, data: OrgAssignmentCreate) -> OrgAssignmentResult:
        """Create assignment.

        Raises:
            ResourceNotFoundException: Unknown employee or unit.
            ValidationException: end_date before start_date, or allocation out of (0, 1].
            DuplicateAssignmentException: Second active primary for the same employee and unit.
        """
        if await self._employee_repo.get_employee(data.employee_id) is None:
            raise ResourceNotFoundException("employee", data.employee_id)
        if await self._unit_repo.get_unit(data.org_unit_id) is None:
            raise ResourceNotFoundException("org_unit", data.org_unit_id)
        if data.end_date is not None and data.end_date < data.start_date:
            raise ValidationException("end_date must not be before start_date", field="end_date")
        if not (0 < data.allocation <= 1):
            raise ValidationException("allocation must be in (0, 1]", field="allocation")
        if data.is_primary and await self._repo.has_active_primary(
            data.employee_id, data.org_unit_id, self._today()
        ):
            raise DuplicateAssignmentException(
                "Employee already has an active primary assignment in this unit",
                assignment_type="org_assignment",
                details_extra={
                    "employee_id": data.employee_id,
                    "org_unit_id": data.org_unit_id,
                },
            )
        return await self._repo.create_assignment(data)

    async def end_assignment(
        self, assignment_id: int, end_date: date | None = None
    ) -> OrgAssignmentResult:
        """Close the validity window (defaults to today)."""
        current = await self._repo.get_assignment(assignment_id)
        if current is None:
            raise ResourceNotFoundException("org_assignment", assignment_id)
        end = end_date or self._today()
        if end < current.start_date:
            raise ValidationException("end_date must not be before start_date", field="end_date")
        return await self._repo.end_assignment(assignment_id, end)
