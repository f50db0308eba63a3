"""Employee reads and HR edits restricted to the caller's access scope."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from typing import Any

from app.application.dtos.employee import EmployeeResult
from app.domain.access_scope import AccessScope
from app.domain.enums import EmployeeStatus
from app.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.permissions import PermissionCode, normalize_code
from app.shared.utils.datetime import utc_today

logger = logging.getLogger(__name__)

_EDITABLE = frozenset({"first_name", "last_name", "employment_type", "status", "hired_at"})


class EmployeeService:
    """Scoped employee access.

    Every method takes the AccessScope resolved for the caller, so a record
    is visible here exactly when the scoped list would return it.
    """

    def __init__(
        self, employee_repo: Any, today: Callable[[], date] = utc_today
    ) -> None:
        self._repo = employee_repo
        self._today = today

    async def list_employees(self, scope: AccessScope, **filters: Any) -> list[EmployeeResult]:
        return await self._repo.list_employees(scope, **filters)

    async def get_employee(
        self,
        scope: AccessScope,
        employee_id: int,
        code: str | PermissionCode = PermissionCode.HR_EMPLOYEES_VIEW,
    ) -> EmployeeResult:
        """Return the employee, or raise if absent or outside scope."""
        employee = await self._repo.get_employee(employee_id)
        if employee is None:
            raise ResourceNotFoundException("employee", employee_id)
        if not scope.allows_record(employee.org_unit_ids, employee.user_id):
            raise AuthorizationException(
                permission_code=normalize_code(code), target_user_id=employee.user_id
            )
        return employee

    async def update_employee(
        self, scope: AccessScope, employee_id: int, **fields: Any
    ) -> EmployeeResult:
        await self.get_employee(scope, employee_id, PermissionCode.HR_EMPLOYEES_UPDATE)
        changes = {k: v for k, v in fields.items() if k in _EDITABLE and v is not None}
        if not changes:
            raise ValidationException("No fields to update")
        if changes.get("status") == EmployeeStatus.TERMINATED.value:
            changes["terminated_at"] = self._today()
        updated = await self._repo.update_employee(employee_id, **changes)
        logger.info("Updated employee %s fields=%s", employee_id, sorted(changes))
        return updated

    async def terminate_employee(self, scope: AccessScope, employee_id: int) -> EmployeeResult:
        """Soft delete: status terminated, terminated_at today."""
        await self.get_employee(scope, employee_id, PermissionCode.HR_EMPLOYEES_DELETE)
        updated = await self._repo.update_employee(
            employee_id,
            status=EmployeeStatus.TERMINATED.value,
            terminated_at=self._today(),
        )
        logger.info("Terminated employee %s", employee_id)
        return updated
