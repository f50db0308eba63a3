"""Org assignment index: user -> active assignments -> home org units."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from app.application.dtos.org_assignment import OrgAssignmentResult
from app.application.interfaces.repositories import IOrgAssignmentReader
from app.shared.utils.datetime import utc_today


class OrgAssignmentIndex:
    """Answers which units a user belongs to, as of today.

    A user with no employee record, or an employee with no active
    assignment, has an empty home-unit set. Callers treat that as no scope.
    """

    def __init__(
        self,
        assignment_reader: IOrgAssignmentReader,
        primary_only: bool = False,
        today: Callable[[], date] = utc_today,
    ) -> None:
        self.assignment_reader = assignment_reader
        self.primary_only = primary_only
        self._today = today
        self._cache: dict[int, list[OrgAssignmentResult]] = {}

    async def active_assignments_for_user(
        self, user_id: int
    ) -> list[OrgAssignmentResult]:
        """Assignments with end_date null or not yet past, for the user's employee."""
        if user_id in self._cache:
            return self._cache[user_id]
        employee_id = await self.assignment_reader.get_employee_id_for_user(user_id)
        if employee_id is None:
            rows: list[OrgAssignmentResult] = []
        else:
            as_of = self._today()
            rows = [
                a
                for a in await self.assignment_reader.list_active_for_employee(
                    employee_id, as_of
                )
                if a.is_active_on(as_of)
            ]
        self._cache[user_id] = rows
        return rows

    async def active_unit_ids(self, user_id: int) -> frozenset[int]:
        """Every unit the user is actively assigned to (primary or not)."""
        rows = await self.active_assignments_for_user(user_id)
        return frozenset(a.org_unit_id for a in rows)

    async def home_unit_ids(self, user_id: int) -> frozenset[int]:
        """Units seeding the user's management scope.

        All active units, or only primary ones when primary_only is set.
        """
        rows = await self.active_assignments_for_user(user_id)
        if self.primary_only:
            rows = [a for a in rows if a.is_primary]
        return frozenset(a.org_unit_id for a in rows)
