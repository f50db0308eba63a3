"""In-memory stand-ins for the repositories the authorization core reads.

Fixtures describe a university as plain dicts: unit id -> parent id,
user id -> role ids, role id -> codes, user id -> assignments.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from app.application.dtos.org_assignment import OrgAssignmentResult
from app.application.services.authorization_service import AuthorizationService
from app.application.services.org_assignment_index import OrgAssignmentIndex
from app.application.services.org_hierarchy_service import OrgHierarchyService
from app.application.services.permission_resolver import PermissionResolver
from app.domain.access_scope import ScopePolicyRegistry
from app.domain.org_tree import OrgNode

TODAY = date(2026, 3, 1)

Assignment = tuple[int, bool, date | None]


class FakeRoleReader:
    def __init__(self, user_roles: dict[int, list[int]]) -> None:
        self.user_roles = user_roles
        self.calls = 0

    async def list_role_ids_for_user(self, user_id: int) -> list[int]:
        self.calls += 1
        return list(self.user_roles.get(user_id, []))


class FakeCatalogReader:
    def __init__(self, role_codes: dict[int, set[str]]) -> None:
        self.role_codes = role_codes

    async def list_codes_for_roles(self, role_ids: Iterable[int]) -> set[str]:
        codes: set[str] = set()
        for role_id in role_ids:
            codes |= self.role_codes.get(role_id, set())
        return codes


class FakeOrgUnitReader:
    """parents maps unit id -> parent id (None for a root)."""

    def __init__(self, parents: dict[int, int | None]) -> None:
        self.parents = parents
        self.child_queries = 0

    async def list_child_ids(self, parent_ids: Iterable[int]) -> list[tuple[int, int]]:
        self.child_queries += 1
        wanted = set(parent_ids)
        return [(u, p) for u, p in self.parents.items() if p in wanted]

    async def exists(self, unit_id: int) -> bool:
        return unit_id in self.parents

    async def list_tree_nodes(self) -> list[OrgNode]:
        return [
            OrgNode(id=u, parent_id=p, code=f"U{u}", name=f"Unit {u}")
            for u, p in self.parents.items()
        ]


class FakeAssignmentReader:
    """assignments maps user id -> [(unit id, is_primary, end_date)].

    Employee ids mirror user ids; a user without an entry is non-staff.
    """

    def __init__(self, assignments: dict[int, list[Assignment]]) -> None:
        self.assignments = assignments

    async def get_employee_id_for_user(self, user_id: int) -> int | None:
        return user_id if user_id in self.assignments else None

    async def list_active_for_employee(
        self, employee_id: int, as_of: date
    ) -> list[OrgAssignmentResult]:
        return [
            OrgAssignmentResult(
                id=employee_id * 100 + n,
                employee_id=employee_id,
                org_unit_id=unit_id,
                position_id=None,
                is_primary=is_primary,
                assignment_type="academic",
                allocation=Decimal("1.00"),
                start_date=date(2020, 1, 1),
                end_date=end_date,
            )
            for n, (unit_id, is_primary, end_date) in enumerate(
                self.assignments.get(employee_id, [])
            )
        ]


def home(*unit_ids: int) -> list[Assignment]:
    """Open-ended assignments to unit_ids; the first is primary."""
    return [(u, i == 0, None) for i, u in enumerate(unit_ids)]


def build_authz(
    *,
    parents: dict[int, int | None] | None = None,
    user_roles: dict[int, list[int]] | None = None,
    role_codes: dict[int, set[str]] | None = None,
    assignments: dict[int, list[Assignment]] | None = None,
    policies: ScopePolicyRegistry | None = None,
    permission_cache=None,
    primary_only: bool = False,
) -> AuthorizationService:
    """AuthorizationService wired to in-memory readers."""
    return AuthorizationService(
        permission_resolver=PermissionResolver(
            role_reader=FakeRoleReader(user_roles or {}),
            catalog_reader=FakeCatalogReader(role_codes or {}),
        ),
        hierarchy=OrgHierarchyService(FakeOrgUnitReader(parents or {})),
        assignment_index=OrgAssignmentIndex(
            FakeAssignmentReader(assignments or {}),
            primary_only=primary_only,
            today=lambda: TODAY,
        ),
        permission_cache=permission_cache,
        policies=policies,
    )
