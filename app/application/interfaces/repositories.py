"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.

The authorization core consumes four read operations: roles for a user,
permission codes for a set of roles, org units by parent, and active org
assignments for an employee. The remaining protocols cover catalog and
structure writes.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.employee import EmployeeResult
    from app.application.dtos.org_assignment import (
        OrgAssignmentCreate,
        OrgAssignmentResult,
    )
    from app.application.dtos.org_unit import OrgUnitCreate, OrgUnitResult
    from app.application.dtos.permission import PermissionResult
    from app.application.dtos.role import RoleResult, UserRoleResult
    from app.application.dtos.user import UserResult
    from app.domain.org_tree import OrgNode


# Role assignment store (read)
class IRoleAssignmentReader(Protocol):
    """Which roles a user holds."""

    async def list_role_ids_for_user(self, user_id: int) -> list[int]:
        """Return ids of roles held by user (empty for unknown user)."""


# Permission catalog (read)
class IPermissionCatalogReader(Protocol):
    """Role -> permission code expansion."""

    async def list_codes_for_roles(self, role_ids: Iterable[int]) -> set[str]:
        """Return permission codes granted to any of the active roles."""


# Organization hierarchy (read)
class IOrgUnitReader(Protocol):
    """Parent -> children edges of the org tree."""

    async def list_child_ids(self, parent_ids: Iterable[int]) -> list[tuple[int, int]]:
        """Return (child_id, parent_id) pairs for children of the given parents."""

    async def exists(self, unit_id: int) -> bool:
        """Return True if the unit row exists (any status)."""

    async def list_tree_nodes(self) -> list[OrgNode]:
        """Return one OrgNode (id, parent_id and labels) per non-deleted unit."""


# Org assignment index (read)
class IOrgAssignmentReader(Protocol):
    """Active org assignments for an employee, and the user -> employee link."""

    async def get_employee_id_for_user(self, user_id: int) -> int | None:
        """Return the employee id linked to user, or None (non-staff actor)."""

    async def list_active_for_employee(
        self, employee_id: int, as_of: date
    ) -> list[OrgAssignmentResult]:
        """Return assignments with end_date null or >= as_of."""


class IUserRepository(Protocol):
    """Protocol for user repository (DIP)."""

    async def get_user(self, user_id: int) -> UserResult | None:
        """Return user by ID."""

    async def get_by_username(self, username: str) -> UserResult | None:
        """Return user by username."""


class IRoleRepository(Protocol):
    """Protocol for role catalog writes and lookups."""

    async def get_by_code(self, code: str) -> RoleResult | None:
        """Return role by code."""

    async def create_role(
        self, code: str, name: str, description: str | None = None
    ) -> RoleResult:
        """Create a role."""


class IPermissionRepository(Protocol):
    """Protocol for permission catalog writes and lookups."""

    async def get_by_code(self, code: str) -> PermissionResult | None:
        """Return permission by code."""

    async def create_permission(
        self, code: str, name: str, description: str | None = None
    ) -> PermissionResult:
        """Create a permission."""


class IUserRoleRepository(Protocol):
    """Protocol for user-role links (single-row writes)."""

    async def assign_role_to_user(
        self, user_id: int, role_id: int, assigned_by: int | None = None
    ) -> None:
        """Link user and role; raises DuplicateAssignmentException if linked."""

    async def remove_role_from_user(self, user_id: int, role_id: int) -> bool:
        """Unlink user and role; returns False if the link did not exist."""

    async def get_user_roles(self, user_id: int) -> list[UserRoleResult]:
        """Return roles held by user."""


class IOrgUnitRepository(IOrgUnitReader, Protocol):
    """Protocol for org unit structure reads and writes."""

    async def get_unit(self, unit_id: int) -> OrgUnitResult | None:
        """Return unit by ID."""

    async def create_unit(self, data: OrgUnitCreate) -> OrgUnitResult:
        """Create a unit."""


class IOrgAssignmentRepository(IOrgAssignmentReader, Protocol):
    """Protocol for org assignment reads and writes."""

    async def create_assignment(self, data: OrgAssignmentCreate) -> OrgAssignmentResult:
        """Create an assignment."""


class IEmployeeRepository(Protocol):
    """Protocol for employee reads."""

    async def get_employee(self, employee_id: int) -> EmployeeResult | None:
        """Return employee by ID with active unit ids."""
