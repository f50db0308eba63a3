"""Permission codes and flat permission checks.

A permission code is a dotted string ``resource.action`` (e.g.
``hr.employees.update``). Codes are matched exactly; no code implies
another. The check helpers are total: they never raise, whatever the
input (empty code, empty iterable, unknown code).
"""

from collections.abc import Iterable
from enum import Enum

from app.core.constants import PERMISSION_CODE_SEP


class PermissionCode(str, Enum):
    """Permission codes known to the service.

    Call sites pass these instead of raw strings. The catalog table may
    hold additional codes; those are still checked by exact match.
    """

    # HR dashboard and reports
    HR_DASHBOARD_VIEW = "hr.dashboard.view"
    HR_REPORTS_VIEW = "hr.reports.view"

    # Employees
    HR_EMPLOYEES_VIEW = "hr.employees.view"
    HR_EMPLOYEES_CREATE = "hr.employees.create"
    HR_EMPLOYEES_UPDATE = "hr.employees.update"
    HR_EMPLOYEES_DELETE = "hr.employees.delete"

    # Roles
    HR_ROLES_VIEW = "hr.roles.view"
    HR_ROLES_CREATE = "hr.roles.create"
    HR_ROLES_UPDATE = "hr.roles.update"
    HR_ROLES_DELETE = "hr.roles.delete"

    # Permissions
    HR_PERMISSIONS_VIEW = "hr.permissions.view"
    HR_PERMISSIONS_CREATE = "hr.permissions.create"
    HR_PERMISSIONS_UPDATE = "hr.permissions.update"
    HR_PERMISSIONS_DELETE = "hr.permissions.delete"

    # Role permissions
    HR_ROLE_PERMISSIONS_VIEW = "hr.role_permissions.view"
    HR_ROLE_PERMISSIONS_CREATE = "hr.role_permissions.create"
    HR_ROLE_PERMISSIONS_DELETE = "hr.role_permissions.delete"

    # User roles
    HR_USER_ROLES_VIEW = "hr.user_roles.view"
    HR_USER_ROLES_CREATE = "hr.user_roles.create"
    HR_USER_ROLES_DELETE = "hr.user_roles.delete"

    # Organization structure
    HR_ORG_STRUCTURE_VIEW = "hr.org_structure.view"
    HR_ORG_TREE_VIEW = "hr.org_tree.view"
    ORG_UNIT_READ = "org_unit.read"
    ORG_UNIT_CREATE = "org_unit.create"
    ORG_UNIT_UPDATE = "org_unit.update"
    ORG_UNIT_DELETE = "org_unit.delete"

    # Org assignments
    ORG_ASSIGNMENT_READ = "org_assignment.read"
    ORG_ASSIGNMENT_CREATE = "org_assignment.create"
    ORG_ASSIGNMENT_UPDATE = "org_assignment.update"
    ORG_ASSIGNMENT_DELETE = "org_assignment.delete"

    # Own profile
    HR_PROFILE_VIEW = "hr.profile.view"
    HR_PROFILE_UPDATE = "hr.profile.update"

    @classmethod
    def values(cls) -> list[str]:
        """Return all catalog codes as strings."""
        return [member.value for member in cls]


def normalize_code(code: "str | PermissionCode | None") -> str:
    """Return the plain string form of a code (enum members hash by name)."""
    if code is None:
        return ""
    if isinstance(code, Enum):
        return str(code.value)
    return code


def split_code(code: str) -> tuple[str, str]:
    """Split ``resource.action`` at the last separator.

    ``hr.employees.update`` -> ``("hr.employees", "update")``. A code with no
    separator is treated as a bare resource with an empty action.
    """
    code = normalize_code(code)
    resource, sep, action = code.rpartition(PERMISSION_CODE_SEP)
    if not sep:
        return code, ""
    return resource, action


def resource_of(code: str) -> str:
    """Return the resource part of a permission code."""
    return split_code(code)[0]


def has_permission(permissions: Iterable[str], code: str) -> bool:
    """Return True if code is in the resolved permission set."""
    code = normalize_code(code)
    if not code:
        return False
    return code in _as_set(permissions)


def has_any_permission(permissions: Iterable[str], codes: Iterable[str]) -> bool:
    """Return True if at least one code is held. False for an empty list."""
    held = _as_set(permissions)
    wanted = [normalize_code(c) for c in codes or ()]
    return any(c in held for c in wanted if c)


def has_all_permissions(permissions: Iterable[str], codes: Iterable[str]) -> bool:
    """Return True if every code is held. True for an empty list."""
    held = _as_set(permissions)
    wanted = [normalize_code(c) for c in codes or ()]
    return all(bool(c) and c in held for c in wanted)


def _as_set(permissions: Iterable[str] | None) -> frozenset[str]:
    if permissions is None:
        return frozenset()
    return frozenset(normalize_code(p) for p in permissions)
