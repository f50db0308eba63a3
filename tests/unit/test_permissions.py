"""Tests for permission codes and the flat permission checks."""

import pytest

from app.domain.permissions import (
    PermissionCode,
    has_all_permissions,
    has_any_permission,
    has_permission,
    normalize_code,
    resource_of,
    split_code,
)

HELD = frozenset({"hr.employees.view", "hr.employees.update", "org_unit.read"})


def test_has_permission_exact_match_only() -> None:
    """No code implies another: update does not grant view-level siblings it lacks."""
    assert has_permission(HELD, "hr.employees.update") is True
    assert has_permission(HELD, "hr.employees.delete") is False
    assert has_permission(HELD, "hr.employees") is False


def test_has_permission_accepts_enum_members() -> None:
    """PermissionCode members match the same string in the resolved set."""
    assert has_permission(HELD, PermissionCode.HR_EMPLOYEES_VIEW) is True
    assert has_permission({PermissionCode.ORG_UNIT_READ}, "org_unit.read") is True


@pytest.mark.parametrize("code", ["", None])
def test_has_permission_is_total_for_empty_code(code) -> None:
    """Empty or missing code is simply not held."""
    assert has_permission(HELD, code) is False
    assert has_permission(frozenset(), code) is False


def test_has_any_permission() -> None:
    """Logical OR; False for an empty list."""
    assert has_any_permission(HELD, ["hr.roles.view", "org_unit.read"]) is True
    assert has_any_permission(HELD, ["hr.roles.view"]) is False
    assert has_any_permission(HELD, []) is False
    assert has_any_permission(frozenset(), ["org_unit.read"]) is False


def test_has_all_permissions() -> None:
    """Logical AND; True for an empty list, False if any code is empty."""
    assert has_all_permissions(HELD, ["hr.employees.view", "org_unit.read"]) is True
    assert has_all_permissions(HELD, ["hr.employees.view", "hr.roles.view"]) is False
    assert has_all_permissions(HELD, []) is True
    assert has_all_permissions(HELD, ["hr.employees.view", ""]) is False


def test_checks_accept_none_permission_set() -> None:
    """A missing permission set behaves like an empty one."""
    assert has_permission(None, "org_unit.read") is False
    assert has_any_permission(None, ["org_unit.read"]) is False
    assert has_all_permissions(None, []) is True


def test_split_code_uses_last_separator() -> None:
    """Resource may itself contain dots; action is the last segment."""
    assert split_code("hr.employees.update") == ("hr.employees", "update")
    assert split_code("org_unit.read") == ("org_unit", "read")
    assert split_code("standalone") == ("standalone", "")
    assert resource_of(PermissionCode.HR_ROLE_PERMISSIONS_DELETE) == "hr.role_permissions"


def test_normalize_code() -> None:
    """Enum members become their value; None becomes empty string."""
    assert normalize_code(PermissionCode.ORG_UNIT_CREATE) == "org_unit.create"
    assert normalize_code("x.y") == "x.y"
    assert normalize_code(None) == ""


def test_catalog_values_are_unique_and_well_formed() -> None:
    """Every catalog code has a resource and an action."""
    values = PermissionCode.values()
    assert len(values) == len(set(values))
    for code in values:
        resource, action = split_code(code)
        assert resource and action, code
