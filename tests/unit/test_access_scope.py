"""Tests for AccessScope, ScopePolicy and the policy registry."""

from app.domain.access_scope import AccessScope, ScopePolicy, ScopePolicyRegistry
from app.domain.enums import AccessTier
from app.domain.permissions import PermissionCode


def test_default_policy_triggers() -> None:
    policy = ScopePolicy.default_for("hr.employees")
    assert policy.full_scope == {"hr.employees.delete"}
    assert policy.unit_scope == {"hr.employees.update"}


def test_resolve_tier_first_match_wins() -> None:
    policy = ScopePolicy.default_for("hr.employees")
    both = frozenset({"hr.employees.update", "hr.employees.delete"})
    assert policy.resolve_tier(both) is AccessTier.FULL
    assert policy.resolve_tier(frozenset({"hr.employees.update"})) is AccessTier.UNIT
    assert policy.resolve_tier(frozenset({"hr.employees.view"})) is AccessTier.SELF
    assert policy.resolve_tier(frozenset()) is AccessTier.SELF


def test_registry_falls_back_to_default() -> None:
    registry = ScopePolicyRegistry()
    assert registry.policy_for("org_unit") == ScopePolicy.default_for("org_unit")


def test_from_config_keeps_default_for_missing_key() -> None:
    """Only unit_scope configured: full_scope stays the delete trigger."""
    registry = ScopePolicyRegistry.from_config(
        {"hr.employees": {"unit_scope": ["hr.employees.update", "employee.update"]}}
    )
    policy = registry.policy_for("hr.employees")
    assert policy.full_scope == {"hr.employees.delete"}
    assert policy.unit_scope == {"hr.employees.update", "employee.update"}


def test_from_config_normalizes_enum_codes() -> None:
    registry = ScopePolicyRegistry.from_config(
        {"hr.employees": {"full_scope": [PermissionCode.HR_EMPLOYEES_DELETE]}}
    )
    assert "hr.employees.delete" in registry.policy_for("hr.employees").full_scope


def test_from_config_none_is_empty_registry() -> None:
    assert ScopePolicyRegistry.from_config(None).policy_for("x") == ScopePolicy.default_for("x")


def test_register_overrides_policy() -> None:
    registry = ScopePolicyRegistry()
    custom = ScopePolicy("hr.employees", frozenset({"hr.admin"}), frozenset())
    registry.register(custom)
    assert registry.policy_for("hr.employees") is custom


def test_full_scope_allows_everything() -> None:
    scope = AccessScope(AccessTier.FULL, user_id=1, resource="hr.employees")
    assert scope.is_unrestricted
    assert scope.allows_unit(None) is True
    assert scope.allows_any_unit([]) is True
    assert scope.allows_user(2) is True
    assert scope.allows_record([], None) is True


def test_unit_scope_matches_units_only() -> None:
    scope = AccessScope(
        AccessTier.UNIT, user_id=1, resource="hr.employees", unit_ids=frozenset({2, 3})
    )
    assert scope.allows_unit(3) is True
    assert scope.allows_unit(4) is False
    assert scope.allows_unit(None) is False
    assert scope.allows_any_unit([4, 3]) is True
    assert scope.allows_any_unit([]) is False
    assert scope.allows_record([3], owner_user_id=99) is True
    assert scope.allows_record([4], owner_user_id=1) is False


def test_self_scope_matches_owner_only() -> None:
    scope = AccessScope(AccessTier.SELF, user_id=7, resource="hr.employees")
    assert scope.allows_unit(1) is False
    assert scope.allows_user(7) is True
    assert scope.allows_user(None) is False
    assert scope.allows_record([1, 2], owner_user_id=7) is True
    assert scope.allows_record([1, 2], owner_user_id=8) is False
    assert scope.allows_record([], owner_user_id=None) is False
