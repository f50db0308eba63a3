"""Tests for scope_filter: AccessScope rendered as a SQL WHERE restriction."""

from sqlalchemy import and_, select
from sqlalchemy.dialects import postgresql

from app.domain.access_scope import AccessScope
from app.domain.enums import AccessTier
from app.infrastructure.persistence.models import Employee, OrgAssignment
from app.infrastructure.persistence.repositories.scope_filter import scope_filter


def _sql(clause) -> str:
    stmt = select(Employee.id).where(clause)
    return str(
        stmt.compile(dialect=postgresql.dialect(), compile_kwargs={"literal_binds": True})
    )


def _scope(tier: AccessTier, units: set[int] | None = None) -> AccessScope:
    return AccessScope(
        tier=tier, user_id=7, resource="hr.employees", unit_ids=frozenset(units or ())
    )


def test_full_scope_is_unrestricted() -> None:
    sql = _sql(scope_filter(_scope(AccessTier.FULL), user_column=Employee.user_id))
    assert "true" in sql.lower()
    assert "user_id" not in sql


def test_unit_scope_uses_in_clause() -> None:
    clause = scope_filter(
        _scope(AccessTier.UNIT, {3, 2}), unit_column=OrgAssignment.org_unit_id
    )
    sql = _sql(clause)
    assert "org_assignment.org_unit_id IN (2, 3)" in sql


def test_empty_unit_scope_matches_nothing() -> None:
    """UNIT tier with no assigned units must not widen to every row."""
    sql = _sql(scope_filter(_scope(AccessTier.UNIT), unit_column=OrgAssignment.org_unit_id))
    assert "false" in sql.lower()
    assert " IN " not in sql


def test_self_scope_filters_on_owner() -> None:
    sql = _sql(scope_filter(_scope(AccessTier.SELF), user_column=Employee.user_id))
    assert "employee.user_id = 7" in sql


def test_self_scope_without_owner_column_matches_nothing() -> None:
    sql = _sql(scope_filter(_scope(AccessTier.SELF), unit_column=OrgAssignment.org_unit_id))
    assert "false" in sql.lower()


def test_custom_units_clause_receives_sorted_ids() -> None:
    seen: list[list[int]] = []

    def units_clause(ids):
        seen.append(list(ids))
        return Employee.id.in_(
            select(OrgAssignment.employee_id).where(OrgAssignment.org_unit_id.in_(ids))
        )

    clause = scope_filter(_scope(AccessTier.UNIT, {9, 4}), units_clause=units_clause)
    assert seen == [[4, 9]]
    assert "org_assignment.org_unit_id IN (4, 9)" in _sql(clause)


def test_scope_is_anded_with_search() -> None:
    """Search predicates narrow the scope, never replace it."""
    clause = and_(
        scope_filter(_scope(AccessTier.SELF), user_column=Employee.user_id),
        Employee.last_name.ilike("%smith%"),
    )
    sql = _sql(clause)
    assert "employee.user_id = 7 AND" in sql
    assert "ILIKE" in sql
