"""Translate an AccessScope into a SQL WHERE restriction.

List queries AND this clause with their search predicates in the same
statement, so the scope cannot be bypassed by omitting a filter.
"""

from __future__ import annotations

from collections.abc import Callable, Collection
from typing import Any

from sqlalchemy import ColumnElement, false, true

from app.domain.access_scope import AccessScope
from app.domain.enums import AccessTier

UnitsClause = Callable[[Collection[int]], ColumnElement[bool]]
SelfClause = Callable[[int], ColumnElement[bool]]


def scope_filter(
    scope: AccessScope,
    unit_column: Any = None,
    user_column: Any = None,
    *,
    units_clause: UnitsClause | None = None,
    self_clause: SelfClause | None = None,
) -> ColumnElement[bool]:
    """Return the restriction for scope.

    FULL: no restriction. UNIT: record's unit in scope.unit_ids (an empty
    set matches nothing). SELF: record owned by scope.user_id.

    units_clause / self_clause replace the plain column comparisons when a
    record reaches its unit or owner through a join (e.g. employees through
    org assignments).
    """
    if scope.tier is AccessTier.FULL:
        return true()
    if scope.tier is AccessTier.UNIT:
        if not scope.unit_ids:
            return false()
        ids = sorted(scope.unit_ids)
        if units_clause is not None:
            return units_clause(ids)
        if unit_column is not None:
            return unit_column.in_(ids)
        return false()
    if self_clause is not None:
        return self_clause(scope.user_id)
    if user_column is not None:
        return user_column == scope.user_id
    return false()
