"""Tests for OrgAssignmentIndex (home units and active assignments)."""

from datetime import date

from app.application.services.org_assignment_index import OrgAssignmentIndex
from tests.fakes import TODAY, FakeAssignmentReader


def _index(assignments, primary_only: bool = False) -> OrgAssignmentIndex:
    return OrgAssignmentIndex(
        FakeAssignmentReader(assignments), primary_only=primary_only, today=lambda: TODAY
    )


async def test_user_without_employee_has_no_home_units() -> None:
    """Non-staff actor: empty set, not an error."""
    index = _index({})
    assert await index.home_unit_ids(7) == frozenset()
    assert await index.active_assignments_for_user(7) == []


async def test_employee_without_assignments_has_no_home_units() -> None:
    assert await _index({7: []}).home_unit_ids(7) == frozenset()


async def test_multiple_active_assignments_all_count() -> None:
    """Secondary teaching assignment widens the home-unit set."""
    index = _index({7: [(10, True, None), (20, False, None)]})
    assert await index.home_unit_ids(7) == {10, 20}
    assert await index.active_unit_ids(7) == {10, 20}


async def test_primary_only_restricts_home_units() -> None:
    """With primary_only, secondary units still count as membership but not as scope seeds."""
    index = _index({7: [(10, True, None), (20, False, None)]}, primary_only=True)
    assert await index.home_unit_ids(7) == {10}
    assert await index.active_unit_ids(7) == {10, 20}


async def test_ended_assignment_is_not_active() -> None:
    """end_date before today drops the assignment; end_date today keeps it."""
    index = _index(
        {
            7: [
                (10, True, date(2025, 12, 31)),
                (20, False, TODAY),
                (30, False, None),
            ]
        }
    )
    assert await index.home_unit_ids(7) == {20, 30}
