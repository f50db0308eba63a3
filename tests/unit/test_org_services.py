"""Unit tests for org structure and org assignment services."""

from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from app.application.dtos.org_assignment import OrgAssignmentCreate, OrgAssignmentResult
from app.application.dtos.org_unit import OrgUnitCreate, OrgUnitResult
from app.application.services.org_assignment_service import OrgAssignmentService
from app.application.services.org_hierarchy_service import OrgHierarchyService
from app.application.services.org_structure_service import OrgStructureService
from app.domain.enums import OrgUnitStatus
from app.domain.exceptions import (
    DuplicateAssignmentException,
    DuplicateCodeException,
    HierarchyCycleException,
    ResourceNotFoundException,
    ValidationException,
)
from tests.fakes import TODAY, FakeOrgUnitReader

# Root(1) -> Faculty(2) -> Dept1(3), Dept2(4); Root -> Faculty2(5)
PARENTS = {1: None, 2: 1, 3: 2, 4: 2, 5: 1}


def _unit(unit_id: int) -> OrgUnitResult:
    return OrgUnitResult(
        id=unit_id,
        parent_id=PARENTS.get(unit_id),
        type="department",
        status="active",
        code=f"U{unit_id}",
        name=f"Unit {unit_id}",
        description=None,
    )


def _structure() -> tuple[OrgStructureService, AsyncMock]:
    repo = AsyncMock()
    repo.get_unit.side_effect = lambda uid: _unit(uid) if uid in PARENTS else None
    repo.get_by_code.return_value = None
    repo.update_unit.side_effect = lambda uid, **fields: _unit(uid)
    hierarchy = OrgHierarchyService(FakeOrgUnitReader(PARENTS))
    return OrgStructureService(repo, hierarchy), repo


async def test_create_unit_rejects_duplicate_code() -> None:
    svc, repo = _structure()
    repo.get_by_code.return_value = _unit(2)
    with pytest.raises(DuplicateCodeException):
        await svc.create_unit(OrgUnitCreate(code="U2", name="Dup", type="faculty"))


async def test_create_unit_requires_existing_parent() -> None:
    svc, repo = _structure()
    with pytest.raises(ResourceNotFoundException):
        await svc.create_unit(OrgUnitCreate(code="X", name="X", type="faculty", parent_id=99))
    repo.create_unit.assert_not_awaited()


async def test_move_under_own_descendant_is_rejected() -> None:
    """Faculty(2) cannot move under its own department(4)."""
    svc, repo = _structure()
    with pytest.raises(HierarchyCycleException):
        await svc.update_unit(2, parent_id=4)
    with pytest.raises(HierarchyCycleException):
        await svc.update_unit(2, parent_id=2)
    repo.update_unit.assert_not_awaited()


async def test_move_to_other_faculty_is_allowed() -> None:
    svc, repo = _structure()
    await svc.update_unit(3, parent_id=5)
    repo.update_unit.assert_awaited_once_with(3, parent_id=5)


async def test_move_to_top_level() -> None:
    """Explicit None parent moves the unit to the top level."""
    svc, repo = _structure()
    await svc.update_unit(3, parent_id=None)
    repo.update_unit.assert_awaited_once_with(3, parent_id=None)


async def test_update_without_fields_is_rejected() -> None:
    svc, _ = _structure()
    with pytest.raises(ValidationException):
        await svc.update_unit(3)


async def test_update_maps_unit_type_to_type_column() -> None:
    svc, repo = _structure()
    await svc.update_unit(3, name="Software Engineering", unit_type="department")
    repo.update_unit.assert_awaited_once_with(3, name="Software Engineering", type="department")


async def test_set_status_soft_delete() -> None:
    svc, repo = _structure()
    await svc.set_status(4, OrgUnitStatus.DELETED)
    repo.update_unit.assert_awaited_once_with(4, status="deleted")


async def test_set_status_unknown_unit() -> None:
    svc, _ = _structure()
    with pytest.raises(ResourceNotFoundException):
        await svc.set_status(99, OrgUnitStatus.INACTIVE)


def _assignment_data(**overrides) -> OrgAssignmentCreate:
    fields = dict(employee_id=7, org_unit_id=3, start_date=date(2025, 9, 1))
    fields.update(overrides)
    return OrgAssignmentCreate(**fields)


def _assignments() -> tuple[OrgAssignmentService, AsyncMock]:
    repo = AsyncMock()
    repo.has_active_primary.return_value = False
    unit_repo = AsyncMock()
    unit_repo.get_unit.side_effect = lambda uid: _unit(uid) if uid in PARENTS else None
    employee_repo = AsyncMock()
    employee_repo.get_employee.side_effect = lambda eid: object() if eid == 7 else None
    svc = OrgAssignmentService(repo, unit_repo, employee_repo, today=lambda: TODAY)
    return svc, repo


async def test_create_assignment_validates_references() -> None:
    svc, repo = _assignments()
    with pytest.raises(ResourceNotFoundException):
        await svc.create_assignment(_assignment_data(employee_id=8))
    with pytest.raises(ResourceNotFoundException):
        await svc.create_assignment(_assignment_data(org_unit_id=99))
    repo.create_assignment.assert_not_awaited()


async def test_create_assignment_validates_window_and_allocation() -> None:
    svc, _ = _assignments()
    with pytest.raises(ValidationException):
        await svc.create_assignment(_assignment_data(end_date=date(2025, 1, 1)))
    with pytest.raises(ValidationException):
        await svc.create_assignment(_assignment_data(allocation=Decimal("1.50")))
    with pytest.raises(ValidationException):
        await svc.create_assignment(_assignment_data(allocation=Decimal("0")))


async def test_second_active_primary_in_same_unit_is_rejected() -> None:
    svc, repo = _assignments()
    repo.has_active_primary.return_value = True
    with pytest.raises(DuplicateAssignmentException):
        await svc.create_assignment(_assignment_data(is_primary=True))
    repo.has_active_primary.assert_awaited_once_with(7, 3, TODAY)


async def test_secondary_assignment_skips_primary_check() -> None:
    svc, repo = _assignments()
    repo.has_active_primary.return_value = True
    await svc.create_assignment(_assignment_data(is_primary=False, allocation=Decimal("0.25")))
    repo.create_assignment.assert_awaited_once()


async def test_end_assignment_defaults_to_today() -> None:
    svc, repo = _assignments()
    repo.get_assignment.return_value = OrgAssignmentResult(
        id=1,
        employee_id=7,
        org_unit_id=3,
        position_id=None,
        is_primary=True,
        assignment_type="academic",
        allocation=Decimal("1.00"),
        start_date=date(2025, 9, 1),
        end_date=None,
    )
    await svc.end_assignment(1)
    repo.end_assignment.assert_awaited_once_with(1, TODAY)
    with pytest.raises(ValidationException):
        await svc.end_assignment(1, date(2024, 1, 1))


async def test_end_unknown_assignment() -> None:
    svc, repo = _assignments()
    repo.get_assignment.return_value = None
    with pytest.raises(ResourceNotFoundException):
        await svc.end_assignment(1)
