"""Org structure, assignment and employee dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.services.employee_service import EmployeeService
from app.application.services.org_assignment_service import OrgAssignmentService
from app.application.services.org_hierarchy_service import OrgHierarchyService
from app.application.services.org_structure_service import OrgStructureService
from app.infrastructure.persistence.database import get_db, get_db_transactional
from app.infrastructure.persistence.repositories import (
    EmployeeRepository,
    OrgAssignmentRepository,
    OrgUnitRepository,
)


async def get_org_unit_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> OrgUnitRepository:
    """Org unit repository for read operations."""
    return OrgUnitRepository(db)


async def get_org_unit_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> OrgUnitRepository:
    """Org unit repository for create/update/move (transactional)."""
    return OrgUnitRepository(db)


async def get_org_assignment_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> OrgAssignmentRepository:
    return OrgAssignmentRepository(db)


async def get_employee_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> EmployeeRepository:
    return EmployeeRepository(db)


async def get_org_hierarchy(
    unit_repo: Annotated[OrgUnitRepository, Depends(get_org_unit_repo)],
) -> OrgHierarchyService:
    """Fresh hierarchy per request (memo is request-local)."""
    return OrgHierarchyService(unit_repo)


def get_org_structure_service(
    unit_repo: Annotated[OrgUnitRepository, Depends(get_org_unit_repo_for_write)],
) -> OrgStructureService:
    """Structure writes; cycle checks read through the same transaction."""
    return OrgStructureService(unit_repo=unit_repo, hierarchy=OrgHierarchyService(unit_repo))


def get_org_assignment_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> OrgAssignmentService:
    """Assignment writes; unit and employee checks share the write session."""
    return OrgAssignmentService(
        assignment_repo=OrgAssignmentRepository(db),
        unit_repo=OrgUnitRepository(db),
        employee_repo=EmployeeRepository(db),
    )


def get_employee_service(
    employee_repo: Annotated[EmployeeRepository, Depends(get_employee_repo)],
) -> EmployeeService:
    """Employee reads (read session)."""
    return EmployeeService(employee_repo)


def get_employee_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> EmployeeService:
    """Employee edits and soft delete (transactional)."""
    return EmployeeService(EmployeeRepository(db))
