"""Seed a small demo university: org tree, users, employees, assignments.

Run scripts.seed_rbac first; roles are looked up by code.

Tree:
    UNI (university)
    +-- FICT (faculty)       dean_ict is assigned here
    |   +-- DCS (department) lecturer_cs is assigned here
    |   +-- DIS (department)
    +-- FBUS (faculty)

Users (password for all: ``changeme123``):
    admin        ADMIN         no assignment, full scope everywhere
    dean_ict     HEAD_FACULTY  unit scope over FICT, DCS, DIS
    lecturer_cs  LECTURER      self scope

Usage:
    uv run python -m scripts.seed_dev_data
"""

import asyncio
import sys
from datetime import date
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos import OrgAssignmentCreate, OrgUnitCreate
from app.core.config import get_settings
from app.domain.enums import AssignmentType, OrgUnitType
from app.infrastructure.persistence import database
from app.infrastructure.persistence.models import Employee
from app.infrastructure.persistence.repositories import (
    OrgAssignmentRepository,
    OrgUnitRepository,
    RoleRepository,
    UserRepository,
    UserRoleRepository,
)
from app.infrastructure.security.password import get_password_hash

DEMO_PASSWORD = "changeme123"

# code, name, type, parent code
UNITS = [
    ("UNI", "Demo University", OrgUnitType.UNIVERSITY, None),
    ("FICT", "Faculty of ICT", OrgUnitType.FACULTY, "UNI"),
    ("DCS", "Department of Computer Science", OrgUnitType.DEPARTMENT, "FICT"),
    ("DIS", "Department of Information Systems", OrgUnitType.DEPARTMENT, "FICT"),
    ("FBUS", "Faculty of Business", OrgUnitType.FACULTY, "UNI"),
]

# username, full name, role code, employee no, home unit code
USERS = [
    ("admin", "System Administrator", "ADMIN", None, None),
    ("dean_ict", "Dean of ICT", "HEAD_FACULTY", "E-0001", "FICT"),
    ("lecturer_cs", "CS Lecturer", "LECTURER", "E-0002", "DCS"),
]


def _load_env() -> None:
    load_dotenv(Path(__file__).resolve().parent.parent / ".env", override=True)


async def seed(session: AsyncSession) -> None:
    unit_repo = OrgUnitRepository(session)
    user_repo = UserRepository(session)
    role_repo = RoleRepository(session)
    user_roles = UserRoleRepository(session)
    assignments = OrgAssignmentRepository(session)

    unit_ids: dict[str, int] = {}
    for code, name, unit_type, parent_code in UNITS:
        unit = await unit_repo.get_by_code(code)
        if unit is None:
            unit = await unit_repo.create_unit(
                OrgUnitCreate(
                    code=code,
                    name=name,
                    type=unit_type.value,
                    parent_id=unit_ids.get(parent_code) if parent_code else None,
                )
            )
            print(f"  + unit {code} (id={unit.id})")
        unit_ids[code] = unit.id

    for username, full_name, role_code, employee_no, unit_code in USERS:
        if await user_repo.get_by_username(username) is not None:
            continue
        user = await user_repo.create_user(
            username=username,
            email=f"{username}@demo.local",
            hashed_password=get_password_hash(DEMO_PASSWORD),
            full_name=full_name,
        )
        role = await role_repo.get_by_code(role_code)
        if role is None:
            print(f"Role {role_code} missing; run scripts.seed_rbac", file=sys.stderr)
            sys.exit(1)
        await user_roles.assign_role_to_user(user.id, role.id)
        print(f"  + user {username} ({role_code})")

        if employee_no is None:
            continue
        first, _, last = full_name.partition(" ")
        employee = Employee(
            user_id=user.id,
            employee_no=employee_no,
            first_name=first,
            last_name=last or first,
            hired_at=date(2020, 1, 1),
        )
        session.add(employee)
        await session.flush()
        await assignments.create_assignment(
            OrgAssignmentCreate(
                employee_id=employee.id,
                org_unit_id=unit_ids[unit_code],
                start_date=date(2020, 1, 1),
                is_primary=True,
                assignment_type=AssignmentType.ACADEMIC.value,
            )
        )


async def main() -> None:
    _load_env()
    get_settings()
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("AsyncSessionLocal not configured", file=sys.stderr)
        sys.exit(1)

    async with database.AsyncSessionLocal() as session:
        async with session.begin():
            await seed(session)
    await database.dispose_engine()
    print("Demo data seeded")


if __name__ == "__main__":
    asyncio.run(main())
