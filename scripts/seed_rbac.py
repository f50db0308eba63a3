"""Seed the RBAC catalog: every PermissionCode, the standard roles, and grants.

Idempotent: existing permissions, roles and grants are left as they are.

Usage:
    uv run python -m scripts.seed_rbac
Requires: DATABASE_URL (Postgres), schema migrated (alembic upgrade head).
"""

import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.domain.exceptions import DuplicateAssignmentException
from app.domain.permissions import PermissionCode, split_code
from app.infrastructure.persistence import database
from app.infrastructure.persistence.repositories import (
    PermissionRepository,
    RolePermissionRepository,
    RoleRepository,
)

P = PermissionCode

_STAFF_CODES = [
    P.HR_DASHBOARD_VIEW,
    P.HR_PROFILE_VIEW,
    P.HR_PROFILE_UPDATE,
    P.HR_ORG_STRUCTURE_VIEW,
    P.HR_ORG_TREE_VIEW,
    P.ORG_UNIT_READ,
]

# role code -> (name, granted codes)
ROLES: dict[str, tuple[str, list[PermissionCode]]] = {
    "ADMIN": ("Administrator", list(PermissionCode)),
    "HEAD_FACULTY": (
        "Head of Faculty",
        _STAFF_CODES
        + [
            P.HR_REPORTS_VIEW,
            P.HR_EMPLOYEES_VIEW,
            P.HR_EMPLOYEES_CREATE,
            P.HR_EMPLOYEES_UPDATE,
            P.ORG_UNIT_CREATE,
            P.ORG_UNIT_UPDATE,
            P.ORG_ASSIGNMENT_READ,
            P.ORG_ASSIGNMENT_CREATE,
            P.ORG_ASSIGNMENT_UPDATE,
        ],
    ),
    "LECTURER": ("Lecturer", _STAFF_CODES + [P.HR_EMPLOYEES_VIEW]),
    "STAFF": ("Staff", list(_STAFF_CODES)),
    "STUDENT": ("Student", [P.HR_PROFILE_VIEW, P.HR_ORG_TREE_VIEW]),
}


def _load_env() -> None:
    """Load .env from project root so get_settings() sees DATABASE_URL."""
    load_dotenv(Path(__file__).resolve().parent.parent / ".env", override=True)


def _display_name(code: str) -> str:
    resource, action = split_code(code)
    label = resource.split(".")[-1].replace("_", " ")
    return f"{action.capitalize()} {label}"


async def seed(session: AsyncSession) -> None:
    """Create missing permissions, roles and role grants."""
    permission_repo = PermissionRepository(session)
    role_repo = RoleRepository(session)
    grants = RolePermissionRepository(session)

    permission_ids: dict[str, int] = {}
    for code in PermissionCode.values():
        existing = await permission_repo.get_by_code(code)
        if existing is None:
            existing = await permission_repo.create_permission(
                code=code, name=_display_name(code)
            )
            print(f"  + permission {code}")
        permission_ids[code] = existing.id

    for role_code, (name, codes) in ROLES.items():
        role = await role_repo.get_by_code(role_code)
        if role is None:
            role = await role_repo.create_role(code=role_code, name=name)
            print(f"  + role {role_code}")
        for code in codes:
            try:
                await grants.assign_permission_to_role(
                    role.id, permission_ids[code.value]
                )
            except DuplicateAssignmentException:
                continue


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
    print(f"Seeded {len(PermissionCode)} permissions and {len(ROLES)} roles")


if __name__ == "__main__":
    asyncio.run(main())
