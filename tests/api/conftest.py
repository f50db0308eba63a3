"""Fixtures for API tests: signed-in users and an in-memory authorization core.

University fixture: Root(1) -> ICT(10) -> SE(11), IS(12); Root -> Business(20).
dean_ict (user 2) manages ICT; admin (user 1) holds every delete code;
lecturer (user 3) works in SE with view-only access.
"""

from unittest.mock import AsyncMock

import pytest

from app.api.v1.dependencies import (
    get_authorization_service,
    get_current_user,
    get_db,
    get_org_hierarchy,
)
from app.application.dtos.user import UserResult
from app.application.services.org_hierarchy_service import OrgHierarchyService
from app.domain.permissions import PermissionCode
from app.main import app
from tests.fakes import FakeOrgUnitReader, build_authz, home

P = PermissionCode

PARENTS = {1: None, 10: 1, 11: 10, 12: 10, 20: 1}

USERS = {
    1: UserResult(id=1, username="admin", email="admin@uni.test", full_name=None, status="active"),
    2: UserResult(id=2, username="dean_ict", email="dean@uni.test", full_name=None, status="active"),
    3: UserResult(id=3, username="lecturer", email="lect@uni.test", full_name=None, status="active"),
}

ROLE_CODES = {
    100: {c.value for c in PermissionCode},
    200: {
        P.HR_EMPLOYEES_VIEW.value,
        P.HR_EMPLOYEES_UPDATE.value,
        P.HR_ORG_TREE_VIEW.value,
        P.ORG_UNIT_READ.value,
        P.ORG_UNIT_CREATE.value,
        P.ORG_UNIT_UPDATE.value,
    },
    300: {P.HR_EMPLOYEES_VIEW.value, P.HR_ORG_TREE_VIEW.value, P.ORG_UNIT_READ.value},
}


async def _fake_db():
    yield AsyncMock()


@pytest.fixture
def as_user():
    """Sign in as one of USERS; wires the authorization core to in-memory data."""

    def _sign_in(user_id: int):
        authz = build_authz(
            parents=PARENTS,
            user_roles={1: [100], 2: [200], 3: [300]},
            role_codes=ROLE_CODES,
            assignments={2: home(10), 3: home(11)},
        )
        app.dependency_overrides[get_db] = _fake_db
        app.dependency_overrides[get_current_user] = lambda: USERS[user_id]
        app.dependency_overrides[get_authorization_service] = lambda: authz
        app.dependency_overrides[get_org_hierarchy] = lambda: OrgHierarchyService(
            FakeOrgUnitReader(PARENTS)
        )
        return authz

    return _sign_in
