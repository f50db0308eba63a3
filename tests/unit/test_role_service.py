"""Unit tests for RoleService and PermissionService (catalog writes, cache invalidation)."""

from unittest.mock import AsyncMock

import pytest

from app.application.dtos.permission import PermissionResult
from app.application.dtos.role import RoleResult
from app.application.dtos.user import UserResult
from app.application.services.permission_service import PermissionService
from app.application.services.role_service import RoleService
from app.domain.exceptions import (
    DuplicateCodeException,
    ResourceNotFoundException,
    ValidationException,
)

ROLE = RoleResult(id=1, code="LECTURER", name="Lecturer", description=None, is_active=True)
VIEW = PermissionResult(id=10, code="hr.employees.view", name="View employees", description=None)
ADA = UserResult(id=42, username="ada", email="ada@uni.test", full_name=None, status="active")


def _role_service(
    cache: AsyncMock | None = None, on_commit=None
) -> tuple[RoleService, dict[str, AsyncMock]]:
    repos = {
        "role_repo": AsyncMock(),
        "permission_repo": AsyncMock(),
        "role_permission_repo": AsyncMock(),
        "user_role_repo": AsyncMock(),
        "user_repo": AsyncMock(),
    }
    repos["role_repo"].get_role.return_value = ROLE
    repos["user_repo"].get_user.return_value = ADA
    return RoleService(**repos, permission_cache=cache, on_commit=on_commit), repos


async def test_create_role_rejects_duplicate_code() -> None:
    svc, repos = _role_service()
    repos["role_repo"].get_by_code.return_value = ROLE
    with pytest.raises(DuplicateCodeException):
        await svc.create_role_with_permissions("LECTURER", "Lecturer")
    repos["role_repo"].create_role.assert_not_awaited()


async def test_create_role_rejects_unknown_permission_before_insert() -> None:
    """An invalid code fails the whole request; no role row is created."""
    svc, repos = _role_service()
    repos["role_repo"].get_by_code.return_value = None
    repos["permission_repo"].get_by_code.return_value = None
    with pytest.raises(ValidationException) as exc_info:
        await svc.create_role_with_permissions("NEW", "New", permission_codes=["nope.view"])
    assert exc_info.value.details == {"field": "permission_codes"}
    repos["role_repo"].create_role.assert_not_awaited()


async def test_create_role_grants_each_code_once() -> None:
    svc, repos = _role_service()
    repos["role_repo"].get_by_code.return_value = None
    repos["permission_repo"].get_by_code.return_value = VIEW
    repos["role_repo"].create_role.return_value = ROLE
    created = await svc.create_role_with_permissions(
        "LECTURER", "Lecturer", permission_codes=["hr.employees.view", "hr.employees.view"]
    )
    assert created == ROLE
    repos["role_permission_repo"].assign_permission_to_role.assert_awaited_once_with(
        role_id=1, permission_id=10, granted_by=None
    )


async def test_grant_permission_invalidates_every_user() -> None:
    """A grant changes the set of every holder of the role."""
    cache = AsyncMock()
    svc, repos = _role_service(cache)
    repos["permission_repo"].get_by_code.return_value = VIEW
    assert await svc.grant_permission(1, "hr.employees.view") == VIEW
    cache.invalidate.assert_awaited_once()
    cache.invalidate_user.assert_not_awaited()


async def test_grant_unknown_permission_is_not_found() -> None:
    svc, repos = _role_service(AsyncMock())
    repos["permission_repo"].get_by_code.return_value = None
    with pytest.raises(ResourceNotFoundException):
        await svc.grant_permission(1, "nope.view")


async def test_revoke_permission_takes_effect_immediately() -> None:
    cache = AsyncMock()
    svc, repos = _role_service(cache)
    repos["role_permission_repo"].remove_permission_from_role.return_value = True
    await svc.revoke_permission(1, 10)
    cache.invalidate.assert_awaited_once()


async def test_revoke_missing_grant_is_not_found() -> None:
    cache = AsyncMock()
    svc, repos = _role_service(cache)
    repos["role_permission_repo"].remove_permission_from_role.return_value = False
    with pytest.raises(ResourceNotFoundException):
        await svc.revoke_permission(1, 10)
    cache.invalidate.assert_not_awaited()


async def test_assign_role_invalidates_only_that_user() -> None:
    cache = AsyncMock()
    svc, repos = _role_service(cache)
    await svc.assign_role(user_id=42, role_id=1, assigned_by=7)
    repos["user_role_repo"].assign_role_to_user.assert_awaited_once_with(
        user_id=42, role_id=1, assigned_by=7
    )
    cache.invalidate_user.assert_awaited_once_with(42)
    cache.invalidate.assert_not_awaited()


async def test_assign_unknown_role_is_not_found() -> None:
    svc, repos = _role_service(AsyncMock())
    repos["role_repo"].get_role.return_value = None
    with pytest.raises(ResourceNotFoundException):
        await svc.assign_role(user_id=42, role_id=99)
    repos["user_role_repo"].assign_role_to_user.assert_not_awaited()


async def test_assign_role_to_unknown_user_is_not_found() -> None:
    """Unknown user is a 404, not a duplicate-assignment conflict."""
    cache = AsyncMock()
    svc, repos = _role_service(cache)
    repos["user_repo"].get_user.return_value = None
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await svc.assign_role(user_id=999, role_id=1)
    assert exc_info.value.details["resource_type"] == "user"
    repos["user_role_repo"].assign_role_to_user.assert_not_awaited()
    cache.invalidate_user.assert_not_awaited()


async def test_revoke_role_invalidates_user() -> None:
    cache = AsyncMock()
    svc, repos = _role_service(cache)
    repos["user_role_repo"].remove_role_from_user.return_value = True
    await svc.revoke_role(42, 1)
    cache.invalidate_user.assert_awaited_once_with(42)


async def test_deactivating_role_invalidates_every_user() -> None:
    cache = AsyncMock()
    svc, repos = _role_service(cache)
    repos["role_repo"].update_role.return_value = ROLE
    await svc.update_role(1, is_active=False)
    cache.invalidate.assert_awaited_once()


async def test_renaming_role_keeps_cache() -> None:
    cache = AsyncMock()
    svc, repos = _role_service(cache)
    repos["role_repo"].update_role.return_value = ROLE
    await svc.update_role(1, name="Senior Lecturer")
    cache.invalidate.assert_not_awaited()


async def test_services_work_without_cache() -> None:
    svc, repos = _role_service(None)
    repos["permission_repo"].get_by_code.return_value = VIEW
    await svc.grant_permission(1, "hr.employees.view")
    await svc.assign_role(user_id=42, role_id=1)


async def test_create_permission_requires_resource_and_action() -> None:
    svc = PermissionService(AsyncMock())
    with pytest.raises(ValidationException):
        await svc.create_permission("standalone", "Bad")


async def test_create_permission_rejects_duplicate() -> None:
    repo = AsyncMock()
    repo.get_by_code.return_value = VIEW
    with pytest.raises(DuplicateCodeException):
        await PermissionService(repo).create_permission("hr.employees.view", "View")


async def test_delete_permission_invalidates_every_user() -> None:
    repo = AsyncMock()
    repo.delete_permission.return_value = True
    cache = AsyncMock()
    await PermissionService(repo, cache).delete_permission(10)
    cache.invalidate.assert_awaited_once()


async def test_delete_missing_permission_is_not_found() -> None:
    repo = AsyncMock()
    repo.delete_permission.return_value = False
    with pytest.raises(ResourceNotFoundException):
        await PermissionService(repo, AsyncMock()).delete_permission(10)


async def test_revoke_role_waits_for_commit_before_invalidating() -> None:
    """With a commit hook the cache keeps its entry until the hook fires."""
    cache = AsyncMock()
    pending: list = []
    svc, repos = _role_service(cache, on_commit=pending.append)
    repos["user_role_repo"].remove_role_from_user.return_value = True
    await svc.revoke_role(42, 1)
    cache.invalidate_user.assert_not_awaited()
    assert len(pending) == 1

    await pending[0]()
    cache.invalidate_user.assert_awaited_once_with(42)


async def test_grant_waits_for_commit_before_invalidating() -> None:
    cache = AsyncMock()
    pending: list = []
    svc, repos = _role_service(cache, on_commit=pending.append)
    repos["permission_repo"].get_by_code.return_value = VIEW
    await svc.grant_permission(1, "hr.employees.view")
    cache.invalidate.assert_not_awaited()

    for callback in pending:
        await callback()
    cache.invalidate.assert_awaited_once()


async def test_failed_write_queues_nothing() -> None:
    pending: list = []
    svc, repos = _role_service(AsyncMock(), on_commit=pending.append)
    repos["user_role_repo"].remove_role_from_user.return_value = False
    with pytest.raises(ResourceNotFoundException):
        await svc.revoke_role(42, 1)
    assert pending == []


async def test_delete_permission_waits_for_commit() -> None:
    repo = AsyncMock()
    repo.delete_permission.return_value = True
    cache = AsyncMock()
    pending: list = []
    await PermissionService(repo, cache, on_commit=pending.append).delete_permission(10)
    cache.invalidate.assert_not_awaited()
    await pending[0]()
    cache.invalidate.assert_awaited_once()
