"""HR employee API tests: scoped reads and writes through dependency overrides."""

from datetime import date
from unittest.mock import AsyncMock

from httpx import AsyncClient

from app.api.v1.dependencies import get_employee_service, get_employee_service_for_write
from app.application.dtos.employee import EmployeeResult
from app.application.services.employee_service import EmployeeService
from app.domain.enums import AccessTier
from app.main import app

# Employee 7 belongs to user 3 (the lecturer) and works in SE (unit 11).
LECTURER_RECORD = EmployeeResult(
    id=7,
    user_id=3,
    employee_no="E-0007",
    first_name="Grace",
    last_name="Hopper",
    employment_type="full_time",
    status="active",
    hired_at=date(2019, 9, 1),
    terminated_at=None,
    org_unit_ids=(11,),
)
# Employee 8 works in Business (unit 20).
BUSINESS_RECORD = EmployeeResult(
    id=8,
    user_id=None,
    employee_no="E-0008",
    first_name="Adam",
    last_name="Smith",
    employment_type="part_time",
    status="active",
    hired_at=None,
    terminated_at=None,
    org_unit_ids=(20,),
)


def _install_repo() -> AsyncMock:
    repo = AsyncMock()
    records = {7: LECTURER_RECORD, 8: BUSINESS_RECORD}
    repo.get_employee.side_effect = lambda eid: records.get(eid)
    repo.list_employees.return_value = [LECTURER_RECORD]
    repo.update_employee.return_value = LECTURER_RECORD
    svc = EmployeeService(repo)
    app.dependency_overrides[get_employee_service] = lambda: svc
    app.dependency_overrides[get_employee_service_for_write] = lambda: svc
    return repo


async def test_list_passes_unit_scope_to_query(client: AsyncClient, as_user) -> None:
    """The dean's list query carries the ICT subtree as its scope."""
    as_user(2)
    repo = _install_repo()
    response = await client.get("/api/v1/hr/employees", params={"search": "hop"})
    assert response.status_code == 200
    assert [e["id"] for e in response.json()] == [7]
    scope = repo.list_employees.await_args.args[0]
    assert scope.tier is AccessTier.UNIT
    assert scope.unit_ids == {10, 11, 12}
    assert repo.list_employees.await_args.kwargs["search"] == "hop"


async def test_get_employee_in_subtree(client: AsyncClient, as_user) -> None:
    as_user(2)
    _install_repo()
    response = await client.get("/api/v1/hr/employees/7")
    assert response.status_code == 200
    assert response.json()["org_unit_ids"] == [11]


async def test_get_employee_outside_subtree_is_403(client: AsyncClient, as_user) -> None:
    as_user(2)
    _install_repo()
    response = await client.get("/api/v1/hr/employees/8")
    assert response.status_code == 403
    assert response.json()["error"] == "PERMISSION_DENIED"


async def test_lecturer_sees_only_self(client: AsyncClient, as_user) -> None:
    as_user(3)
    _install_repo()
    assert (await client.get("/api/v1/hr/employees/7")).status_code == 200
    assert (await client.get("/api/v1/hr/employees/8")).status_code == 403


async def test_admin_sees_everyone(client: AsyncClient, as_user) -> None:
    as_user(1)
    _install_repo()
    assert (await client.get("/api/v1/hr/employees/8")).status_code == 200


async def test_unknown_employee_is_404(client: AsyncClient, as_user) -> None:
    as_user(1)
    _install_repo()
    response = await client.get("/api/v1/hr/employees/99")
    assert response.status_code == 404
    assert response.json()["error"] == "RESOURCE_NOT_FOUND"


async def test_lecturer_cannot_update(client: AsyncClient, as_user) -> None:
    """View-only holder fails the flat update check before any lookup."""
    as_user(3)
    repo = _install_repo()
    response = await client.patch("/api/v1/hr/employees/7", json={"first_name": "G"})
    assert response.status_code == 403
    repo.update_employee.assert_not_awaited()


async def test_dean_updates_employee_in_subtree(client: AsyncClient, as_user) -> None:
    as_user(2)
    repo = _install_repo()
    response = await client.patch("/api/v1/hr/employees/7", json={"first_name": "Amazing"})
    assert response.status_code == 200
    repo.update_employee.assert_awaited_once_with(7, first_name="Amazing")


async def test_dean_cannot_delete(client: AsyncClient, as_user) -> None:
    """Soft delete needs hr.employees.delete, which only the admin holds."""
    as_user(2)
    _install_repo()
    response = await client.delete("/api/v1/hr/employees/7")
    assert response.status_code == 403
    assert response.json()["details"]["permission_code"] == "hr.employees.delete"
