"""Auth API tests: login, bearer token handling, and the caller's resolved access."""

from unittest.mock import AsyncMock

from httpx import AsyncClient

from app.api.v1.dependencies import get_db, get_user_repo
from app.application.dtos.user import UserResult
from app.infrastructure.security.jwt import create_access_token
from app.main import app

ADA = UserResult(id=5, username="ada", email="ada@uni.test", full_name="Ada", status="active")


async def _fake_db():
    yield AsyncMock()


def _override_user_repo(repo: AsyncMock) -> None:
    app.dependency_overrides[get_db] = _fake_db
    app.dependency_overrides[get_user_repo] = lambda: repo


async def test_login_with_bad_credentials_returns_401(client: AsyncClient) -> None:
    repo = AsyncMock()
    repo.authenticate.return_value = None
    _override_user_repo(repo)
    response = await client.post(
        "/api/v1/auth/login", json={"username": "ada", "password": "wrong-password"}
    )
    assert response.status_code == 401
    assert response.json()["error"] == "HTTP_ERROR"


async def test_login_returns_bearer_token(client: AsyncClient) -> None:
    repo = AsyncMock()
    repo.authenticate.return_value = ADA
    _override_user_repo(repo)
    response = await client.post(
        "/api/v1/auth/login", json={"username": "ada", "password": "correct-horse"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["access_token"]
    repo.authenticate.assert_awaited_once_with("ada", "correct-horse")


async def test_login_validates_body(client: AsyncClient) -> None:
    """Short password fails schema validation before any lookup."""
    repo = AsyncMock()
    _override_user_repo(repo)
    response = await client.post(
        "/api/v1/auth/login", json={"username": "ada", "password": "short"}
    )
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"
    repo.authenticate.assert_not_awaited()


async def test_me_without_token_returns_401(client: AsyncClient) -> None:
    """Missing bearer token is rejected with a WWW-Authenticate challenge."""
    _override_user_repo(AsyncMock())
    response = await client.get("/api/v1/auth/me")
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


async def test_me_with_invalid_token_returns_401(client: AsyncClient) -> None:
    _override_user_repo(AsyncMock())
    response = await client.get(
        "/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401


async def test_me_with_valid_token_returns_user(client: AsyncClient) -> None:
    repo = AsyncMock()
    repo.get_user.return_value = ADA
    _override_user_repo(repo)
    token = create_access_token(ADA.id, ADA.username)
    response = await client.get(
        "/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 200
    assert response.json()["username"] == "ada"
    repo.get_user.assert_awaited_once_with(5)


async def test_me_for_disabled_user_returns_401(client: AsyncClient) -> None:
    repo = AsyncMock()
    repo.get_user.return_value = UserResult(
        id=5, username="ada", email="ada@uni.test", full_name=None, status="disabled"
    )
    _override_user_repo(repo)
    token = create_access_token(5, "ada")
    response = await client.get(
        "/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 401


async def test_my_permissions_sorted(client: AsyncClient, as_user) -> None:
    as_user(3)
    response = await client.get("/api/v1/auth/me/permissions")
    assert response.status_code == 200
    assert response.json() == {
        "user_id": 3,
        "permissions": ["hr.employees.view", "hr.org_tree.view", "org_unit.read"],
    }


async def test_my_scope_for_dean(client: AsyncClient, as_user) -> None:
    """Unit tier over the ICT subtree for the default resource."""
    as_user(2)
    response = await client.get("/api/v1/auth/me/scope")
    assert response.status_code == 200
    assert response.json() == {
        "resource": "hr.employees",
        "tier": "unit",
        "unrestricted": False,
        "unit_ids": [10, 11, 12],
    }


async def test_my_scope_for_admin_and_other_resource(client: AsyncClient, as_user) -> None:
    as_user(1)
    response = await client.get("/api/v1/auth/me/scope", params={"resource": "org_unit"})
    data = response.json()
    assert data["tier"] == "full"
    assert data["unrestricted"] is True
    assert data["unit_ids"] == []
