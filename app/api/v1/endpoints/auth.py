"""Auth API: login, current user and the current user's resolved access.

Uses only injected dependencies; JWT issued via AuthSecurity.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request

from app.api.v1.dependencies import (
    AuthSecurity,
    get_auth_security,
    get_authorization_service,
    get_current_user,
    get_user_repo,
)
from app.application.dtos.user import UserResult
from app.application.services.authorization_service import AuthorizationService
from app.core.limiter import limit_auth
from app.infrastructure.persistence.repositories.user_repo import UserRepository
from app.schemas.auth import (
    AccessScopeResponse,
    LoginRequest,
    MyPermissionsResponse,
    TokenResponse,
)
from app.schemas.user import UserResponse

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    auth_security: Annotated[AuthSecurity, Depends(get_auth_security)],
):
    """Authenticate with username and password; return JWT."""
    user = await user_repo.authenticate(body.username, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    token = auth_security.create_access_token(user.id, user.username)
    return TokenResponse(access_token=token, token_type="bearer")


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: Annotated[UserResult, Depends(get_current_user)],
):
    """Return the currently authenticated user from JWT.

    Requires Authorization: Bearer <token>.
    """
    return UserResponse.model_validate(current_user)


@router.get("/me/permissions", response_model=MyPermissionsResponse)
async def get_my_permissions(
    current_user: Annotated[UserResult, Depends(get_current_user)],
    auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
):
    """Flat permission set of the current user (union over active roles)."""
    permissions = await auth_svc.resolve_permissions(current_user.id)
    return MyPermissionsResponse(user_id=current_user.id, permissions=sorted(permissions))


@router.get("/me/scope", response_model=AccessScopeResponse)
async def get_my_scope(
    current_user: Annotated[UserResult, Depends(get_current_user)],
    auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    resource: str | None = None,
):
    """Resolved tier and accessible units for resource (default: HR employees)."""
    scope = await auth_svc.resolve_accessible_units(current_user.id, resource)
    return AccessScopeResponse(
        resource=scope.resource,
        tier=scope.tier.value,
        unrestricted=scope.is_unrestricted,
        unit_ids=sorted(scope.unit_ids),
    )
