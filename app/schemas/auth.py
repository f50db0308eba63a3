"""Auth API schemas."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Request body for login."""

    username: str = Field(..., min_length=1, max_length=150)
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")


class TokenResponse(BaseModel):
    """JWT token response."""

    access_token: str
    token_type: str = "bearer"


class MyPermissionsResponse(BaseModel):
    """Resolved permission codes of the current user (sorted)."""

    user_id: int
    permissions: list[str]


class AccessScopeResponse(BaseModel):
    """Resolved scope of the current user over one resource."""

    resource: str
    tier: str = Field(..., description="full, unit or self")
    unrestricted: bool
    unit_ids: list[int] = Field(default_factory=list)
