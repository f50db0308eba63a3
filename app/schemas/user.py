"""User API schemas."""

from pydantic import BaseModel, ConfigDict


class UserResponse(BaseModel):
    """User response (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    full_name: str | None = None
    status: str


class UserRoleResponse(BaseModel):
    """A role held by a user."""

    model_config = ConfigDict(from_attributes=True)

    user_id: int
    role_id: int
    role_code: str
    role_name: str
