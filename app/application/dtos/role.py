"""DTOs for role use cases (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RoleResult:
    """Role read-model (result of get_by_id, get_by_code, create_role, etc.)."""

    id: int
    code: str
    name: str
    description: str | None
    is_active: bool


@dataclass(frozen=True)
class UserRoleResult:
    """A role held by a user."""

    user_id: int
    role_id: int
    role_code: str
    role_name: str
