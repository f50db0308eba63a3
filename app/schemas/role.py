"""Role API schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.shared.utils.sanitization import strip_html, validate_code


class RoleCreateRequest(BaseModel):
    """Request body for creating a role."""

    code: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=150)
    description: str | None = Field(default=None, max_length=500)
    permission_codes: list[str] = Field(default_factory=list, max_length=200)

    @field_validator("code")
    @classmethod
    def _code(cls, v: str) -> str:
        return validate_code(v)

    @field_validator("name", "description")
    @classmethod
    def _text(cls, v: str | None) -> str | None:
        return strip_html(v)


class RoleUpdate(BaseModel):
    """Request body for updating a role (partial)."""

    name: str | None = Field(default=None, min_length=1, max_length=150)
    description: str | None = Field(default=None, max_length=500)
    is_active: bool | None = None

    @field_validator("name", "description")
    @classmethod
    def _text(cls, v: str | None) -> str | None:
        return strip_html(v)


class RolePermissionAssign(BaseModel):
    """Request body for granting a permission to a role."""

    permission_code: str = Field(..., min_length=1, max_length=100)


class RoleResponse(BaseModel):
    """Role list/detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    name: str
    description: str | None
    is_active: bool
