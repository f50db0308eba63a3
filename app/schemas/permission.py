"""Permission API schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.shared.utils.sanitization import strip_html, validate_code


class PermissionCreate(BaseModel):
    """Request body for creating a permission (code is resource.action)."""

    code: str = Field(..., min_length=3, max_length=100)
    name: str = Field(..., min_length=1, max_length=150)
    description: str | None = Field(default=None, max_length=500)

    @field_validator("code")
    @classmethod
    def _code(cls, v: str) -> str:
        return validate_code(v)

    @field_validator("name", "description")
    @classmethod
    def _text(cls, v: str | None) -> str | None:
        return strip_html(v)


class PermissionResponse(BaseModel):
    """Permission response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    name: str
    description: str | None
    resource: str
    action: str
