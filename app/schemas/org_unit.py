"""Org unit API schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.domain.enums import OrgUnitStatus
from app.shared.utils.sanitization import strip_html, validate_code


class OrgUnitCreate(BaseModel):
    """Request body for creating an org unit."""

    code: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=255)
    type: str = Field(..., min_length=1, max_length=50, description="e.g. faculty, department")
    parent_id: int | None = Field(default=None, description="Parent unit; null for top level")
    description: str | None = Field(default=None, max_length=2000)

    @field_validator("code")
    @classmethod
    def _code(cls, v: str) -> str:
        return validate_code(v)

    @field_validator("name", "description")
    @classmethod
    def _text(cls, v: str | None) -> str | None:
        return strip_html(v)


class OrgUnitUpdate(BaseModel):
    """Request body for editing or moving an org unit (partial).

    Send parent_id explicitly (null for top level) to move the unit.
    """

    name: str | None = Field(default=None, min_length=1, max_length=255)
    type: str | None = Field(default=None, min_length=1, max_length=50)
    description: str | None = Field(default=None, max_length=2000)
    parent_id: int | None = None

    @field_validator("name", "description")
    @classmethod
    def _text(cls, v: str | None) -> str | None:
        return strip_html(v)


class OrgUnitStatusUpdate(BaseModel):
    """Request body for changing unit status (deleted is a soft delete)."""

    status: OrgUnitStatus


class OrgUnitResponse(BaseModel):
    """Org unit response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    parent_id: int | None
    type: str
    status: str
    code: str
    name: str
    description: str | None


class OrgUnitIdsResponse(BaseModel):
    """Flat set of unit ids (children, descendants)."""

    unit_id: int
    unit_ids: list[int]


class OrgTreeNode(BaseModel):
    """Nested tree node."""

    id: int
    code: str
    name: str
    type: str
    status: str
    children: list["OrgTreeNode"] = Field(default_factory=list)

    @classmethod
    def from_tree(cls, nodes: list[dict[str, Any]]) -> list["OrgTreeNode"]:
        return [cls.model_validate(n) for n in nodes]
