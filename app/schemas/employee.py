"""Employee API schemas."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.domain.enums import EmployeeStatus, EmploymentType
from app.shared.utils.sanitization import strip_html


class EmployeeUpdate(BaseModel):
    """Request body for editing HR attributes (partial)."""

    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    employment_type: EmploymentType | None = None
    status: EmployeeStatus | None = None
    hired_at: date | None = None

    @field_validator("first_name", "last_name")
    @classmethod
    def _text(cls, v: str | None) -> str | None:
        return strip_html(v)


class EmployeeResponse(BaseModel):
    """Employee response; org_unit_ids are the units of active assignments."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int | None
    employee_no: str
    first_name: str
    last_name: str
    employment_type: str
    status: str
    hired_at: date | None
    terminated_at: date | None
    org_unit_ids: list[int] = Field(default_factory=list)
