"""Org assignment API schemas."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from app.domain.enums import AssignmentType


class OrgAssignmentCreate(BaseModel):
    """Request body for placing an employee in an org unit."""

    employee_id: int
    org_unit_id: int
    position_id: int | None = None
    is_primary: bool = False
    assignment_type: AssignmentType = AssignmentType.ACADEMIC
    allocation: Decimal = Field(default=Decimal("1.00"), gt=0, le=1, decimal_places=2)
    start_date: date
    end_date: date | None = None


class OrgAssignmentEnd(BaseModel):
    """Request body for ending an assignment (defaults to today)."""

    end_date: date | None = None


class OrgAssignmentResponse(BaseModel):
    """Org assignment response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    org_unit_id: int
    position_id: int | None
    is_primary: bool
    assignment_type: str
    allocation: Decimal
    start_date: date
    end_date: date | None
