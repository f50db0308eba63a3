"""DTOs for employee use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class EmployeeResult:
    """Employee read-model. org_unit_ids holds the units of active assignments."""

    id: int
    user_id: int | None
    employee_no: str
    first_name: str
    last_name: str
    employment_type: str
    status: str
    hired_at: date | None
    terminated_at: date | None
    org_unit_ids: tuple[int, ...] = field(default_factory=tuple)
