"""DTOs for org assignment use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class OrgAssignmentResult:
    """Org assignment read-model."""

    id: int
    employee_id: int
    org_unit_id: int
    position_id: int | None
    is_primary: bool
    assignment_type: str
    allocation: Decimal
    start_date: date
    end_date: date | None

    def is_active_on(self, day: date) -> bool:
        """Active when open-ended or not yet past end_date."""
        return self.end_date is None or self.end_date >= day


@dataclass(frozen=True)
class OrgAssignmentCreate:
    """Input for creating an org assignment."""

    employee_id: int
    org_unit_id: int
    start_date: date
    position_id: int | None = None
    is_primary: bool = False
    assignment_type: str = "academic"
    allocation: Decimal = Decimal("1.00")
    end_date: date | None = None
