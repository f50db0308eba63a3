"""Domain enumerations for the campus administration service.

Enums represent fixed sets of domain values (statuses, assignment types,
authorization tiers).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class UserStatus(_ValuesMixin, str, Enum):
    """User account status. Users are never deleted, only disabled."""

    ACTIVE = "active"
    DISABLED = "disabled"


class OrgUnitStatus(_ValuesMixin, str, Enum):
    """Org unit lifecycle status. DELETED is a soft delete."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    DELETED = "deleted"


class OrgUnitType(_ValuesMixin, str, Enum):
    """Common org unit types (the column accepts any string)."""

    UNIVERSITY = "university"
    CAMPUS = "campus"
    FACULTY = "faculty"
    SCHOOL = "school"
    DEPARTMENT = "department"
    DIVISION = "division"
    CENTER = "center"


class AssignmentType(_ValuesMixin, str, Enum):
    """Kind of org assignment an employee holds."""

    ADMIN = "admin"
    ACADEMIC = "academic"
    SUPPORT = "support"
    MANAGEMENT = "management"


class EmploymentType(_ValuesMixin, str, Enum):
    """Employment contract type."""

    FULL_TIME = "full_time"
    PART_TIME = "part_time"
    CONTRACT = "contract"
    VISITING = "visiting"


class EmployeeStatus(_ValuesMixin, str, Enum):
    """Employee HR status."""

    ACTIVE = "active"
    ON_LEAVE = "on_leave"
    TERMINATED = "terminated"


class AccessTier(_ValuesMixin, str, Enum):
    """Authorization tier, most privileged first.

    FULL: unrestricted over the resource.
    UNIT: restricted to the subtrees of the user's assigned org units.
    SELF: restricted to the user's own records.
    """

    FULL = "full"
    UNIT = "unit"
    SELF = "self"
