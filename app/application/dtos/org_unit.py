"""DTOs for org unit use cases (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class OrgUnitResult:
    """Org unit read-model."""

    id: int
    parent_id: int | None
    type: str
    status: str
    code: str
    name: str
    description: str | None


@dataclass(frozen=True)
class OrgUnitCreate:
    """Input for creating an org unit."""

    code: str
    name: str
    type: str
    parent_id: int | None = None
    description: str | None = None
