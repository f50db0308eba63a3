"""DTOs for permission use cases (no dependency on ORM)."""

from dataclasses import dataclass

from app.domain.permissions import split_code


@dataclass(frozen=True)
class PermissionResult:
    """Permission read-model (result of get_by_code, create_permission, etc.)."""

    id: int
    code: str
    name: str
    description: str | None

    @property
    def resource(self) -> str:
        return split_code(self.code)[0]

    @property
    def action(self) -> str:
        return split_code(self.code)[1]
