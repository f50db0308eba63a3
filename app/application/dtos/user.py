"""DTOs for user use cases (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserResult:
    """User read-model (result of get_by_id, get_by_username, etc.). No password."""

    id: int
    username: str
    email: str
    full_name: str | None
    status: str

    @property
    def is_active(self) -> bool:
        return self.status == "active"
