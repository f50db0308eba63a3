"""Org structure application service: create, edit, move, and soft-delete units."""

from __future__ import annotations

import logging
from typing import Any

from app.application.dtos.org_unit import OrgUnitCreate, OrgUnitResult
from app.application.services.org_hierarchy_service import OrgHierarchyService
from app.domain.enums import OrgUnitStatus
from app.domain.exceptions import (
    DuplicateCodeException,
    HierarchyCycleException,
    ResourceNotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)

_UNSET: Any = object()


class OrgStructureService:
    """Structural writes over org units. Rejects moves that would form a cycle."""

    def __init__(self, unit_repo: Any, hierarchy: OrgHierarchyService) -> None:
        self._repo = unit_repo
        self._hierarchy = hierarchy

    async def create_unit(self, data: OrgUnitCreate) -> OrgUnitResult:
        if await self._repo.get_by_code(data.code):
            raise DuplicateCodeException("org_unit", data.code)
        if data.parent_id is not None:
            await self._require_unit(data.parent_id)
        created = await self._repo.create_unit(data)
        logger.info("Created org unit %s (%s) under %s", created.id, created.code, created.parent_id)
        return created

    async def update_unit(
        self,
        unit_id: int,
        *,
        name: str | None = None,
        unit_type: str | None = None,
        description: str | None = None,
        parent_id: int | None = _UNSET,
    ) -> OrgUnitResult:
        """Edit attributes; pass parent_id (None for top level) to move the unit."""
        await self._require_unit(unit_id)
        fields: dict[str, Any] = {}
        if name is not None:
            fields["name"] = name
        if unit_type is not None:
            fields["type"] = unit_type
        if description is not None:
            fields["description"] = description
        if parent_id is not _UNSET:
            if parent_id is not None:
                await self._require_unit(parent_id)
                if parent_id == unit_id or parent_id in await self._hierarchy.descendants_of(unit_id):
                    raise HierarchyCycleException(unit_id, parent_id)
            fields["parent_id"] = parent_id
        if not fields:
            raise ValidationException("No fields to update")
        updated = await self._repo.update_unit(unit_id, **fields)
        if "parent_id" in fields:
            logger.info("Moved org unit %s under %s", unit_id, parent_id)
        return updated

    async def set_status(self, unit_id: int, status: OrgUnitStatus) -> OrgUnitResult:
        """Change lifecycle status; DELETED is the soft delete."""
        await self._require_unit(unit_id)
        return await self._repo.update_unit(unit_id, status=status.value)

    async def _require_unit(self, unit_id: int) -> OrgUnitResult:
        unit = await self._repo.get_unit(unit_id)
        if unit is None:
            raise ResourceNotFoundException("org_unit", unit_id)
        return unit
