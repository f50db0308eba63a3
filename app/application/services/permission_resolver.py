"""Resolves a user's flat permission set from roles and role grants."""

from __future__ import annotations

from app.application.interfaces.repositories import (
    IPermissionCatalogReader,
    IRoleAssignmentReader,
)


class PermissionResolver:
    """Union of permission codes over every active role the user holds.

    Unknown user or no roles yields the empty set. Duplicate grants collapse.
    """

    def __init__(
        self,
        role_reader: IRoleAssignmentReader,
        catalog_reader: IPermissionCatalogReader,
    ) -> None:
        self.role_reader = role_reader
        self.catalog_reader = catalog_reader

    async def get_user_permissions(self, user_id: int) -> frozenset[str]:
        role_ids = await self.role_reader.list_role_ids_for_user(user_id)
        if not role_ids:
            return frozenset()
        codes = await self.catalog_reader.list_codes_for_roles(set(role_ids))
        return frozenset(codes)
