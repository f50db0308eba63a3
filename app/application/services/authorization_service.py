"""Authorization service: flat permission checks plus hierarchical org scoping.

Single entry point for every access decision. Route handlers call
authorize() / require() for single-record operations and
resolve_accessible_units() to restrict list queries; no call site
re-implements tier logic.

Resolution never raises on missing data. Unknown users have no
permissions, users without assignments have an empty unit scope, and an
ambiguous case falls to the most restrictive tier.
"""

from __future__ import annotations

import logging

from app.application.interfaces.services import (
    IOrgHierarchy,
    IPermissionCache,
    IPermissionResolver,
)
from app.application.services.org_assignment_index import OrgAssignmentIndex
from app.domain.access_scope import AccessScope, ScopePolicyRegistry
from app.domain.enums import AccessTier
from app.domain.exceptions import AuthorizationException
from app.domain.permissions import (
    PermissionCode,
    has_permission,
    normalize_code,
    resource_of,
)
from app.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)


class AuthorizationService:
    """Centralized permission and scope resolution (one instance per request).

    Args:
        permission_resolver: Loads the flat permission set from roles.
        hierarchy: Per-request org hierarchy (children/descendants).
        assignment_index: User -> active org assignments.
        permission_cache: Optional process-lifetime cache of permission sets.
        policies: Tier trigger codes per resource.
        default_resource: Resource used when resolve_accessible_units gets none.
    """

    def __init__(
        self,
        permission_resolver: IPermissionResolver,
        hierarchy: IOrgHierarchy,
        assignment_index: OrgAssignmentIndex,
        permission_cache: IPermissionCache | None = None,
        policies: ScopePolicyRegistry | None = None,
        default_resource: str = "hr.employees",
    ) -> None:
        self.permission_resolver = permission_resolver
        self.hierarchy = hierarchy
        self.assignment_index = assignment_index
        self.permission_cache = permission_cache
        self.policies = policies or ScopePolicyRegistry()
        self.default_resource = default_resource
        self._permissions: dict[int, frozenset[str]] = {}

    async def resolve_permissions(self, user_id: int) -> frozenset[str]:
        """Union of permission codes over the user's roles. Empty for unknown users."""
        if user_id in self._permissions:
            return self._permissions[user_id]
        permissions: frozenset[str] | None = None
        if self.permission_cache is not None:
            permissions = await self.permission_cache.get(user_id)
        if permissions is None:
            permissions = await self.permission_resolver.get_user_permissions(user_id)
            if self.permission_cache is not None:
                await self.permission_cache.put(user_id, permissions)
        self._permissions[user_id] = permissions
        return permissions

    @traced("authorization.resolve_scope")
    async def resolve_scope(self, user_id: int, resource: str) -> AccessScope:
        """Evaluate the tier table for user over resource (first match wins)."""
        permissions = await self.resolve_permissions(user_id)
        tier = self.policies.policy_for(resource).resolve_tier(permissions)
        unit_ids: frozenset[int] = frozenset()
        if tier is AccessTier.UNIT:
            home_units = await self.assignment_index.home_unit_ids(user_id)
            if home_units:
                unit_ids = await self.hierarchy.descendants_of_many(home_units)
        logger.debug(
            "Resolved scope user=%s resource=%s tier=%s units=%d",
            user_id,
            resource,
            tier.value,
            len(unit_ids),
        )
        add_span_attributes(
            **{"authz.tier": tier.value, "authz.unit_count": len(unit_ids)}
        )
        return AccessScope(
            tier=tier, user_id=user_id, resource=resource, unit_ids=unit_ids
        )

    async def resolve_accessible_units(
        self, user_id: int, resource: str | None = None
    ) -> AccessScope:
        """Tier-aware accessible units. FULL means every unit (is_unrestricted)."""
        return await self.resolve_scope(user_id, resource or self.default_resource)

    async def visible_unit_ids(
        self, user_id: int, resource: str | None = None
    ) -> frozenset[int] | None:
        """Units the user may see in org views; None means every unit.

        SELF sees the units the user is actively assigned to.
        """
        scope = await self.resolve_accessible_units(user_id, resource)
        if scope.tier is AccessTier.FULL:
            return None
        if scope.tier is AccessTier.UNIT:
            return scope.unit_ids
        return await self.assignment_index.active_unit_ids(user_id)

    async def can_view_unit(self, user_id: int, unit_id: int) -> bool:
        visible = await self.visible_unit_ids(user_id)
        return visible is None or unit_id in visible

    @traced("authorization.authorize")
    async def authorize(
        self,
        user_id: int,
        code: str | PermissionCode,
        target_unit_id: int | None = None,
        target_user_id: int | None = None,
    ) -> bool:
        """Return True if user may perform code, optionally on a target unit or user.

        A full-scope trigger on the code's resource allows every action on that
        resource. Otherwise the exact code must be held, and each given target
        must fall inside the user's scope for the resource.
        """
        code = normalize_code(code)
        if not code:
            return False
        permissions = await self.resolve_permissions(user_id)
        resource = resource_of(code)
        policy = self.policies.policy_for(resource)
        if permissions & policy.full_scope:
            return True
        if not has_permission(permissions, code):
            return False
        if target_unit_id is None and target_user_id is None:
            return True
        scope = await self.resolve_scope(user_id, resource)
        if target_unit_id is not None and not scope.allows_unit(target_unit_id):
            return False
        if target_user_id is not None:
            return await self._allows_target_user(scope, target_user_id)
        return True

    async def require(
        self,
        user_id: int,
        code: str | PermissionCode,
        target_unit_id: int | None = None,
        target_user_id: int | None = None,
    ) -> None:
        """Raise AuthorizationException if authorize() is False."""
        if not await self.authorize(user_id, code, target_unit_id, target_user_id):
            raise AuthorizationException(
                permission_code=normalize_code(code),
                target_unit_id=target_unit_id,
                target_user_id=target_user_id,
            )

    async def _allows_target_user(self, scope: AccessScope, target_user_id: int) -> bool:
        if scope.tier is AccessTier.FULL:
            return True
        if scope.tier is AccessTier.UNIT:
            target_units = await self.assignment_index.active_unit_ids(target_user_id)
            return scope.allows_any_unit(target_units)
        return scope.allows_user(target_user_id)
