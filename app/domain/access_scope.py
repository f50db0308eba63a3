"""Access scope value objects and the three-tier scope policy.

The tier decision is a table evaluated top to bottom, first match wins:

1. FULL  - the user holds a full-scope trigger for the resource.
2. UNIT  - the user holds a unit-scope trigger; scope is the union of the
           subtrees under the user's active org assignments (possibly empty).
3. SELF  - anything else; only records owned by the user.

Trigger codes are policy, not hard-coded string checks: each resource has a
ScopePolicy, defaulting to ``{resource}.delete`` / ``{resource}.update``.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from app.core.constants import (
    FULL_SCOPE_ACTION,
    PERMISSION_CODE_SEP,
    UNIT_SCOPE_ACTION,
)
from app.domain.enums import AccessTier
from app.domain.permissions import normalize_code


@dataclass(frozen=True)
class AccessScope:
    """Resolved scope of one user over one resource.

    unit_ids is meaningful only for the UNIT tier; FULL is unrestricted and
    SELF matches records owned by user_id only.
    """

    tier: AccessTier
    user_id: int
    resource: str
    unit_ids: frozenset[int] = field(default_factory=frozenset)

    @property
    def is_unrestricted(self) -> bool:
        return self.tier is AccessTier.FULL

    def allows_unit(self, unit_id: int | None) -> bool:
        """True if a record living in unit_id is inside this scope."""
        if self.tier is AccessTier.FULL:
            return True
        if self.tier is AccessTier.UNIT:
            return unit_id is not None and unit_id in self.unit_ids
        return False

    def allows_any_unit(self, unit_ids: Iterable[int]) -> bool:
        """True if at least one of unit_ids is inside this scope."""
        if self.tier is AccessTier.FULL:
            return True
        return any(self.allows_unit(u) for u in unit_ids)

    def allows_user(self, user_id: int | None) -> bool:
        """Self-only check; UNIT scope resolves target users via their units."""
        if self.tier is AccessTier.FULL:
            return True
        return user_id is not None and user_id == self.user_id

    def allows_record(
        self, unit_ids: Iterable[int], owner_user_id: int | None
    ) -> bool:
        """Record-level check matching the list filters.

        UNIT matches a record with any unit in scope; SELF matches a record
        owned by the user.
        """
        if self.tier is AccessTier.FULL:
            return True
        if self.tier is AccessTier.UNIT:
            return self.allows_any_unit(unit_ids)
        return owner_user_id is not None and owner_user_id == self.user_id


@dataclass(frozen=True)
class ScopePolicy:
    """Trigger permission codes for one resource."""

    resource: str
    full_scope: frozenset[str]
    unit_scope: frozenset[str]

    @classmethod
    def default_for(cls, resource: str) -> "ScopePolicy":
        """Delete-level grants full scope, update-level grants unit scope."""
        return cls(
            resource=resource,
            full_scope=frozenset(
                {f"{resource}{PERMISSION_CODE_SEP}{FULL_SCOPE_ACTION}"}
            ),
            unit_scope=frozenset(
                {f"{resource}{PERMISSION_CODE_SEP}{UNIT_SCOPE_ACTION}"}
            ),
        )

    def resolve_tier(self, permissions: frozenset[str]) -> AccessTier:
        """Evaluate the decision table for a resolved permission set.

        Home units do not change the tier: a unit-scope holder with no active
        assignment is still UNIT, with an empty unit set that matches nothing.
        """
        if permissions & self.full_scope:
            return AccessTier.FULL
        if permissions & self.unit_scope:
            return AccessTier.UNIT
        return AccessTier.SELF


class ScopePolicyRegistry:
    """Resource -> ScopePolicy lookup with default fallback."""

    def __init__(self, policies: Mapping[str, ScopePolicy] | None = None) -> None:
        self._policies: dict[str, ScopePolicy] = dict(policies or {})

    @classmethod
    def from_config(
        cls, raw: Mapping[str, Mapping[str, Iterable[str]]] | None
    ) -> "ScopePolicyRegistry":
        """Build from settings.scope_policies.

        A missing key falls back to the default trigger for that tier.
        """
        policies: dict[str, ScopePolicy] = {}
        for resource, entry in (raw or {}).items():
            default = ScopePolicy.default_for(resource)
            full = entry.get("full_scope")
            unit = entry.get("unit_scope")
            policies[resource] = ScopePolicy(
                resource=resource,
                full_scope=(
                    frozenset(normalize_code(c) for c in full)
                    if full is not None
                    else default.full_scope
                ),
                unit_scope=(
                    frozenset(normalize_code(c) for c in unit)
                    if unit is not None
                    else default.unit_scope
                ),
            )
        return cls(policies)

    def policy_for(self, resource: str) -> ScopePolicy:
        policy = self._policies.get(resource)
        if policy is None:
            policy = ScopePolicy.default_for(resource)
        return policy

    def register(self, policy: ScopePolicy) -> None:
        self._policies[policy.resource] = policy
