"""Process-lifetime cache of resolved permission sets.

Wraps a CacheProtocol backend (Redis or in-process). Entries expire after the
configured TTL, so a revoked grant takes effect within that bound even
without an explicit invalidation. Catalog and role-assignment writes call
invalidate_user() / invalidate() to make the change visible immediately.
"""

from __future__ import annotations

from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.infrastructure.cache.keys import permission_key, permission_pattern
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class PermissionCache:
    """Injected cache of user_id -> permission codes (held on app.state)."""

    def __init__(self, cache: CacheProtocol, ttl: int = 300) -> None:
        self.cache = cache
        self.ttl = ttl

    def is_available(self) -> bool:
        return self.cache.is_available()

    async def get(self, user_id: int) -> frozenset[str] | None:
        """Return cached codes for user, or None on miss or when cache is down."""
        if not self.cache.is_available():
            return None
        cached = await self.cache.get(permission_key(user_id))
        if cached is None:
            return None
        return frozenset(cached)

    async def put(self, user_id: int, permissions: frozenset[str]) -> None:
        if not self.cache.is_available():
            return
        await self.cache.set(permission_key(user_id), sorted(permissions), ttl=self.ttl)

    async def invalidate_user(self, user_id: int) -> None:
        """Drop one user's cached set (after a role assignment change)."""
        if not self.cache.is_available():
            return
        await self.cache.delete(permission_key(user_id))
        logger.info("Invalidated cached permissions for user %s", user_id)

    async def invalidate(self) -> None:
        """Drop every cached set (after a catalog change)."""
        if not self.cache.is_available():
            return
        count = await self.cache.delete_pattern(permission_pattern())
        logger.info("Invalidated cached permissions for all users (%d keys)", count)
