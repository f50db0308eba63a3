"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

# Queues a callback to run once the write transaction commits.
CommitHook = Callable[[Callable[[], Awaitable[None]]], None]


# Cache service interface
class ICacheService(Protocol):
    """Minimal cache protocol for permission caching (DIP)."""

    def is_available(self) -> bool:
        """Return True if cache is connected."""

    async def get(self, key: str) -> Any:
        """Return cached value or None."""

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL. Returns True on success."""

    async def delete(self, key: str) -> bool:
        """Delete key. Returns True on success."""

    async def delete_pattern(self, pattern: str) -> int:
        """Delete keys matching pattern. Returns count deleted."""


# Permission resolver interface
class IPermissionResolver(Protocol):
    """Protocol for resolving a user's flat permission set (uncached)."""

    async def get_user_permissions(self, user_id: int) -> frozenset[str]:
        """Return the union of permission codes over the user's active roles."""


# Hierarchy interface
class IOrgHierarchy(Protocol):
    """Per-request view of the org tree."""

    async def children_of(self, unit_id: int) -> frozenset[int]:
        """Direct children only."""

    async def descendants_of(self, unit_id: int) -> frozenset[int]:
        """Subtree including unit_id; empty for an unknown unit."""

    async def descendants_of_many(self, unit_ids: Any) -> frozenset[int]:
        """Union of descendants_of for each id."""


# Permission cache interface
class IPermissionCache(Protocol):
    """Cache of resolved permission sets with explicit invalidation."""

    async def get(self, user_id: int) -> frozenset[str] | None:
        """Return cached codes for user, or None."""

    async def put(self, user_id: int, permissions: frozenset[str]) -> None:
        """Store codes for user."""

    async def invalidate_user(self, user_id: int) -> None:
        """Drop one user's cached set."""

    async def invalidate(self) -> None:
        """Drop every cached set."""
