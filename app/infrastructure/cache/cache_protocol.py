"""Cache protocol for the permission cache (DIP).

Implemented by RedisCacheService and InMemoryCacheService.
"""

from typing import Any, Protocol


class CacheProtocol(Protocol):
    """Protocol for cache backends."""

    def is_available(self) -> bool:
        """Return True if cache is connected and usable."""
        ...

    async def get(self, key: str) -> Any:
        """Return cached value or None."""
        ...

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL in seconds."""
        ...

    async def delete(self, key: str) -> bool:
        """Remove key from cache."""
        ...

    async def delete_pattern(self, pattern: str) -> int:
        """Remove keys matching a glob pattern; return count removed."""
        ...
