"""In-process TTL cache implementing CacheProtocol.

Used when Redis is disabled (single-process deployments, tests). Entries
live in a dict guarded by an asyncio lock; expiry is checked on read.
"""

from __future__ import annotations

import asyncio
import copy
import fnmatch
import time
from collections.abc import Callable
from typing import Any


class InMemoryCacheService:
    """Dict-backed cache with per-key expiry (implements CacheProtocol)."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}
        self._lock = asyncio.Lock()

    async def connect(self) -> None:
        """No-op; mirrors RedisCacheService so lifespan code is backend-agnostic."""

    async def disconnect(self) -> None:
        async with self._lock:
            self._entries.clear()

    def is_available(self) -> bool:
        return True

    async def get(self, key: str) -> Any | None:
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if expires_at <= self._clock():
                del self._entries[key]
                return None
            return copy.deepcopy(value)

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        async with self._lock:
            self._entries[key] = (self._clock() + ttl, copy.deepcopy(value))
        return True

    async def delete(self, key: str) -> bool:
        async with self._lock:
            self._entries.pop(key, None)
        return True

    async def delete_pattern(self, pattern: str) -> int:
        """Delete keys matching a glob pattern (Redis MATCH syntax subset)."""
        async with self._lock:
            doomed = [k for k in self._entries if fnmatch.fnmatchcase(k, pattern)]
            for key in doomed:
                del self._entries[key]
        return len(doomed)
