"""Tests for PermissionCache and the in-process cache backend."""

from unittest.mock import AsyncMock, MagicMock

from app.infrastructure.cache.memory_cache import InMemoryCacheService
from app.infrastructure.cache.permission_cache import PermissionCache


class _Clock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


async def test_memory_cache_get_set_delete() -> None:
    cache = InMemoryCacheService()
    assert await cache.get("k") is None
    await cache.set("k", ["a", "b"], ttl=10)
    assert await cache.get("k") == ["a", "b"]
    await cache.delete("k")
    assert await cache.get("k") is None


async def test_memory_cache_returns_copies() -> None:
    """Mutating a returned value does not change the stored entry."""
    cache = InMemoryCacheService()
    await cache.set("k", ["a"])
    value = await cache.get("k")
    value.append("b")
    assert await cache.get("k") == ["a"]


async def test_memory_cache_entries_expire() -> None:
    clock = _Clock()
    cache = InMemoryCacheService(clock=clock)
    await cache.set("k", 1, ttl=5)
    clock.now += 4
    assert await cache.get("k") == 1
    clock.now += 1
    assert await cache.get("k") is None


async def test_memory_cache_delete_pattern() -> None:
    cache = InMemoryCacheService()
    await cache.set("permission:1", [])
    await cache.set("permission:2", [])
    await cache.set("other:1", [])
    assert await cache.delete_pattern("permission:*") == 2
    assert await cache.get("other:1") == []


async def test_permission_cache_round_trip() -> None:
    cache = PermissionCache(InMemoryCacheService(), ttl=60)
    assert await cache.get(5) is None
    await cache.put(5, frozenset({"b.view", "a.view"}))
    assert await cache.get(5) == frozenset({"a.view", "b.view"})


async def test_permission_cache_empty_set_is_a_hit() -> None:
    """A user with no permissions is cached as an empty set, not a miss."""
    cache = PermissionCache(InMemoryCacheService(), ttl=60)
    await cache.put(5, frozenset())
    assert await cache.get(5) == frozenset()


async def test_invalidate_user_drops_only_that_user() -> None:
    cache = PermissionCache(InMemoryCacheService(), ttl=60)
    await cache.put(1, frozenset({"x.view"}))
    await cache.put(2, frozenset({"y.view"}))
    await cache.invalidate_user(1)
    assert await cache.get(1) is None
    assert await cache.get(2) == {"y.view"}


async def test_invalidate_drops_every_user() -> None:
    cache = PermissionCache(InMemoryCacheService(), ttl=60)
    await cache.put(1, frozenset({"x.view"}))
    await cache.put(2, frozenset({"y.view"}))
    await cache.invalidate()
    assert await cache.get(1) is None
    assert await cache.get(2) is None


async def test_staleness_bounded_by_ttl() -> None:
    """Without invalidation, a cached set disappears once the TTL passes."""
    clock = _Clock()
    cache = PermissionCache(InMemoryCacheService(clock=clock), ttl=300)
    await cache.put(1, frozenset({"x.view"}))
    clock.now += 301
    assert await cache.get(1) is None


async def test_unavailable_backend_is_skipped() -> None:
    """When the backend is down every call is a no-op miss."""
    backend = MagicMock()
    backend.is_available.return_value = False
    backend.get = AsyncMock()
    backend.set = AsyncMock()
    backend.delete = AsyncMock()
    backend.delete_pattern = AsyncMock()
    cache = PermissionCache(backend)
    assert cache.is_available() is False
    assert await cache.get(1) is None
    await cache.put(1, frozenset({"x.view"}))
    await cache.invalidate_user(1)
    await cache.invalidate()
    backend.get.assert_not_awaited()
    backend.set.assert_not_awaited()
    backend.delete.assert_not_awaited()
    backend.delete_pattern.assert_not_awaited()
