"""Cache: backends, cache key utilities, and the permission cache.

RedisCacheService is used when settings.redis_enabled is True; otherwise
InMemoryCacheService. Key format is in keys.py (DRY).
"""

from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.infrastructure.cache.keys import permission_key, permission_pattern
from app.infrastructure.cache.memory_cache import InMemoryCacheService
from app.infrastructure.cache.permission_cache import PermissionCache
from app.infrastructure.cache.redis_cache import RedisCacheService

__all__ = [
    "CacheProtocol",
    "InMemoryCacheService",
    "PermissionCache",
    "RedisCacheService",
    "permission_key",
    "permission_pattern",
]
