"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (logging, permission cache,
telemetry, DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings
from app.infrastructure.cache import (
    InMemoryCacheService,
    PermissionCache,
    RedisCacheService,
)
from app.infrastructure.persistence.database import dispose_engine, get_engine
from app.shared.telemetry.logging import setup_logging
from app.shared.telemetry.telemetry import get_telemetry, set_telemetry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, cache backend (Redis if enabled, else in-process),
    permission cache, telemetry hooks (if enabled). Shutdown order: cache
    disconnect, telemetry shutdown, SQL engine dispose.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    if settings.redis_enabled:
        cache = RedisCacheService(settings=settings)
    else:
        cache = InMemoryCacheService()
    await cache.connect()
    app.state.cache = cache
    app.state.permission_cache = PermissionCache(
        cache, ttl=settings.cache_ttl_permissions
    )
    logger.info(
        "Permission cache ready (backend=%s, ttl=%ss)",
        "redis" if settings.redis_enabled else "memory",
        settings.cache_ttl_permissions,
    )

    telemetry = get_telemetry()
    if telemetry is not None:
        # Tracer provider comes from create_app.
        telemetry.instrument_sqlalchemy(get_engine())
        if settings.redis_enabled:
            telemetry.instrument_redis()

    yield

    # ---- Shutdown ----
    await app.state.cache.disconnect()
    app.state.permission_cache = None
    logger.info("Cache disconnected")

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)

    await dispose_engine()
    logger.info("Database engine disposed")
