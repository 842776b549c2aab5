"""Redis connection for the observer event feed.

Mirrors engine.py: with REDIS_URL set, a pooled async client is created
at import time; without it ``redis_pool`` is None and the event feed
falls back to an in-process list.  Redis carries notifications only.
The ledger's own event log stays the record of truth, so losing Redis
loses no history.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from cert_registry.core.config import SETTINGS

logger = logging.getLogger(__name__)

redis_pool: aioredis.Redis | None = None  # type: ignore[type-arg]

if SETTINGS.redis_url:
    redis_pool = aioredis.from_url(
        SETTINGS.redis_url,
        decode_responses=True,
        max_connections=20,
        health_check_interval=30,
    )


async def check_connection() -> str:
    """Probe the feed's Redis: "ok", "degraded" or "not_configured"."""
    if redis_pool is None:
        return "not_configured"
    try:
        await redis_pool.ping()  # type: ignore[misc]
    except (RedisError, OSError):
        logger.warning("Event feed Redis unreachable", exc_info=True)
        return "degraded"
    return "ok"


@asynccontextmanager
async def lifespan_redis():
    if redis_pool is None:
        logger.info("REDIS_URL not set, event feed is in-memory")
        yield
        return

    # Issuance does not depend on the feed, so a failed probe only warns.
    if await check_connection() == "ok":
        logger.info("Event feed Redis connected")
    yield

    await redis_pool.aclose()
    logger.info("Event feed Redis pool closed")
