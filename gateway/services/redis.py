from __future__ import annotations

from typing import Optional

import redis.asyncio as redis
from redis.asyncio.connection import ConnectionPool

from gateway.core.config import Settings
from gateway.core.logging import get_structlog_logger

logger = get_structlog_logger(__name__)


async def open_rate_limit_store(settings: Settings) -> Optional[redis.Redis]:
    """
    Connect to the rate-limit store, or return None when it is unavailable.

    Rate limiting fails open: a missing URL or a failed ping leaves the
    limiter disabled and origin checks as the only abuse control.
    """
    if not settings.rate_limit_redis_url:
        logger.info("redis.disabled")
        return None

    pool = ConnectionPool.from_url(
        settings.rate_limit_redis_url,
        max_connections=10,
        socket_timeout=5,
        socket_connect_timeout=5,
        decode_responses=True,
        encoding="utf-8",
    )
    client = redis.Redis(connection_pool=pool)

    try:
        await client.ping()
    except (redis.RedisError, OSError) as e:
        logger.error("redis.connection_failed", error=str(e))
        await close_rate_limit_store(client)
        return None

    logger.info("redis.connected")
    return client


async def close_rate_limit_store(client: Optional[redis.Redis]) -> None:
    if client is None:
        return
    await client.aclose()
    await client.connection_pool.disconnect()
    logger.info("redis.connections_closed")
