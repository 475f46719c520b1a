from __future__ import annotations

from typing import Any, Mapping, Optional

from redis.exceptions import RedisError

from gateway.core.config import Settings
from gateway.core.exceptions import RateLimited
from gateway.core.logging import get_structlog_logger

logger = get_structlog_logger(__name__)

UNKNOWN_CLIENT = "unknown"


def rate_limit_key(client_id: str) -> str:
    return f"rate_limit:{client_id}"


class RateLimiter:
    """
    Per-client submission counter with a re-anchored fixed window.

    Every accepted request rewrites the counter with a fresh expiry, so the
    window restarts at the most recent accepted hit rather than sliding.
    Without a store the limiter is disabled and every request passes.
    """

    def __init__(self, settings: Settings, store: Optional[Any] = None):
        self.store = store
        self.max_requests = settings.rate_limit_max_requests
        self.window_seconds = settings.rate_limit_window_seconds
        self.client_ip_header = settings.client_ip_header

    @property
    def enabled(self) -> bool:
        return self.store is not None

    def client_id(self, headers: Mapping[str, str]) -> str:
        # Callers without the edge header all share one bucket.
        return headers.get(self.client_ip_header) or UNKNOWN_CLIENT

    async def hit(self, client_id: str) -> int:
        """Count one submission for ``client_id`` or raise ``RateLimited``."""
        if not self.enabled:
            return 0

        key = rate_limit_key(client_id)
        try:
            raw = await self.store.get(key)
            count = int(raw) if raw else 0
        except (RedisError, ValueError) as e:
            logger.error("rate_limit.read_failed", error=str(e), client_id=client_id[:50])
            return 0

        if count >= self.max_requests:
            logger.warning(
                "rate_limit.exceeded",
                client_id=client_id[:50],
                count=count,
                limit=self.max_requests,
            )
            raise RateLimited()

        try:
            await self.store.set(key, str(count + 1), ex=self.window_seconds)
        except RedisError as e:
            logger.error("rate_limit.write_failed", error=str(e), client_id=client_id[:50])

        return count + 1
