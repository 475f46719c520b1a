from __future__ import annotations

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from gateway.core.logging import get_structlog_logger

logger = get_structlog_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request/response logging."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        logger.info(
            "request.received",
            method=request.method,
            path=request.url.path,
            origin=request.headers.get("origin"),
            user_agent=request.headers.get("user-agent", "unknown"),
            content_length=request.headers.get("content-length", "0"),
        )

        response = await call_next(request)

        response_time = time.time() - start_time
        response.headers["X-Response-Time"] = f"{response_time:.3f}"

        log = logger.warning if response.status_code >= 400 else logger.info
        log(
            "request.completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            response_time_ms=round(response_time * 1000, 2),
        )

        return response
