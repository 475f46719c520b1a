from __future__ import annotations

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from gateway.core.logging import get_structlog_logger
from gateway.services.origin_policy import OriginPolicy, resolve_request_origin

logger = get_structlog_logger(__name__)


class CORSPolicyMiddleware(BaseHTTPMiddleware):
    """
    Attach origin-policy CORS headers to every response.

    This is also the last stop for unexpected exceptions, so browser callers
    can still read the JSON error body.
    """

    def __init__(self, app, policy: OriginPolicy):
        super().__init__(app)
        self.policy = policy

    async def dispatch(self, request: Request, call_next):
        origin = resolve_request_origin(request.headers)

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                "unhandled.exception",
                error_type=type(e).__name__,
                path=request.url.path,
                method=request.method,
            )
            response = JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": "Internal server error"},
            )

        for name, value in self.policy.cors_headers(origin).items():
            response.headers[name] = value
        return response
