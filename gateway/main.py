# gateway/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, Optional

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sentry_sdk.integrations.asyncio import AsyncioIntegration
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration
from starlette.exceptions import HTTPException as StarletteHTTPException

from gateway.core.config import Settings, get_settings
from gateway.core.exceptions import GatewayError, MethodNotAllowed
from gateway.core.logging import configure_structlog, get_structlog_logger
from gateway.middleware import CORSPolicyMiddleware, LoggingMiddleware, RequestIdMiddleware
from gateway.routes import admin_router, fallback_router, submissions_router
from gateway.services.origin_policy import OriginPolicy
from gateway.services.redis import close_rate_limit_store, open_rate_limit_store

logger = get_structlog_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    settings: Settings = app.state.settings
    logger.info("application.starting", environment=settings.environment)

    if not settings.origins():
        logger.warning("origins.not_configured")
    if not settings.airtable_configured:
        logger.warning("airtable.not_configured")

    owns_store = False
    if app.state.rate_limit_store is None:
        app.state.rate_limit_store = await open_rate_limit_store(settings)
        owns_store = app.state.rate_limit_store is not None

    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            integrations=[
                AsyncioIntegration(),
                FastApiIntegration(),
                StarletteIntegration(),
            ],
            traces_sample_rate=1.0 if settings.is_development else 0.1,
            send_default_pii=False,
        )
        logger.info("sentry.initialized")

    logger.info("application.started")
    yield

    logger.info("application.shutting_down")
    if owns_store:
        await close_rate_limit_store(app.state.rate_limit_store)
        app.state.rate_limit_store = None
    logger.info("application.shutdown_complete")


async def gateway_exception_handler(request: Request, exc: GatewayError):
    """Render a GatewayError as its terminal JSON response."""
    settings: Settings = request.app.state.settings
    logger.warning(
        "gateway.error",
        status_code=exc.status_code,
        code=exc.code,
        path=request.url.path,
        method=request.method,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_body(expose_details=settings.expose_error_details),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render router-level HTTP errors, such as an unlisted method, as gateway JSON."""
    if exc.status_code == 405:
        return await gateway_exception_handler(request, MethodNotAllowed())

    logger.warning(
        "http.error",
        status_code=exc.status_code,
        path=request.url.path,
        method=request.method,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def create_app(
    settings: Optional[Settings] = None,
    rate_limit_store: Optional[Any] = None,
) -> FastAPI:
    """
    Build the gateway application.

    ``rate_limit_store`` is any object with async ``get(key)`` and
    ``set(key, value, ex=ttl)``. When omitted, the lifespan connects to
    Redis if ``RATE_LIMIT_REDIS_URL`` is set.
    """
    settings = settings or get_settings()
    configure_structlog(settings.log_level)

    # Docs are off: every GET is answered with 405.
    app = FastAPI(
        title="Lead Submission Gateway",
        version="1.0.0",
        description="Validates lead-capture form submissions and forwards them to Airtable",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.rate_limit_store = rate_limit_store

    # Last added runs first.
    app.add_middleware(CORSPolicyMiddleware, policy=OriginPolicy(settings))
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIdMiddleware)

    app.add_exception_handler(GatewayError, gateway_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    app.include_router(admin_router, tags=["admin"])
    app.include_router(submissions_router, tags=["submissions"])
    app.include_router(fallback_router)

    logger.info("application.configured", environment=settings.environment)
    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "gateway.main:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,
    )
