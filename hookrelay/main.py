"""FastAPI application factory with lifespan context manager."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from hookrelay.config import Settings, get_settings
from hookrelay.logging_config import configure_logging
from hookrelay.middleware.signature import SignatureVerifierMiddleware
from hookrelay.routers import health, webhooks


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return a JSON 500 response for any unhandled exception."""
    logger = structlog.get_logger()
    logger.exception("unhandled_exception", path=request.url.path, method=request.method)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the webhook receiver application.

    The webhook secret is handed to the signature middleware here and nowhere
    else. Without explicit *settings* they are loaded from the environment.
    """
    if settings is None:
        settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Configure logging before the first request is served."""
        configure_logging(json_logs=not settings.debug, log_level=settings.log_level)
        structlog.get_logger().info(
            "app_started", app_name=settings.app_name, webhook_path=settings.webhook_path
        )
        yield

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.add_middleware(
        SignatureVerifierMiddleware,
        secret=settings.secret_bytes,
        exempt_paths=("/healthz",),
    )
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(health.router)
    app.include_router(webhooks.router, prefix=settings.webhook_path)
    return app
