# leadcapture/main.py
from __future__ import annotations

import time
from contextlib import asynccontextmanager

import httpx
import sentry_sdk
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from sentry_sdk.integrations.asyncio import AsyncioIntegration
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from leadcapture import __version__
from leadcapture.core.config import settings
from leadcapture.core.exceptions import FetchError, LeadCaptureError
from leadcapture.core.logging import configure_structlog, get_structlog_logger
from leadcapture.middleware.request_id import RequestIdMiddleware
from leadcapture.routes import forms, health


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    logger = get_structlog_logger(__name__)

    # Startup
    logger.info("application.starting", environment=settings.environment)

    # Shared outbound client; per-call timeouts are set by each service
    app.state.http_client = httpx.AsyncClient(
        headers={"User-Agent": f"LeadCapture/{__version__}"},
    )
    logger.info("http_client.opened")

    # Initialize Sentry if DSN is provided
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

    # Shutdown
    logger.info("application.shutting_down")
    await app.state.http_client.aclose()
    logger.info("http_client.closed")
    logger.info("application.shutdown_complete")


# Configure logging before creating app
configure_structlog()
logger = get_structlog_logger(__name__)

app = FastAPI(
    title="LeadCapture Form Relay",
    version=__version__,
    description="Email verification and HubSpot relay for the demo form",
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    openapi_url="/openapi.json" if settings.is_development else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins(),
    allow_credentials=True,
    allow_methods=["POST", "GET", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)
app.add_middleware(RequestIdMiddleware)


@app.exception_handler(LeadCaptureError)
async def lead_capture_exception_handler(request: Request, exc: LeadCaptureError):
    """Handle pipeline errors that escaped the form handler."""
    status_code = status.HTTP_502_BAD_GATEWAY if isinstance(exc, FetchError) else status.HTTP_500_INTERNAL_SERVER_ERROR
    logger.warning(
        "api.exception",
        status_code=status_code,
        code=exc.code,
        path=request.url.path,
        method=request.method,
    )
    return JSONResponse(
        status_code=status_code,
        content={"code": exc.code, "message": exc.message, "details": exc.details},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    error_id = f"err_{int(time.time())}_{hash(str(exc)) % 10000:04d}"

    logger.error(
        "unhandled.exception",
        error_id=error_id,
        error_type=type(exc).__name__,
        error=str(exc),
        path=request.url.path,
        method=request.method,
    )

    message = f"Internal server error: {exc}" if settings.is_development else "Internal server error"
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"code": "internal_error", "message": message, "details": {"error_id": error_id}},
        headers={"X-Error-ID": error_id},
    )


app.include_router(health.router, prefix=settings.api_prefix, tags=["health"])
app.include_router(forms.router, prefix=settings.api_prefix, tags=["forms"])

if not settings.is_testing:
    Instrumentator().instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)


@app.get("/")
async def root():
    """Root endpoint with service information."""
    return {
        "name": "LeadCapture Form Relay",
        "version": app.version,
        "environment": settings.environment,
        "health": f"{settings.api_prefix}/health",
        "submit": f"{settings.api_prefix}/forms/demo/submit",
    }
