"""Rental portfolio entitlements backend: FastAPI application entry point."""

import signal
import uuid
from contextlib import asynccontextmanager

# configure_logging MUST be called before all other app imports
# (structlog caches the processor chain on first use).
from entitlements.core.config import get_settings as _get_settings_early
from entitlements.core.logging import configure_logging

configure_logging(_get_settings_early())

import structlog

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from entitlements.api.routes import api_router
from entitlements.core.config import get_settings
from entitlements.core.exceptions import BadRequestError, ConflictError, NotFoundError
from entitlements.db import close_db, init_db
from entitlements.db.seed import seed_tiers
from entitlements.middleware.correlation import get_correlation_id, setup_correlation_middleware

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    app.state.shutting_down = False

    def handle_sigterm(signum, frame):
        app.state.shutting_down = True
        logger.info("sigterm_received", action="health_check_503_draining_connections")

    signal.signal(signal.SIGTERM, handle_sigterm)

    settings = get_settings()
    logger.info("startup_begin", app_name=settings.app_name, debug=settings.debug)

    await init_db()
    logger.info("db_initialized")

    if settings.seed_tiers_on_startup:
        await seed_tiers()

    yield

    logger.info("shutdown_begin")
    await close_db()
    logger.info("shutdown_complete")


def _error_response(request: Request, status_code: int, detail: str, event: str) -> JSONResponse:
    """Log the failure server-side and return a sanitized body with a debug_id."""
    debug_id = str(uuid.uuid4())

    logger.error(
        event,
        status_code=status_code,
        debug_id=debug_id,
        correlation_id=get_correlation_id(),
        path=request.url.path,
        method=request.method,
        detail=detail,
    )

    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "debug_id": debug_id},
    )


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return _error_response(request, 404, str(exc), "not_found")


async def bad_request_handler(request: Request, exc: BadRequestError) -> JSONResponse:
    return _error_response(request, 400, str(exc), "bad_request")


async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    return _error_response(request, 409, str(exc), "conflict")


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Global exception handler for HTTPException with debug_id tracking."""
    return _error_response(request, exc.status_code, exc.detail, "http_exception")


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for unhandled errors with debug_id tracking.

    Logs full exception with traceback, returns generic 500 to client.
    """
    debug_id = str(uuid.uuid4())

    logger.error(
        "unhandled_exception",
        debug_id=debug_id,
        correlation_id=get_correlation_id(),
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
        exc_info=True,
    )

    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "debug_id": debug_id},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.exception_handler(NotFoundError)(not_found_handler)
    app.exception_handler(BadRequestError)(bad_request_handler)
    app.exception_handler(ConflictError)(conflict_handler)
    app.exception_handler(HTTPException)(http_exception_handler)
    app.exception_handler(Exception)(generic_exception_handler)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Subscription tiers and property quotas for the rental portfolio backend",
        version="0.1.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Correlation ID middleware (runs first on incoming requests)
    setup_correlation_middleware(app)

    register_exception_handlers(app)

    app.include_router(api_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "entitlements.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
