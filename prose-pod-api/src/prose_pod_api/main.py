"""Prose Pod API main application."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from prose_pod_common.config.settings import config
from prose_pod_common.logging import get_logger, setup_service_logging
from prose_pod_service.network_checks import LiveNetworkChecker
from prose_pod_service.repositories import get_repository

from . import __version__
from .errors import ApiError
from .middleware import setup_cors
from .models import ErrorResponse
from .routers import (
    dns_setup_router,
    health_router,
    network_checks_router,
    pod_config_router,
)

# Setup logging for API service
setup_service_logging("prose-pod-api")
logger = get_logger(__name__)

HEALTH_PATHS = ("/health", "/ready", "/live")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting Prose Pod API", version=__version__)

    repository = get_repository()
    if not await repository.get_server_domain():
        logger.warning("No server domain configured, network checks will be rejected")

    app.state.network_checker = LiveNetworkChecker()

    yield

    logger.info("Shutting down Prose Pod API")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title="Prose Pod API",
        description="Administration API of a Prose pod, with network diagnostics",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # CORS middleware
    setup_cors(app)

    # Request logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or f"req_{uuid.uuid4().hex[:16]}"
        request.state.request_id = request_id

        # Skip logging for health check endpoints
        if request.url.path in HEALTH_PATHS:
            return await call_next(request)

        start_time = time.time()
        logger.info(
            "Request started",
            method=request.method,
            url=str(request.url),
            client_ip=request.client.host if request.client else None,
            request_id=request_id,
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                error=str(e),
                process_time=round(time.time() - start_time, 4),
                request_id=request_id,
            )
            raise

        process_time = time.time() - start_time
        logger.info(
            "Request completed",
            status_code=response.status_code,
            process_time=round(process_time, 4),
            request_id=request_id,
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(round(process_time, 4))
        return response

    # Security headers middleware
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        if not config.debug:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response

    # Exception handlers
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        logger.info(f"{exc.error}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error=exc.error,
                message=exc.message,
                details=exc.response_details(),
                request_id=getattr(request.state, "request_id", None),
            ).model_dump(),
            headers=exc.headers,
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error=f"http_error_{exc.status_code}",
                message=str(exc.detail),
                request_id=getattr(request.state, "request_id", None),
            ).model_dump(),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        logger.error("Validation error", error=str(exc))
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(
                error="validation_error",
                message=str(exc),
                request_id=getattr(request.state, "request_id", None),
            ).model_dump(),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.opt(exception=exc).error(f"Internal server error: {exc}")

        # In debug mode, include the actual error details
        if config.debug:
            error_details = {
                "type": type(exc).__name__,
                "message": str(exc),
                "path": str(request.url.path),
            }
            message = f"{type(exc).__name__}: {str(exc)}"
        else:
            error_details = None
            message = "An unexpected error occurred"

        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="internal_server_error",
                message=message,
                details=error_details,
                request_id=getattr(request.state, "request_id", None),
            ).model_dump(),
        )

    # Public routers
    app.include_router(health_router)

    # Administrator routers (JWT auth required at router level)
    app.include_router(network_checks_router)
    app.include_router(dns_setup_router)
    app.include_router(pod_config_router)

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "name": "Prose Pod API",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    return app


# Create application instance
app = create_app()
