"""Health check router."""

import time
from datetime import datetime, timezone

from fastapi import APIRouter
from prose_pod_service.repositories import get_repository

from .. import __version__
from ..models import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse, include_in_schema=False)
async def health_check():
    """System health check."""
    repository = get_repository()
    server_domain = await repository.get_server_domain()
    pod_address = await repository.get_pod_address()

    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=__version__,
        services={
            "server_config": "initialized" if server_domain else "not_initialized",
            "pod_address": "initialized" if pod_address is not None else "not_initialized",
        },
    )


@router.get("/ready", include_in_schema=False)
async def readiness_check():
    """Kubernetes readiness probe."""
    return {"status": "ready"}


@router.get("/live", include_in_schema=False)
async def liveness_check():
    """Kubernetes liveness probe."""
    return {"status": "alive", "timestamp": time.time()}
