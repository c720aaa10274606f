"""Routers package."""

from .dns_setup import router as dns_setup_router
from .health import router as health_router
from .network_checks import router as network_checks_router
from .pod_config import router as pod_config_router

__all__ = [
    "dns_setup_router",
    "health_router",
    "network_checks_router",
    "pod_config_router",
]
