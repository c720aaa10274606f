"""FastAPI dependencies shared by the routers."""

from fastapi import Depends, Request
from prose_pod_common.logging import get_logger
from prose_pod_service.models.xmpp import normalize_domain
from prose_pod_service.network_checks import LiveNetworkChecker, NetworkChecker, PodNetworkConfig
from prose_pod_service.repositories import PodConfigRepository, get_repository

from .errors import PodAddressNotInitialized, ServerConfigNotInitialized

logger = get_logger(__name__)


def get_network_checker(request: Request) -> NetworkChecker:
    """Resolver shared by every request of the application."""
    checker = getattr(request.app.state, "network_checker", None)
    if checker is None:
        checker = LiveNetworkChecker()
        request.app.state.network_checker = checker
    return checker


def get_pod_config_repository() -> PodConfigRepository:
    return get_repository()


async def get_pod_network_config(
    repository: PodConfigRepository = Depends(get_pod_config_repository),
) -> PodNetworkConfig:
    """Network configuration of the pod, or a 400 telling what to initialize first."""
    server_domain = await repository.get_server_domain()
    if not server_domain:
        raise ServerConfigNotInitialized()

    pod_address = await repository.get_pod_address()
    if pod_address is None:
        raise PodAddressNotInitialized()

    return PodNetworkConfig(
        server_domain=normalize_domain(server_domain),
        pod_address=pod_address,
        federation_enabled=await repository.is_federation_enabled(),
    )
