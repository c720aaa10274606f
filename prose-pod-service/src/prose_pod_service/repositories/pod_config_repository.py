"""Storage of the pod configuration the network checks are derived from."""

from abc import ABC, abstractmethod

from prose_pod_common.config.settings import PodConfig, config
from prose_pod_common.logging import get_logger

from ..models.pod_address import PodAddress, pod_address_from_parts

logger = get_logger(__name__)


class PodConfigRepository(ABC):
    """Repository interface for the pod configuration."""

    @abstractmethod
    async def get_pod_address(self) -> PodAddress | None:
        """Get the pod address, None if it was never set."""
        pass

    @abstractmethod
    async def set_pod_address(self, address: PodAddress) -> bool:
        """Set the pod address. Returns True if it was created, False if replaced."""
        pass

    @abstractmethod
    async def get_server_domain(self) -> str | None:
        """Get the XMPP domain served by the pod, None if not initialized."""
        pass

    @abstractmethod
    async def is_federation_enabled(self) -> bool:
        """Whether the XMPP server accepts server-to-server connections."""
        pass


class MemoryPodConfigRepository(PodConfigRepository):
    """In-memory repository, seeded from the ``PROSE_POD_*`` settings."""

    def __init__(
        self,
        pod_address: PodAddress | None = None,
        server_domain: str | None = None,
        federation_enabled: bool = False,
    ):
        self._pod_address = pod_address
        self._server_domain = server_domain
        self._federation_enabled = federation_enabled

    @classmethod
    def from_config(cls, settings: PodConfig | None = None) -> "MemoryPodConfigRepository":
        settings = settings or config
        pod_address = None
        if settings.pod_ipv4 or settings.pod_ipv6 or settings.pod_hostname:
            pod_address = pod_address_from_parts(
                ipv4=settings.pod_ipv4,
                ipv6=settings.pod_ipv6,
                hostname=settings.pod_hostname,
            )
            logger.info(f"Pod address seeded from configuration: {pod_address}")
        return cls(
            pod_address=pod_address,
            server_domain=settings.server_domain,
            federation_enabled=settings.federation_enabled,
        )

    async def get_pod_address(self) -> PodAddress | None:
        return self._pod_address

    async def set_pod_address(self, address: PodAddress) -> bool:
        created = self._pod_address is None
        self._pod_address = address
        logger.info(f"Pod address {'set' if created else 'replaced'}: {address}")
        return created

    async def get_server_domain(self) -> str | None:
        return self._server_domain

    async def is_federation_enabled(self) -> bool:
        return self._federation_enabled


# Global repository instance holder
_repository_instance: PodConfigRepository | None = None


def set_repository(repository: PodConfigRepository | None) -> None:
    """Set the global repository instance (None resets it)."""
    global _repository_instance
    _repository_instance = repository


def get_repository() -> PodConfigRepository:
    """Get the global repository instance, creating it from configuration on first use."""
    global _repository_instance
    if _repository_instance is None:
        _repository_instance = MemoryPodConfigRepository.from_config()
    return _repository_instance
