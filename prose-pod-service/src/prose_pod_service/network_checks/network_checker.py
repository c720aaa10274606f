"""Capability interface over DNS lookups and TCP reachability.

Checks never talk to the network directly: they go through a
``NetworkChecker``, so the live implementation can be swapped for a stub in
tests. Implementations are stateless and shared by every concurrent check of
a session.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from ipaddress import ip_address

from prose_pod_common.logging import get_logger

from ..models.dns import AAAARecord, ARecord, SrvRecord

logger = get_logger(__name__)


class DnsLookupError(Exception):
    """A DNS lookup failed (timeout, NXDOMAIN, no answer…)."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"DNS lookup error: {message}")


class IpVersion(str, Enum):
    V4 = "v4"
    V6 = "v6"

    @property
    def label(self) -> str:
        return "IPv4" if self is IpVersion.V4 else "IPv6"

    @property
    def number(self) -> int:
        return 4 if self is IpVersion.V4 else 6


@dataclass(frozen=True)
class SrvLookupResult:
    """Answer to a SRV query.

    ``glue_ips`` are the addresses the resolver returned for the SRV targets
    in the same answer, ``srv_targets`` the target hostnames themselves. Both
    keep answer order and contain no duplicates.
    """

    records: list[SrvRecord] = field(default_factory=list)
    glue_ips: list[str] = field(default_factory=list)
    srv_targets: list[str] = field(default_factory=list)


class NetworkChecker(ABC):
    """Abstract base class for network checkers."""

    @abstractmethod
    async def ipv4_lookup(self, host: str) -> list[ARecord]:
        """Resolve A records for ``host``.

        Raises:
            DnsLookupError: If the lookup fails or returns no record
        """

    @abstractmethod
    async def ipv6_lookup(self, host: str) -> list[AAAARecord]:
        """Resolve AAAA records for ``host``.

        Raises:
            DnsLookupError: If the lookup fails or returns no record
        """

    @abstractmethod
    async def srv_lookup(self, host: str) -> SrvLookupResult:
        """Resolve SRV records for ``host``.

        Raises:
            DnsLookupError: If the lookup fails or returns no record
        """

    @abstractmethod
    async def is_port_open(self, host: str, port: int) -> bool:
        """Whether any address ``host`` resolves to accepts TCP connections on ``port``.

        Never raises: an unresolvable host is reported as closed.
        """

    async def ip_lookup(self, host: str, ip_version: IpVersion) -> list[ARecord] | list[AAAARecord]:
        if ip_version is IpVersion.V4:
            return await self.ipv4_lookup(host)
        return await self.ipv6_lookup(host)

    async def is_ip_available(self, host: str, ip_version: IpVersion) -> bool:
        """Whether ``host`` has at least one address of the given IP version.

        IP literals (e.g. SRV glue addresses) are available when their version
        matches. Lookup errors count as unavailable.
        """
        try:
            literal = ip_address(host)
        except ValueError:
            literal = None
        if literal is not None:
            return literal.version == ip_version.number

        try:
            records = await self.ip_lookup(host, ip_version)
        except DnsLookupError as e:
            logger.debug(f"{ip_version.label} lookup for {host} failed: {e.message}")
            return False
        return len(records) > 0
