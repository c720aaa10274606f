"""Network checker backed by the host's DNS configuration and TCP stack."""

import asyncio
import socket
from contextlib import suppress

import dns.asyncresolver
import dns.exception
import dns.rdatatype
from prose_pod_common.config.settings import config
from prose_pod_common.logging import get_logger

from ..models.dns import AAAARecord, ARecord, SrvRecord
from .network_checker import DnsLookupError, NetworkChecker, SrvLookupResult

logger = get_logger(__name__)


class LiveNetworkChecker(NetworkChecker):
    """Performs real DNS queries and TCP connections.

    The resolver is built from the system configuration (``/etc/resolv.conf``
    or its platform equivalent) so checks see what the pod's network sees,
    not what a public resolver would answer.
    """

    def __init__(
        self,
        connect_timeout: float | None = None,
        dns_lifetime: float | None = None,
        resolver: dns.asyncresolver.Resolver | None = None,
    ):
        """Initialize the checker.

        Args:
            connect_timeout: Timeout of one TCP connection attempt, in seconds.
                Uses config.network_checks_tcp_connect_timeout if None.
            dns_lifetime: Total time allowed for one DNS query, in seconds.
                Uses config.network_checks_dns_lifetime if None, then the
                resolver default.
            resolver: Preconfigured resolver. Built lazily from the system
                configuration if None.
        """
        self.connect_timeout = (
            connect_timeout if connect_timeout is not None else config.network_checks_tcp_connect_timeout
        )
        self.dns_lifetime = dns_lifetime if dns_lifetime is not None else config.network_checks_dns_lifetime
        self._resolver = resolver

    def _get_resolver(self) -> dns.asyncresolver.Resolver:
        if self._resolver is None:
            resolver = dns.asyncresolver.Resolver(configure=True)
            if self.dns_lifetime is not None:
                resolver.lifetime = self.dns_lifetime
            self._resolver = resolver
        return self._resolver

    async def _resolve(self, host: str, rdtype: str):
        try:
            return await self._get_resolver().resolve(host, rdtype)
        except dns.exception.DNSException as e:
            message = str(e) or type(e).__name__
            logger.debug(f"{rdtype} lookup for {host} failed: {message}")
            raise DnsLookupError(message) from e

    async def ipv4_lookup(self, host: str) -> list[ARecord]:
        answer = await self._resolve(host, "A")
        hostname = answer.rrset.name.to_text()
        return [ARecord(hostname=hostname, ttl=answer.rrset.ttl, value=rdata.address) for rdata in answer]

    async def ipv6_lookup(self, host: str) -> list[AAAARecord]:
        answer = await self._resolve(host, "AAAA")
        hostname = answer.rrset.name.to_text()
        return [AAAARecord(hostname=hostname, ttl=answer.rrset.ttl, value=rdata.address) for rdata in answer]

    async def srv_lookup(self, host: str) -> SrvLookupResult:
        answer = await self._resolve(host, "SRV")
        hostname = answer.rrset.name.to_text()

        # Lower priority first, then heavier weight (RFC 2782 preference)
        rdatas = sorted(answer, key=lambda r: (r.priority, -r.weight))
        records = [
            SrvRecord(
                hostname=hostname,
                ttl=answer.rrset.ttl,
                priority=rdata.priority,
                weight=rdata.weight,
                port=rdata.port,
                target=rdata.target.to_text(),
            )
            for rdata in rdatas
        ]

        # A target of "." means the service is decidedly not available
        srv_targets = list(dict.fromkeys(r.target for r in records if r.target != "."))

        glue_ips: list[str] = []
        for rrset in answer.response.additional:
            if rrset.rdtype in (dns.rdatatype.A, dns.rdatatype.AAAA):
                glue_ips.extend(rdata.address for rdata in rrset)

        return SrvLookupResult(
            records=records,
            glue_ips=list(dict.fromkeys(glue_ips)),
            srv_targets=srv_targets,
        )

    async def is_reachable(self, host: str, port: int) -> bool:
        """Whether a TCP connection to ``host:port`` succeeds within the connect timeout."""
        logger.trace(f"Checking if {host}:{port} is reachable…")
        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(host, port), timeout=self.connect_timeout
            )
        except (OSError, asyncio.TimeoutError) as e:
            logger.trace(f"{host}:{port} unreachable: {e!r}")
            return False

        writer.close()
        with suppress(OSError):
            await writer.wait_closed()
        logger.trace(f"{host}:{port} reachable")
        return True

    async def is_port_open(self, host: str, port: int) -> bool:
        loop = asyncio.get_running_loop()
        try:
            infos = await loop.getaddrinfo(host, port, type=socket.SOCK_STREAM)
        except (OSError, UnicodeError) as e:
            logger.debug(f"Could not resolve {host} to probe port {port}: {e}")
            return False

        addresses = list(dict.fromkeys(info[4][:2] for info in infos))
        for address, address_port in addresses:
            if await self.is_reachable(address, address_port):
                return True
        return False
