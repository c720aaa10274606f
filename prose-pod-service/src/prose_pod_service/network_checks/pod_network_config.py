"""Network configuration of a pod, and everything derived from it.

DNS setup instructions and the list of checks to run are pure functions of
the server domain, the pod address and whether federation is enabled,
computed once per request.
"""

from dataclasses import dataclass

from ..models.dns import DnsEntry, DnsEntryKind, DnsSetupStep
from ..models.pod_address import DynamicPodAddress, PodAddress, StaticPodAddress
from ..models.xmpp import XmppConnectionType, normalize_domain
from .checks import (
    DnsRecordCheck,
    IpConnectivityCheck,
    NetworkCheck,
    PortConnectionType,
    PortReachabilityCheck,
)
from .network_checker import IpVersion


def _fqdn(name: str) -> str:
    return f"{normalize_domain(name)}."


@dataclass(frozen=True)
class PodNetworkConfig:
    server_domain: str
    pod_address: PodAddress
    federation_enabled: bool = False

    def connection_types(self) -> list[XmppConnectionType]:
        """Connection types the pod accepts. Server-to-server needs federation."""
        if self.federation_enabled:
            return [XmppConnectionType.C2S, XmppConnectionType.S2S]
        return [XmppConnectionType.C2S]

    @property
    def xmpp_hostname(self) -> str:
        """Name the A/AAAA records of a static pod live at."""
        return _fqdn(f"xmpp.{self.server_domain}")

    @property
    def srv_target(self) -> str:
        if isinstance(self.pod_address, DynamicPodAddress):
            return _fqdn(self.pod_address.hostname)
        return self.xmpp_hostname

    def _ip_entries(self) -> list[DnsEntry]:
        if not isinstance(self.pod_address, StaticPodAddress):
            return []

        entries = []
        if self.pod_address.ipv4 is not None:
            entries.append(DnsEntry(DnsEntryKind.IPV4, self.xmpp_hostname, str(self.pod_address.ipv4)))
        if self.pod_address.ipv6 is not None:
            entries.append(DnsEntry(DnsEntryKind.IPV6, self.xmpp_hostname, str(self.pod_address.ipv6)))
        return entries

    def _srv_entry(self, connection_type: XmppConnectionType) -> DnsEntry:
        kind = DnsEntryKind.SRV_C2S if connection_type is XmppConnectionType.C2S else DnsEntryKind.SRV_S2S
        hostname = _fqdn(connection_type.standard_domain(self.server_domain))
        return DnsEntry(kind, hostname, self.srv_target)

    def dns_setup_steps(self) -> list[DnsSetupStep[DnsEntry]]:
        """Instructions an administrator follows to publish the pod's records."""
        steps = []

        ip_entries = self._ip_entries()
        if ip_entries:
            steps.append(DnsSetupStep("specify your server IP address", ip_entries))

        steps.append(DnsSetupStep("let clients connect to your server", [self._srv_entry(XmppConnectionType.C2S)]))
        if self.federation_enabled:
            steps.append(DnsSetupStep("let servers connect to your server", [self._srv_entry(XmppConnectionType.S2S)]))
        return steps

    def dns_entries(self) -> list[DnsEntry]:
        return [entry for step in self.dns_setup_steps() for entry in step.records]

    def dns_record_checks(self) -> list[DnsRecordCheck]:
        return [DnsRecordCheck(entry) for entry in self.dns_entries()]

    def port_reachability_checks(self) -> list[PortReachabilityCheck]:
        port_types = [PortConnectionType.C2S]
        if self.federation_enabled:
            port_types.append(PortConnectionType.S2S)
        port_types.append(PortConnectionType.HTTPS)
        return [PortReachabilityCheck(connection_type, self.server_domain) for connection_type in port_types]

    def ip_connectivity_checks(self) -> list[IpConnectivityCheck]:
        if isinstance(self.pod_address, DynamicPodAddress):
            hostname = self.pod_address.hostname
            available = {IpVersion.V4: True, IpVersion.V6: True}
        else:
            hostname = self.server_domain
            available = {
                IpVersion.V4: self.pod_address.ipv4 is not None,
                IpVersion.V6: self.pod_address.ipv6 is not None,
            }

        return [
            IpConnectivityCheck(connection_type, ip_version, hostname, applicable=available[ip_version])
            for connection_type in self.connection_types()
            for ip_version in (IpVersion.V4, IpVersion.V6)
        ]

    def all_checks(self) -> list[NetworkCheck]:
        return [
            *self.dns_record_checks(),
            *self.port_reachability_checks(),
            *self.ip_connectivity_checks(),
        ]
