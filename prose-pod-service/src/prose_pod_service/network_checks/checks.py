"""The three categories of network checks and their results.

Each check is an immutable value object that knows its identifier, its
description, the hostnames it probes and how to compute one result through a
``NetworkChecker``. Each result knows whether it is worth retrying.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from ..models.dns import DnsEntry, DnsEntryKind
from ..models.xmpp import XmppConnectionType
from .network_checker import DnsLookupError, IpVersion, NetworkChecker
from .resolution import flattened_run_any


# Statuses

class DnsRecordCheckStatus(str, Enum):
    QUEUED = "QUEUED"
    CHECKING = "CHECKING"
    VALID = "VALID"
    PARTIALLY_VALID = "PARTIALLY_VALID"
    INVALID = "INVALID"
    ERROR = "ERROR"


class PortReachabilityCheckStatus(str, Enum):
    QUEUED = "QUEUED"
    CHECKING = "CHECKING"
    OPEN = "OPEN"
    CLOSED = "CLOSED"


class IpConnectivityCheckStatus(str, Enum):
    QUEUED = "QUEUED"
    CHECKING = "CHECKING"
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
    MISSING = "MISSING"


_TRANSIENT_STATUSES = ("QUEUED", "CHECKING")


# Results

@dataclass(frozen=True)
class CheckResult(ABC):
    """Outcome of one attempt of a check.

    ``reason`` carries the lookup error message or the explanation of a
    partial match, when there is one.
    """

    status: Enum
    reason: str | None = None

    def __post_init__(self):
        if self.status.value in _TRANSIENT_STATUSES:
            raise ValueError(f"{self.status.value} is not a check result")

    @abstractmethod
    def should_retry(self) -> bool:
        """Whether the check should run again after the retry interval."""


@dataclass(frozen=True)
class DnsRecordCheckResult(CheckResult):
    status: DnsRecordCheckStatus = DnsRecordCheckStatus.VALID

    @classmethod
    def valid(cls) -> "DnsRecordCheckResult":
        return cls(DnsRecordCheckStatus.VALID)

    @classmethod
    def partially_valid(cls, reason: str) -> "DnsRecordCheckResult":
        return cls(DnsRecordCheckStatus.PARTIALLY_VALID, reason)

    @classmethod
    def invalid(cls) -> "DnsRecordCheckResult":
        return cls(DnsRecordCheckStatus.INVALID)

    @classmethod
    def error(cls, message: str) -> "DnsRecordCheckResult":
        return cls(DnsRecordCheckStatus.ERROR, message)

    def should_retry(self) -> bool:
        # A record that exists but has not converged yet is worth waiting for
        return self.status is DnsRecordCheckStatus.PARTIALLY_VALID


@dataclass(frozen=True)
class PortReachabilityCheckResult(CheckResult):
    status: PortReachabilityCheckStatus = PortReachabilityCheckStatus.OPEN

    @classmethod
    def open(cls) -> "PortReachabilityCheckResult":
        return cls(PortReachabilityCheckStatus.OPEN)

    @classmethod
    def closed(cls) -> "PortReachabilityCheckResult":
        return cls(PortReachabilityCheckStatus.CLOSED)

    def should_retry(self) -> bool:
        return self.status is PortReachabilityCheckStatus.CLOSED


@dataclass(frozen=True)
class IpConnectivityCheckResult(CheckResult):
    status: IpConnectivityCheckStatus = IpConnectivityCheckStatus.SUCCESS

    @classmethod
    def success(cls) -> "IpConnectivityCheckResult":
        return cls(IpConnectivityCheckStatus.SUCCESS)

    @classmethod
    def failure(cls) -> "IpConnectivityCheckResult":
        return cls(IpConnectivityCheckStatus.FAILURE)

    @classmethod
    def missing(cls) -> "IpConnectivityCheckResult":
        return cls(IpConnectivityCheckStatus.MISSING)

    def should_retry(self) -> bool:
        return self.status is IpConnectivityCheckStatus.FAILURE


# Checks

class NetworkCheck(ABC):
    """Base class of the three check categories."""

    event_type: ClassVar[str]
    status_type: ClassVar[type[Enum]]

    @property
    @abstractmethod
    def check_id(self) -> str:
        """Stable identifier, used as the SSE event id."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Human readable description shown next to the status."""

    @abstractmethod
    async def run(self, checker: NetworkChecker) -> CheckResult:
        """Compute one result. Resolver failures are folded into the result."""

    @abstractmethod
    def timeout_result(self) -> CheckResult:
        """Result reported when an attempt exceeds its time budget."""

    @property
    def queued_status(self) -> Enum:
        return self.status_type["QUEUED"]

    @property
    def checking_status(self) -> Enum:
        return self.status_type["CHECKING"]


@dataclass(frozen=True)
class DnsRecordCheck(NetworkCheck):
    """Checks that the record a pod recommends is published."""

    event_type: ClassVar[str] = "dns-record-check-result"
    status_type: ClassVar[type[Enum]] = DnsRecordCheckStatus

    dns_entry: DnsEntry

    @property
    def check_id(self) -> str:
        return self.dns_entry.kind.value

    @property
    def description(self) -> str:
        return self.dns_entry.description()

    async def run(self, checker: NetworkChecker) -> DnsRecordCheckResult:
        expected = self.dns_entry.to_dns_record()
        kind = self.dns_entry.kind

        try:
            if kind is DnsEntryKind.IPV4:
                found = await checker.ipv4_lookup(expected.hostname)
            elif kind is DnsEntryKind.IPV6:
                found = await checker.ipv6_lookup(expected.hostname)
            else:
                # Entry hostnames already are the _service._tcp name, so there is no
                # bare-host SRV lookup to fall back to.
                standard_domain = kind.connection_type.standard_domain(expected.hostname)
                found = (await checker.srv_lookup(standard_domain)).records
        except DnsLookupError as e:
            return DnsRecordCheckResult.error(e.message)

        if any(expected.matches(record) for record in found):
            return DnsRecordCheckResult.valid()

        for record in found:
            if expected.equiv(record):
                return DnsRecordCheckResult.partially_valid(f"expected {expected}, found {record}")

        return DnsRecordCheckResult.invalid()

    def timeout_result(self) -> DnsRecordCheckResult:
        return DnsRecordCheckResult.error("timed out")


class PortConnectionType(str, Enum):
    """Services whose TCP port a pod must expose."""

    C2S = "c2s"
    S2S = "s2s"
    HTTPS = "https"

    @property
    def port(self) -> int:
        if self is PortConnectionType.HTTPS:
            return 443
        return self.xmpp_connection_type.standard_port

    @property
    def xmpp_connection_type(self) -> XmppConnectionType | None:
        if self is PortConnectionType.HTTPS:
            return None
        return XmppConnectionType(self.value)

    @property
    def id_suffix(self) -> str:
        return "HTTPS" if self is PortConnectionType.HTTPS else self.value

    @property
    def label(self) -> str:
        if self is PortConnectionType.HTTPS:
            return "HTTP server"
        return self.xmpp_connection_type.label


@dataclass(frozen=True)
class PortReachabilityCheck(NetworkCheck):
    """Checks that a TCP port of the pod accepts connections from the outside."""

    event_type: ClassVar[str] = "port-reachability-check-result"
    status_type: ClassVar[type[Enum]] = PortReachabilityCheckStatus

    connection_type: PortConnectionType
    hostname: str

    @property
    def check_id(self) -> str:
        return f"TCP-{self.connection_type.id_suffix}"

    @property
    def description(self) -> str:
        return f"{self.connection_type.label} port at TCP {self.connection_type.port}"

    def hostnames(self) -> list[str]:
        """Names to probe, in order: the SRV standard domain first for XMPP ports."""
        xmpp_type = self.connection_type.xmpp_connection_type
        if xmpp_type is None:
            return [self.hostname]
        return [xmpp_type.standard_domain(self.hostname), self.hostname]

    async def run(self, checker: NetworkChecker) -> PortReachabilityCheckResult:
        port = self.connection_type.port

        async def probe(host: str) -> bool:
            return await checker.is_port_open(host, port)

        if await flattened_run_any(self.hostnames(), probe, checker):
            return PortReachabilityCheckResult.open()
        return PortReachabilityCheckResult.closed()

    def timeout_result(self) -> PortReachabilityCheckResult:
        return PortReachabilityCheckResult.closed()


@dataclass(frozen=True)
class IpConnectivityCheck(NetworkCheck):
    """Checks that an XMPP service resolves to an address of a given IP version.

    A check that is not ``applicable`` (static pod without an address of that
    version) reports MISSING without probing anything.
    """

    event_type: ClassVar[str] = "ip-connectivity-check-result"
    status_type: ClassVar[type[Enum]] = IpConnectivityCheckStatus

    connection_type: XmppConnectionType
    ip_version: IpVersion
    hostname: str
    applicable: bool = True

    @property
    def check_id(self) -> str:
        return f"{self.ip_version.label}-{self.connection_type.value}"

    @property
    def description(self) -> str:
        return f"{self.connection_type.label} connectivity over {self.ip_version.label}"

    def hostnames(self) -> list[str]:
        return [self.connection_type.standard_domain(self.hostname), self.hostname]

    async def run(self, checker: NetworkChecker) -> IpConnectivityCheckResult:
        if not self.applicable:
            return IpConnectivityCheckResult.missing()

        async def probe(host: str) -> bool:
            return await checker.is_ip_available(host, self.ip_version)

        if await flattened_run_any(self.hostnames(), probe, checker):
            return IpConnectivityCheckResult.success()
        return IpConnectivityCheckResult.failure()

    def timeout_result(self) -> IpConnectivityCheckResult:
        return IpConnectivityCheckResult.failure()


@dataclass(frozen=True)
class CheckEvent:
    """Status update of one check, pushed by its unit of work."""

    check: NetworkCheck
    status: Enum
    result: CheckResult | None = None

    @classmethod
    def queued(cls, check: NetworkCheck) -> "CheckEvent":
        return cls(check, check.queued_status)

    @classmethod
    def checking(cls, check: NetworkCheck) -> "CheckEvent":
        return cls(check, check.checking_status)

    @classmethod
    def from_result(cls, check: NetworkCheck, result: CheckResult) -> "CheckEvent":
        return cls(check, result.status, result)

    @property
    def reason(self) -> str | None:
        return self.result.reason if self.result is not None else None
