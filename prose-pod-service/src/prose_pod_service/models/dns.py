"""DNS records the pod expects, and how found records compare to them."""

from dataclasses import dataclass, field
from enum import Enum
from ipaddress import IPv4Address, IPv6Address
from typing import Annotated, Generic, Literal, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

from .xmpp import XmppConnectionType, normalize_domain

IP_RECORD_TTL = 600
SRV_RECORD_TTL = 3600
SRV_RECORD_PRIORITY = 0
SRV_RECORD_WEIGHT = 5


class _BaseRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    hostname: str
    ttl: int

    def _key(self) -> tuple:
        raise NotImplementedError

    def _partial_key(self) -> tuple:
        raise NotImplementedError

    def matches(self, other: "_BaseRecord") -> bool:
        """Whether both records are the same, not taking the TTL into account."""
        return self._key() == other._key()

    def equiv(self, other: "_BaseRecord") -> bool:
        """Whether a record is close enough to another one.

        A/AAAA records only need the same hostname, SRV records also need the
        same port (weight, priority or target may differ).
        """
        return self._partial_key() == other._partial_key()


class ARecord(_BaseRecord):
    type: Literal["A"] = "A"
    value: IPv4Address

    def _key(self) -> tuple:
        return ("A", normalize_domain(self.hostname), self.value)

    def _partial_key(self) -> tuple:
        return ("A", normalize_domain(self.hostname))

    def __str__(self) -> str:
        return f"{self.hostname} {self.ttl} IN A {self.value}"


class AAAARecord(_BaseRecord):
    type: Literal["AAAA"] = "AAAA"
    value: IPv6Address

    def _key(self) -> tuple:
        return ("AAAA", normalize_domain(self.hostname), self.value)

    def _partial_key(self) -> tuple:
        return ("AAAA", normalize_domain(self.hostname))

    def __str__(self) -> str:
        return f"{self.hostname} {self.ttl} IN AAAA {self.value}"


class SrvRecord(_BaseRecord):
    type: Literal["SRV"] = "SRV"
    priority: int
    weight: int
    port: int
    target: str

    def _key(self) -> tuple:
        return (
            "SRV",
            normalize_domain(self.hostname),
            self.priority,
            self.weight,
            self.port,
            normalize_domain(self.target),
        )

    def _partial_key(self) -> tuple:
        return ("SRV", normalize_domain(self.hostname), self.port)

    def __str__(self) -> str:
        return (
            f"{self.hostname} {self.ttl} IN SRV "
            f"{self.priority} {self.weight} {self.port} {self.target}"
        )


DnsRecord = Annotated[Union[ARecord, AAAARecord, SrvRecord], Field(discriminator="type")]


class DnsEntryKind(str, Enum):
    """Kinds of records a pod needs. Values double as check identifiers."""

    IPV4 = "IPv4"
    IPV6 = "IPv6"
    SRV_C2S = "SRV-c2s"
    SRV_S2S = "SRV-s2s"

    @property
    def connection_type(self) -> XmppConnectionType | None:
        if self is DnsEntryKind.SRV_C2S:
            return XmppConnectionType.C2S
        if self is DnsEntryKind.SRV_S2S:
            return XmppConnectionType.S2S
        return None


@dataclass(frozen=True)
class DnsEntry:
    """A DNS record the pod recommends.

    ``hostname`` is the fully qualified name the record lives at (the
    standard domain for ``SRV_*`` entries). ``value`` is the IP address for
    ``IPV4``/``IPV6`` entries and the SRV target for ``SRV_*`` entries.
    """

    kind: DnsEntryKind
    hostname: str
    value: str

    def description(self) -> str:
        """e.g. "IPv4 record for xmpp.example.org" or "SRV record for client-to-server connections"."""
        if self.kind is DnsEntryKind.IPV4:
            return f"IPv4 record for {self.hostname.rstrip('.')}"
        if self.kind is DnsEntryKind.IPV6:
            return f"IPv6 record for {self.hostname.rstrip('.')}"
        return f"SRV record for {self.kind.connection_type.label.lower()} connections"

    def to_dns_record(self) -> ARecord | AAAARecord | SrvRecord:
        if self.kind is DnsEntryKind.IPV4:
            return ARecord(hostname=self.hostname, ttl=IP_RECORD_TTL, value=self.value)
        if self.kind is DnsEntryKind.IPV6:
            return AAAARecord(hostname=self.hostname, ttl=IP_RECORD_TTL, value=self.value)
        return SrvRecord(
            hostname=self.hostname,
            ttl=SRV_RECORD_TTL,
            priority=SRV_RECORD_PRIORITY,
            weight=SRV_RECORD_WEIGHT,
            port=self.kind.connection_type.standard_port,
            target=self.value,
        )


R = TypeVar("R")


@dataclass(frozen=True)
class DnsSetupStep(Generic[R]):
    """One step of the DNS setup instructions.

    ``purpose`` always starts with a lowercase letter
    (e.g. "specify your server IP address").
    """

    purpose: str
    records: list[R] = field(default_factory=list)
