"""Domain models shared by the Prose Pod services."""

from .dns import (
    AAAARecord,
    ARecord,
    DnsEntry,
    DnsEntryKind,
    DnsRecord,
    DnsSetupStep,
    SrvRecord,
)
from .pod_address import (
    DynamicPodAddress,
    InvalidPodAddress,
    PodAddress,
    StaticPodAddress,
    pod_address_from_parts,
)
from .xmpp import XmppConnectionType, normalize_domain

__all__ = [
    "ARecord",
    "AAAARecord",
    "SrvRecord",
    "DnsRecord",
    "DnsEntry",
    "DnsEntryKind",
    "DnsSetupStep",
    "PodAddress",
    "StaticPodAddress",
    "DynamicPodAddress",
    "InvalidPodAddress",
    "pod_address_from_parts",
    "XmppConnectionType",
    "normalize_domain",
]
