"""Where the pod can be reached from the Internet."""

from dataclasses import dataclass
from ipaddress import IPv4Address, IPv6Address, ip_address


class InvalidPodAddress(ValueError):
    """Raised when a pod address has neither an IP address nor a hostname."""


@dataclass(frozen=True)
class StaticPodAddress:
    """Pod reachable through fixed IP addresses (at least one of them)."""

    ipv4: IPv4Address | None = None
    ipv6: IPv6Address | None = None

    def __post_init__(self):
        if self.ipv4 is None and self.ipv6 is None:
            raise InvalidPodAddress("A static pod address needs an IPv4 or an IPv6 address")


@dataclass(frozen=True)
class DynamicPodAddress:
    """Pod reachable through a hostname (e.g. a dynamic DNS name)."""

    hostname: str

    def __post_init__(self):
        if not self.hostname or not self.hostname.strip(". "):
            raise InvalidPodAddress("A dynamic pod address needs a hostname")


PodAddress = StaticPodAddress | DynamicPodAddress


def pod_address_from_parts(
    ipv4: str | IPv4Address | None = None,
    ipv6: str | IPv6Address | None = None,
    hostname: str | None = None,
) -> PodAddress:
    """Build a pod address from optional stored columns.

    A hostname takes precedence, as it is what a dynamic pod advertises.
    """
    if hostname:
        return DynamicPodAddress(hostname=hostname.rstrip("."))

    def parse(value, expected_version: int):
        if value is None or value == "":
            return None
        try:
            address = ip_address(str(value))
        except ValueError as e:
            raise InvalidPodAddress(str(e)) from e
        if address.version != expected_version:
            raise InvalidPodAddress(f"{value} is not an IPv{expected_version} address")
        return address

    return StaticPodAddress(ipv4=parse(ipv4, 4), ipv6=parse(ipv6, 6))
