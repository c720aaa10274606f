"""XMPP connection types and the DNS names they are advertised under."""

from enum import Enum


def normalize_domain(domain: str) -> str:
    """Lowercase a DNS name and drop its trailing dot, for comparisons."""
    return domain.strip().rstrip(".").lower()


class XmppConnectionType(str, Enum):
    """Kind of XMPP connection a DNS record or a port serves."""

    C2S = "c2s"
    S2S = "s2s"

    @property
    def standard_port(self) -> int:
        return 5222 if self is XmppConnectionType.C2S else 5269

    @property
    def srv_prefix(self) -> str:
        return "_xmpp-client._tcp" if self is XmppConnectionType.C2S else "_xmpp-server._tcp"

    @property
    def label(self) -> str:
        return "Client-to-server" if self is XmppConnectionType.C2S else "Server-to-server"

    def standard_domain(self, domain: str) -> str:
        """SRV name under which this connection type is advertised for ``domain``.

        A name that already is a ``_service._tcp`` name is returned unchanged.
        """
        if "._tcp." in domain:
            return domain
        return f"{self.srv_prefix}.{normalize_domain(domain)}"
