"""Test configuration for prose-pod-api tests."""

import inspect
import time
from ipaddress import IPv4Address

import jwt
import pytest
from fastapi.testclient import TestClient
from prose_pod_common.config.settings import config
from prose_pod_service.models.dns import ARecord, SrvRecord
from prose_pod_service.models.pod_address import StaticPodAddress
from prose_pod_service.models.xmpp import normalize_domain
from prose_pod_service.network_checks import DnsLookupError, NetworkChecker, SrvLookupResult
from prose_pod_service.repositories import MemoryPodConfigRepository

from prose_pod_api.dependencies import get_network_checker, get_pod_config_repository
from prose_pod_api.main import app


def pytest_collection_modifyitems(config, items):
    """Auto-mark async tests as needing event loop."""
    for item in items:
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)


def _srv(hostname, port, target="xmpp.example.org.", glue_ips=("192.0.2.1",)):
    return SrvLookupResult(
        records=[SrvRecord(hostname=hostname, ttl=3600, priority=0, weight=5, port=port, target=target)],
        glue_ips=list(glue_ips),
        srv_targets=[target],
    )


class FakeNetworkChecker(NetworkChecker):
    """Network of a correctly configured static pod at 192.0.2.1 serving example.org."""

    def __init__(self, a=None, srv=None, open_ports=None):
        self.a = a if a is not None else {"xmpp.example.org": ["192.0.2.1"]}
        self.srv = srv if srv is not None else {
            "_xmpp-client._tcp.example.org": _srv("_xmpp-client._tcp.example.org.", 5222),
            "_xmpp-server._tcp.example.org": _srv("_xmpp-server._tcp.example.org.", 5269),
        }
        self.open_ports = open_ports if open_ports is not None else {
            ("192.0.2.1", 5222),
            ("192.0.2.1", 5269),
            ("example.org", 443),
        }

    async def ipv4_lookup(self, host):
        addresses = self.a.get(normalize_domain(host))
        if not addresses:
            raise DnsLookupError(f"no A record for {host}")
        return [ARecord(hostname=host, ttl=600, value=address) for address in addresses]

    async def ipv6_lookup(self, host):
        raise DnsLookupError(f"no AAAA record for {host}")

    async def srv_lookup(self, host):
        result = self.srv.get(normalize_domain(host))
        if result is None:
            raise DnsLookupError(f"no SRV record for {host}")
        return result

    async def is_port_open(self, host, port):
        return (normalize_domain(host), port) in self.open_ports


def make_token(role="admin", sub="admin@example.org", expires_in=3600):
    now = int(time.time())
    payload = {"sub": sub, "role": role, "iat": now, "exp": now + expires_in}
    return jwt.encode(payload, config.jwt_secret_key, algorithm=config.jwt_algorithm)


@pytest.fixture
def repository():
    return MemoryPodConfigRepository(
        pod_address=StaticPodAddress(ipv4=IPv4Address("192.0.2.1")),
        server_domain="example.org",
        federation_enabled=True,
    )


@pytest.fixture
def checker():
    return FakeNetworkChecker()


@pytest.fixture
def client(repository, checker):
    app.dependency_overrides[get_pod_config_repository] = lambda: repository
    app.dependency_overrides[get_network_checker] = lambda: checker
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def member_headers():
    return {"Authorization": f"Bearer {make_token(role='member', sub='member@example.org')}"}


@pytest.fixture
def token_factory():
    return make_token
