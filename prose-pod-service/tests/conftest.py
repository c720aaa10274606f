"""Pytest configuration for prose-pod-service tests."""

import asyncio
import inspect

import pytest

from prose_pod_service.models.dns import AAAARecord, ARecord, SrvRecord
from prose_pod_service.models.xmpp import normalize_domain
from prose_pod_service.network_checks.checks import (
    NetworkCheck,
    PortReachabilityCheckResult,
    PortReachabilityCheckStatus,
)
from prose_pod_service.network_checks.network_checker import (
    DnsLookupError,
    NetworkChecker,
    SrvLookupResult,
)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test (isolated, mocked)"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    for item in items:
        # Auto-mark unit tests
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        # Auto-mark async tests as needing event loop
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)


class StubNetworkChecker(NetworkChecker):
    """In-memory resolver. Hostnames are compared normalized.

    Args:
        a: host -> IPv4 addresses
        aaaa: host -> IPv6 addresses
        srv: host -> SrvLookupResult
        open_ports: (host, port) pairs accepting connections
        delay: seconds every probe takes
    """

    def __init__(self, a=None, aaaa=None, srv=None, open_ports=None, delay=0.0):
        self.a = {normalize_domain(k): v for k, v in (a or {}).items()}
        self.aaaa = {normalize_domain(k): v for k, v in (aaaa or {}).items()}
        self.srv = {normalize_domain(k): v for k, v in (srv or {}).items()}
        self.open_ports = {(normalize_domain(h), p) for h, p in (open_ports or ())}
        self.delay = delay
        self.calls = []

    async def _pause(self):
        if self.delay:
            await asyncio.sleep(self.delay)

    async def ipv4_lookup(self, host):
        self.calls.append(("A", host))
        await self._pause()
        addresses = self.a.get(normalize_domain(host))
        if not addresses:
            raise DnsLookupError(f"no A record for {host}")
        return [ARecord(hostname=host, ttl=600, value=address) for address in addresses]

    async def ipv6_lookup(self, host):
        self.calls.append(("AAAA", host))
        await self._pause()
        addresses = self.aaaa.get(normalize_domain(host))
        if not addresses:
            raise DnsLookupError(f"no AAAA record for {host}")
        return [AAAARecord(hostname=host, ttl=600, value=address) for address in addresses]

    async def srv_lookup(self, host):
        self.calls.append(("SRV", host))
        await self._pause()
        result = self.srv.get(normalize_domain(host))
        if result is None:
            raise DnsLookupError(f"no SRV record for {host}")
        return result

    async def is_port_open(self, host, port):
        self.calls.append(("TCP", host, port))
        await self._pause()
        return (normalize_domain(host), port) in self.open_ports


@pytest.fixture
def make_checker():
    """Factory building StubNetworkChecker instances."""
    return StubNetworkChecker


@pytest.fixture
def srv_result():
    """Factory building SrvLookupResult instances from (target, port) pairs."""
    def build(hostname, targets, glue_ips=(), ttl=3600, priority=0, weight=5):
        records = [
            SrvRecord(hostname=hostname, ttl=ttl, priority=priority, weight=weight, port=port, target=target)
            for target, port in targets
        ]
        return SrvLookupResult(
            records=records,
            glue_ips=list(glue_ips),
            srv_targets=list(dict.fromkeys(target for target, _ in targets)),
        )

    return build


class ScriptedCheck(NetworkCheck):
    """Check returning a fixed sequence of port results (the last one repeats).

    A result that is an exception instance is raised instead of returned.
    """

    event_type = "port-reachability-check-result"
    status_type = PortReachabilityCheckStatus

    def __init__(self, *results, check_id="TCP-scripted", delay=0.0):
        self.results = list(results) or [PortReachabilityCheckResult.open()]
        self._check_id = check_id
        self.delay = delay
        self.runs = 0

    @property
    def check_id(self):
        return self._check_id

    @property
    def description(self):
        return f"Scripted check {self._check_id}"

    async def run(self, checker):
        self.runs += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        result = self.results[min(self.runs, len(self.results)) - 1]
        if isinstance(result, Exception):
            raise result
        return result

    def timeout_result(self):
        return PortReachabilityCheckResult.closed()


@pytest.fixture
def scripted_check():
    """Factory building ScriptedCheck instances."""
    return ScriptedCheck
