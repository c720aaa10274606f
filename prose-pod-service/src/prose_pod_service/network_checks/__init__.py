"""Network diagnostics engine: DNS records, TCP ports and IP connectivity."""

from .checks import (
    CheckEvent,
    CheckResult,
    DnsRecordCheck,
    DnsRecordCheckResult,
    DnsRecordCheckStatus,
    IpConnectivityCheck,
    IpConnectivityCheckResult,
    IpConnectivityCheckStatus,
    NetworkCheck,
    PortConnectionType,
    PortReachabilityCheck,
    PortReachabilityCheckResult,
    PortReachabilityCheckStatus,
)
from .live_network_checker import LiveNetworkChecker
from .network_checker import DnsLookupError, IpVersion, NetworkChecker, SrvLookupResult
from .pod_network_config import PodNetworkConfig
from .resolution import flattened_run, flattened_run_any
from .retry import RetryPolicy, run_attempt, run_with_retries
from .session import END, NetworkCheckSession, SessionEnd

__all__ = [
    "CheckEvent",
    "CheckResult",
    "DnsLookupError",
    "DnsRecordCheck",
    "DnsRecordCheckResult",
    "DnsRecordCheckStatus",
    "END",
    "IpConnectivityCheck",
    "IpConnectivityCheckResult",
    "IpConnectivityCheckStatus",
    "IpVersion",
    "LiveNetworkChecker",
    "NetworkCheck",
    "NetworkCheckSession",
    "NetworkChecker",
    "PodNetworkConfig",
    "PortConnectionType",
    "PortReachabilityCheck",
    "PortReachabilityCheckResult",
    "PortReachabilityCheckStatus",
    "RetryPolicy",
    "SessionEnd",
    "SrvLookupResult",
    "flattened_run",
    "flattened_run_any",
    "run_attempt",
    "run_with_retries",
]
