"""API models package."""

from .responses import (
    CheckResultData,
    DnsRecordsResponse,
    DnsSetupStepResponse,
    ErrorResponse,
    HealthResponse,
    NetworkCheckResult,
    PodAddressRequest,
    PodAddressResponse,
)

__all__ = [
    "CheckResultData",
    "DnsRecordsResponse",
    "DnsSetupStepResponse",
    "ErrorResponse",
    "HealthResponse",
    "NetworkCheckResult",
    "PodAddressRequest",
    "PodAddressResponse",
]
