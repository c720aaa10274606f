"""Request and response models for the Prose Pod API."""

from typing import Any

from pydantic import BaseModel, Field

from prose_pod_service.models.dns import DnsEntry, DnsSetupStep
from prose_pod_service.models.pod_address import DynamicPodAddress, PodAddress
from prose_pod_service.network_checks.checks import CheckEvent


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    message: str
    details: dict[str, Any] | None = None
    request_id: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: str
    version: str
    services: dict[str, str]


class CheckResultData(BaseModel):
    description: str
    status: str
    reason: str | None = None


class NetworkCheckResult(BaseModel):
    """One check result, shaped like the SSE event carrying it."""

    id: str
    event: str
    data: CheckResultData

    @classmethod
    def from_event(cls, event: CheckEvent) -> "NetworkCheckResult":
        return cls(
            id=event.check.check_id,
            event=event.check.event_type,
            data=CheckResultData(
                description=event.check.description,
                status=event.status.value,
                reason=event.reason,
            ),
        )


class DnsSetupStepResponse(BaseModel):
    purpose: str
    records: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Records tagged by `type`, each with its zone file form in `string_repr`",
    )

    @classmethod
    def from_step(cls, step: DnsSetupStep[DnsEntry]) -> "DnsSetupStepResponse":
        records = []
        for entry in step.records:
            record = entry.to_dns_record()
            records.append({**record.model_dump(mode="json"), "string_repr": str(record)})
        return cls(purpose=step.purpose, records=records)


class DnsRecordsResponse(BaseModel):
    steps: list[DnsSetupStepResponse]


class PodAddressRequest(BaseModel):
    """Pod address: a hostname, or an IPv4 and/or IPv6 address."""

    ipv4: str | None = None
    ipv6: str | None = None
    hostname: str | None = None


class PodAddressResponse(BaseModel):
    type: str
    ipv4: str | None = None
    ipv6: str | None = None
    hostname: str | None = None

    @classmethod
    def from_address(cls, address: PodAddress) -> "PodAddressResponse":
        if isinstance(address, DynamicPodAddress):
            return cls(type="dynamic", hostname=address.hostname)
        return cls(
            type="static",
            ipv4=str(address.ipv4) if address.ipv4 is not None else None,
            ipv6=str(address.ipv6) if address.ipv6 is not None else None,
        )
