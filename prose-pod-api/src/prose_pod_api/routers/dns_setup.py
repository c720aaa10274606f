"""DNS setup instructions router."""

from fastapi import APIRouter, Depends
from prose_pod_service.network_checks import PodNetworkConfig

from ..dependencies import get_pod_network_config
from ..middleware.auth import require_admin
from ..models import DnsRecordsResponse, DnsSetupStepResponse

router = APIRouter(prefix="/v1/network", tags=["DNS setup"], dependencies=[Depends(require_admin)])


@router.get("/dns/records", response_model=DnsRecordsResponse)
async def get_dns_records(network_config: PodNetworkConfig = Depends(get_pod_network_config)):
    """DNS records to publish, grouped in steps."""
    return DnsRecordsResponse(
        steps=[DnsSetupStepResponse.from_step(step) for step in network_config.dns_setup_steps()]
    )
