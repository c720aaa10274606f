"""Pod configuration router."""

from fastapi import APIRouter, Depends, Response, status
from prose_pod_common.logging import get_logger
from prose_pod_service.models.pod_address import pod_address_from_parts
from prose_pod_service.repositories import PodConfigRepository

from ..dependencies import get_pod_config_repository
from ..middleware.auth import require_admin
from ..models import PodAddressRequest, PodAddressResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/v1/pod/config", tags=["Pod configuration"], dependencies=[Depends(require_admin)])


@router.get("/address", response_model=PodAddressResponse | None)
async def get_pod_address(repository: PodConfigRepository = Depends(get_pod_config_repository)):
    """Current pod address, null if it was never set."""
    address = await repository.get_pod_address()
    if address is None:
        return None
    return PodAddressResponse.from_address(address)


@router.put("/address", response_model=PodAddressResponse)
async def set_pod_address(
    request: PodAddressRequest,
    response: Response,
    repository: PodConfigRepository = Depends(get_pod_config_repository),
):
    """Set the pod address.

    A hostname makes the pod dynamic; otherwise at least one IP address is
    required. Answers 201 the first time, 200 when replacing an address.
    """
    # InvalidPodAddress is a ValueError, rendered as a 400
    address = pod_address_from_parts(ipv4=request.ipv4, ipv6=request.ipv6, hostname=request.hostname)
    created = await repository.set_pod_address(address)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return PodAddressResponse.from_address(address)
