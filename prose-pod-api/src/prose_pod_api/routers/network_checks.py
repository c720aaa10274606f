"""Network checks router.

Every route answers with a JSON array of results (each check run once) or,
when the client accepts ``text/event-stream``, with a stream of Server-Sent
Events that lasts until every check settled.
"""

from collections.abc import AsyncIterator

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import StreamingResponse
from prose_pod_common.logging import with_request_id
from prose_pod_service.network_checks import (
    END,
    NetworkCheck,
    NetworkChecker,
    NetworkCheckSession,
    PodNetworkConfig,
    RetryPolicy,
)

from ..dependencies import get_network_checker, get_pod_network_config
from ..middleware.auth import require_admin
from ..models import NetworkCheckResult
from ..utils.duration import EVENT_STREAM, parse_retry_interval, wants_event_stream
from ..utils.sse import create_sse_event

router = APIRouter(prefix="/v1/network", tags=["Network checks"], dependencies=[Depends(require_admin)])

INTERVAL_QUERY = Query(
    None,
    description="Retry interval of the streamed checks, as an ISO 8601 duration (e.g. `PT5S`)",
)


async def stream_check_events(session: NetworkCheckSession) -> AsyncIterator[str]:
    """Frame session events as Server-Sent Events."""
    async for item in session.events():
        if item is END:
            yield create_sse_event(event="end", id="end", comment="End of stream")
            continue
        result = NetworkCheckResult.from_event(item)
        yield create_sse_event(
            data=result.data.model_dump_json(exclude_none=True),
            event=result.event,
            id=result.id,
        )


async def run_checks(
    request: Request,
    checks: list[NetworkCheck],
    checker: NetworkChecker,
    interval: str | None,
):
    retry_interval = parse_retry_interval(interval)
    session = NetworkCheckSession(checks, checker, RetryPolicy.from_config(retry_interval))
    log = with_request_id(getattr(request.state, "request_id", None) or "-")

    if wants_event_stream(request):
        log.info(f"Streaming {len(checks)} network check(s) every {retry_interval}s")
        return StreamingResponse(
            stream_check_events(session),
            media_type=EVENT_STREAM,
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )

    log.info(f"Running {len(checks)} network check(s) once")
    events = await session.run_once()
    return [NetworkCheckResult.from_event(event).model_dump(exclude_none=True) for event in events]


@router.get("/checks", response_model=list[NetworkCheckResult], response_model_exclude_none=True)
async def check_network_configuration(
    request: Request,
    interval: str | None = INTERVAL_QUERY,
    network_config: PodNetworkConfig = Depends(get_pod_network_config),
    checker: NetworkChecker = Depends(get_network_checker),
):
    """Run every DNS record, port reachability and IP connectivity check."""
    return await run_checks(request, network_config.all_checks(), checker, interval)


@router.get("/checks/dns", response_model=list[NetworkCheckResult], response_model_exclude_none=True)
async def check_dns_records(
    request: Request,
    interval: str | None = INTERVAL_QUERY,
    network_config: PodNetworkConfig = Depends(get_pod_network_config),
    checker: NetworkChecker = Depends(get_network_checker),
):
    """Check that the recommended DNS records are published."""
    return await run_checks(request, network_config.dns_record_checks(), checker, interval)


@router.get("/checks/ports", response_model=list[NetworkCheckResult], response_model_exclude_none=True)
async def check_ports_reachability(
    request: Request,
    interval: str | None = INTERVAL_QUERY,
    network_config: PodNetworkConfig = Depends(get_pod_network_config),
    checker: NetworkChecker = Depends(get_network_checker),
):
    """Check that the c2s, s2s and HTTPS ports accept connections."""
    return await run_checks(request, network_config.port_reachability_checks(), checker, interval)


@router.get("/checks/ip", response_model=list[NetworkCheckResult], response_model_exclude_none=True)
async def check_ip_connectivity(
    request: Request,
    interval: str | None = INTERVAL_QUERY,
    network_config: PodNetworkConfig = Depends(get_pod_network_config),
    checker: NetworkChecker = Depends(get_network_checker),
):
    """Check that XMPP services resolve over IPv4 and IPv6."""
    return await run_checks(request, network_config.ip_connectivity_checks(), checker, interval)
