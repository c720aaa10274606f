"""Flattened resolution: try what a host really points to before the host itself.

A hostname advertised through SRV records can be served by other machines.
Probing only the bare hostname would then report a false negative, so the
probe is first applied to the addresses and targets the SRV answer carries.
"""

from collections.abc import Awaitable, Callable, Iterable

from prose_pod_common.logging import get_logger

from .network_checker import DnsLookupError, NetworkChecker

logger = get_logger(__name__)

Probe = Callable[[str], Awaitable[bool]]


async def flattened_run(host: str, probe: Probe, checker: NetworkChecker) -> bool:
    """Run ``probe`` against ``host``, following its SRV records first.

    Order: glue IPs, then SRV targets (probed directly, without a second SRV
    lookup), then ``host`` itself. Stops at the first probe returning True.
    Without SRV records ``host`` is probed exactly once.
    """
    try:
        srv = await checker.srv_lookup(host)
    except DnsLookupError as e:
        logger.debug(f"No SRV record for {host} ({e.message}), probing it directly")
        return await probe(host)

    if not srv.records:
        logger.debug(f"No SRV record for {host}, probing it directly")
        return await probe(host)

    logger.debug(f"{host} has {len(srv.records)} SRV record(s)")

    for ip in srv.glue_ips:
        logger.debug(f"Trying glue address {ip} of {host}")
        if await probe(ip):
            return True

    for target in srv.srv_targets:
        logger.debug(f"Trying SRV target {target} of {host}")
        if await probe(target):
            return True

    logger.debug(f"Falling back to {host}")
    return await probe(host)


async def flattened_run_any(hostnames: Iterable[str], probe: Probe, checker: NetworkChecker) -> bool:
    """Apply :func:`flattened_run` to each hostname in order, stopping at the first success."""
    for hostname in hostnames:
        if await flattened_run(hostname, probe, checker):
            return True
    return False
