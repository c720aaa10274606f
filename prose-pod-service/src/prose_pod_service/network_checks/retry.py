"""Retry engine: run a check until its result no longer asks for a retry."""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from prose_pod_common.config.settings import config
from prose_pod_common.logging import get_logger

from .checks import CheckEvent, CheckResult, NetworkCheck
from .network_checker import NetworkChecker

logger = get_logger(__name__)

Emit = Callable[[CheckEvent], Awaitable[None]]


@dataclass(frozen=True)
class RetryPolicy:
    """How a check is retried. All durations are in seconds.

    Without ``max_attempts`` nor ``deadline`` a check is retried until it
    reaches a terminal result or its task is cancelled.
    """

    interval: float = 5.0
    max_attempts: int | None = None
    deadline: float | None = None
    attempt_timeout: float | None = None

    def __post_init__(self):
        if self.interval < 0:
            raise ValueError("retry interval must not be negative")
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    @classmethod
    def from_config(cls, interval: float | None = None) -> "RetryPolicy":
        return cls(
            interval=interval if interval is not None else config.network_checks_default_retry_interval,
            max_attempts=config.network_checks_max_attempts,
            attempt_timeout=config.network_checks_attempt_timeout,
        )


async def run_attempt(check: NetworkCheck, checker: NetworkChecker, timeout: float | None = None) -> CheckResult:
    """Run a check once, reporting its timeout result if it takes longer than ``timeout``."""
    if timeout is None:
        return await check.run(checker)
    try:
        return await asyncio.wait_for(check.run(checker), timeout=timeout)
    except asyncio.TimeoutError:
        logger.debug(f"Check {check.check_id} timed out after {timeout}s")
        return check.timeout_result()


async def run_with_retries(
    check: NetworkCheck,
    checker: NetworkChecker,
    policy: RetryPolicy,
    emit: Emit,
) -> CheckResult:
    """Run ``check`` repeatedly, emitting CHECKING then the result for each attempt.

    Returns the last result: a terminal one, or the last retryable one when
    ``max_attempts`` or ``deadline`` stopped the loop.
    """
    loop = asyncio.get_running_loop()
    started_at = loop.time()
    attempts = 0

    while True:
        await emit(CheckEvent.checking(check))
        result = await run_attempt(check, checker, policy.attempt_timeout)
        attempts += 1
        await emit(CheckEvent.from_result(check, result))

        if not result.should_retry():
            logger.debug(f"Check {check.check_id} settled on {result.status.value} after {attempts} attempt(s)")
            return result

        if policy.max_attempts is not None and attempts >= policy.max_attempts:
            logger.debug(f"Check {check.check_id} gave up after {attempts} attempt(s)")
            return result

        if policy.deadline is not None and loop.time() - started_at + policy.interval > policy.deadline:
            logger.debug(f"Check {check.check_id} reached its {policy.deadline}s deadline")
            return result

        logger.trace(f"Check {check.check_id} is {result.status.value}, retrying in {policy.interval}s")
        await asyncio.sleep(policy.interval)
