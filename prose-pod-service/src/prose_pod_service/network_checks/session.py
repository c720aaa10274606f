"""Run a set of network checks and multiplex their events into one stream."""

import asyncio
from collections.abc import AsyncIterator, Iterable
from contextlib import suppress

from prose_pod_common.config.settings import config
from prose_pod_common.logging import get_logger

from .checks import CheckEvent, NetworkCheck
from .network_checker import NetworkChecker
from .retry import RetryPolicy, run_attempt, run_with_retries

logger = get_logger(__name__)


class SessionEnd:
    """Marker yielded once, after every other event of a session."""

    def __repr__(self) -> str:
        return "END"


END = SessionEnd()

# Internal outcomes of waiting for the next queue item
_PRODUCERS_GONE = object()
_TIMED_OUT = object()
_NOTHING_YET = object()


class NetworkCheckSession:
    """Checks of one HTTP request, run once (batch) or until they settle (stream).

    In streaming mode every check runs in its own task and writes its events
    to a bounded queue shared with the other checks, followed by a completion
    marker (``None``) when it ends for any reason. The consumer counts the
    markers and yields ``END`` once all checks are accounted for.
    """

    def __init__(
        self,
        checks: Iterable[NetworkCheck],
        checker: NetworkChecker,
        policy: RetryPolicy | None = None,
        queue_capacity: int | None = None,
        timeout: float | None = None,
    ):
        """Initialize the session.

        Args:
            checks: Checks to run, in submission order
            checker: Resolver shared by every check
            policy: Retry policy. Built from configuration if None
            queue_capacity: Size of the event queue. Uses
                config.network_checks_event_queue_capacity if None
            timeout: Deadline of the whole stream in seconds. Uses
                config.network_checks_stream_timeout if None (no deadline
                when unset there too)
        """
        self.checks = list(checks)
        self.checker = checker
        self.policy = policy or RetryPolicy.from_config()
        self.queue_capacity = queue_capacity or config.network_checks_event_queue_capacity
        self.timeout = timeout if timeout is not None else config.network_checks_stream_timeout
        self.completed_units = 0

    async def run_once(self) -> list[CheckEvent]:
        """Run every check once, concurrently, without retrying.

        Returns one result event per check, in submission order.
        """
        results = await asyncio.gather(
            *(run_attempt(check, self.checker, self.policy.attempt_timeout) for check in self.checks)
        )
        return [CheckEvent.from_result(check, result) for check, result in zip(self.checks, results)]

    async def _run_unit(self, check: NetworkCheck, queue: asyncio.Queue) -> None:
        try:
            await queue.put(CheckEvent.queued(check))
            await run_with_retries(check, self.checker, self.policy, queue.put)
        except asyncio.CancelledError:
            # Nobody reads the queue anymore, a full queue just drops the marker
            with suppress(asyncio.QueueFull):
                queue.put_nowait(None)
            raise
        except Exception:
            logger.exception(f"Check {check.check_id} failed unexpectedly")
        logger.debug(f"Check {check.check_id} finished")
        await queue.put(None)

    async def _next_item(self, queue: asyncio.Queue, tasks: list[asyncio.Task], deadline: float | None):
        if not queue.empty():
            return queue.get_nowait()

        alive = [task for task in tasks if not task.done()]
        if not alive:
            return _PRODUCERS_GONE

        loop = asyncio.get_running_loop()
        timeout = None if deadline is None else max(0.0, deadline - loop.time())

        getter = asyncio.ensure_future(queue.get())
        try:
            done, _ = await asyncio.wait([getter, *alive], timeout=timeout, return_when=asyncio.FIRST_COMPLETED)
        finally:
            if not getter.done():
                getter.cancel()

        if getter.done() and not getter.cancelled():
            return getter.result()
        if not done:
            return _TIMED_OUT
        return _NOTHING_YET

    async def events(self) -> AsyncIterator[CheckEvent | SessionEnd]:
        """Yield check events as they happen, then ``END``.

        Closing the iterator (or cancelling the task consuming it) cancels
        every check and waits for them, so no probe outlives the session.
        """
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.queue_capacity)
        tasks = [
            asyncio.create_task(self._run_unit(check, queue), name=f"network-check-{check.check_id}")
            for check in self.checks
        ]
        remaining = len(tasks)

        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.timeout if self.timeout is not None else None

        logger.info(f"Network check session started with {remaining} check(s)")
        try:
            while remaining > 0:
                item = await self._next_item(queue, tasks, deadline)
                if item is _NOTHING_YET:
                    continue
                if item is _PRODUCERS_GONE:
                    logger.warning(f"All checks stopped with {remaining} completion(s) missing")
                    break
                if item is _TIMED_OUT:
                    logger.info(f"Network check session timed out after {self.timeout}s")
                    break
                if item is None:
                    remaining -= 1
                    self.completed_units += 1
                    continue
                yield item
            yield END
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.info(f"Network check session ended ({self.completed_units}/{len(tasks)} check(s) completed)")
