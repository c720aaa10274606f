"""Parsing of the `interval` query parameter and of the Accept header."""

import math
from datetime import timedelta

from fastapi import Request
from prose_pod_common.config.settings import config
from pydantic import TypeAdapter, ValidationError

from ..errors import InvalidRetryInterval

_timedelta_adapter = TypeAdapter(timedelta)

EVENT_STREAM = "text/event-stream"


def parse_retry_interval(value: str | None) -> float:
    """Parse an ISO 8601 duration (e.g. ``PT5S``) or ``infinite`` into seconds.

    A missing value yields the configured default. The result must lie
    within the configured bounds (1 second to 1 minute by default).

    Raises:
        InvalidRetryInterval: If the value is unparsable or out of bounds
    """
    if value is None or value == "":
        seconds = config.network_checks_default_retry_interval
    elif value.strip().lower() == "infinite":
        seconds = math.inf
    else:
        try:
            seconds = _timedelta_adapter.validate_python(value.strip()).total_seconds()
        except ValidationError:
            raise InvalidRetryInterval(
                f"Invalid retry interval '{value}'. Expected an ISO 8601 duration such as `PT5S`."
            )

    if not (config.network_checks_min_retry_interval <= seconds <= config.network_checks_max_retry_interval):
        raise InvalidRetryInterval()
    return seconds


def wants_event_stream(request: Request) -> bool:
    """Whether the client asked for Server-Sent Events."""
    return EVENT_STREAM in request.headers.get("accept", "").lower()
