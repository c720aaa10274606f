"""API utilities."""

from .duration import parse_retry_interval, wants_event_stream
from .sse import create_sse_event

__all__ = ["create_sse_event", "parse_retry_interval", "wants_event_stream"]
