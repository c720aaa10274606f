"""Server-Sent Events framing."""

import json


def create_sse_event(
    data: dict | str | None = None,
    event: str | None = None,
    id: str | None = None,
    comment: str | None = None,
) -> str:
    """Create one Server-Sent Event.

    Args:
        data: Dictionary to convert to JSON or string data
        event: Event type
        id: Event id
        comment: Comment line (ignored by clients)

    Returns:
        SSE formatted event, terminated by a blank line
    """
    lines = []
    if event is not None:
        lines.append(f"event: {event}")
    if id is not None:
        lines.append(f"id: {id}")
    if data is not None:
        payload = json.dumps(data) if isinstance(data, dict) else data
        lines.extend(f"data: {line}" for line in payload.splitlines() or [""])
    if comment is not None:
        lines.append(f": {comment}")
    return "\n".join(lines) + "\n\n"
