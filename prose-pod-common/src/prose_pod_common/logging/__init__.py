"""Logging package."""

from .setup import (
    get_logger,
    setup_logging,
    setup_service_logging,
    with_request_id,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "setup_service_logging",
    "with_request_id",
]
