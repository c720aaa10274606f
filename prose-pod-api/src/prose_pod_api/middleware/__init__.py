"""Middleware package."""

from .auth import TokenPayload, require_admin, verify_token
from .cors import setup_cors

__all__ = [
    "TokenPayload",
    "require_admin",
    "setup_cors",
    "verify_token",
]
