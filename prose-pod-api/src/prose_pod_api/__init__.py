"""Prose Pod API - Administration API of a Prose pod."""

from importlib.metadata import PackageNotFoundError, version


def _get_version() -> str:
    """Get version from package metadata."""
    try:
        return version("prose-pod-api")
    except PackageNotFoundError:
        return "0.1.0"


__version__ = _get_version()
