"""Repository implementations for prose-pod-service."""

from .pod_config_repository import (
    MemoryPodConfigRepository,
    PodConfigRepository,
    get_repository,
    set_repository,
)

__all__ = [
    "PodConfigRepository",
    "MemoryPodConfigRepository",
    "get_repository",
    "set_repository",
]
