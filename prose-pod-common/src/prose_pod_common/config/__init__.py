"""Configuration package."""

from .settings import PodConfig, config

__all__ = ["PodConfig", "config"]
