"""Prose Pod Common - Centralized configuration and utilities for the Prose Pod services."""

from .config.settings import PodConfig, config
from .logging.setup import get_logger, setup_logging
from .utils.env import load_environment

__version__ = "0.1.0"
__all__ = ["PodConfig", "config", "setup_logging", "get_logger", "load_environment"]
