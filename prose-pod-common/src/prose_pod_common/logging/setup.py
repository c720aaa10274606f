"""Centralized logging setup using Loguru."""

import sys
from pathlib import Path
from typing import Any

from loguru import logger

from ..config.settings import config


def setup_logging(
    level: str | None = None,
    log_file: Path | None = None,
    rotation: str = "100 MB",
    retention: str = "7 days",
    compression: str = "gz",
    diagnose: bool | None = None,
    colorize: bool | None = None,
    format_template: str | None = None
) -> None:
    """Setup centralized logging configuration for the Prose Pod services.

    Args:
        level: Log level (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file. If None, logs to stderr only
        rotation: Log rotation setting
        retention: Log retention period
        compression: Compression format for rotated logs
        diagnose: Enable diagnostic info in logs
        colorize: Enable colored output
        format_template: Custom format template
    """
    logger.remove()

    level = level or config.log_level
    diagnose = diagnose if diagnose is not None else config.is_development
    colorize = colorize if colorize is not None else config.is_development

    dev_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    )

    prod_format = (
        "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}"
    )

    format_template = format_template or (dev_format if config.is_development else prod_format)

    logger.add(
        sys.stderr,
        level=level,
        format=format_template,
        colorize=colorize,
        diagnose=diagnose,
        enqueue=True,
        catch=True
    )

    if log_file:
        logger.add(
            log_file,
            level=level,
            format=prod_format,  # Always use plain format for files
            rotation=rotation,
            retention=retention,
            compression=compression,
            diagnose=diagnose,
            enqueue=True,
            catch=True
        )

    logger.configure(extra={
        "service": config.service_name,
        "version": config.service_version,
        "environment": config.environment,
    })

    logger.info(
        "Logging initialized",
        level=level,
        service=config.service_name,
        environment=config.environment,
        file_logging=log_file is not None
    )


def get_logger(name: str) -> Any:
    """Get a logger instance with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logger.bind(name=name)


def setup_service_logging(service_name: str, log_dir: Path | None = None) -> None:
    """Setup logging for a specific Prose Pod service.

    Args:
        service_name: Name of the service (e.g., 'prose-pod-api')
        log_dir: Directory to store log files. If None, logs to stderr only
    """
    log_file = None
    if log_dir:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"{service_name}.log"

    setup_logging(log_file=log_file)


def with_request_id(request_id: str, **context) -> Any:
    """Bind a request identifier (and any extra context) to the logger.

    Every line logged through the returned logger carries ``request_id``,
    which ties the events of one diagnostics session together.
    """
    return logger.bind(request_id=request_id, **context)
