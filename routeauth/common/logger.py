"""Logging for routeauth components.

Each component logs under its own name:

    route_guard       guard decisions, denial audit lines, collaborator errors
    route_authorizer  route resolution and misses
    route_registry    route table validation
    session_store     session persistence and payload parsing

configure_logging() wires all of them from Settings in one call.
"""

import logging
import logging.handlers
import os
from typing import Dict, Optional

COMPONENT_LOGGERS = ("route_guard", "route_authorizer", "route_registry", "session_store")

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def _parse_level(level: str) -> int:
    level_upper = level.upper()
    if level_upper not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ValueError(
            f"Invalid log level: {level}. "
            f"Must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL"
        )
    return getattr(logging, level_upper)


def setup_logger(
    name: str,
    log_dir: str = "/var/log/routeauth",
    level: str = "INFO",
    log_format: Optional[str] = None,
    date_format: Optional[str] = None,
    file_logging: bool = False,
    console_logging: bool = True,
    max_bytes: int = 10485760,  # 10MB
    backup_count: int = 5,
) -> logging.Logger:
    """Set up a component logger.

    Console output goes to stderr. File output, when enabled, rotates
    <log_dir>/<name>.log. Calling again for a configured logger only
    updates its level.

    Args:
        name: Component name, e.g. "route_guard"
        log_dir: Directory for rotated log files
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL (any case)
        log_format: Record format, DEFAULT_FORMAT when omitted
        date_format: Timestamp format, ISO 8601 when omitted
        file_logging: Write to a rotating file under log_dir
        console_logging: Write to stderr
        max_bytes: Size at which the log file rotates
        backup_count: Rotated files to keep

    Returns:
        The configured logger

    Raises:
        ValueError: If level is not a known level name
    """
    logger = logging.getLogger(name)
    logger.setLevel(_parse_level(level))

    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        log_format or DEFAULT_FORMAT,
        datefmt=date_format or DEFAULT_DATE_FORMAT,
    )

    handlers = []
    if file_logging:
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            os.path.join(log_dir, f"{name}.log"),
            maxBytes=max_bytes,
            backupCount=backup_count,
        ))
    if console_logging:
        handlers.append(logging.StreamHandler())

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def configure_logging(settings=None) -> Dict[str, logging.Logger]:
    """Set up every component logger from settings.

    Args:
        settings: Settings instance, get_settings() when omitted

    Returns:
        Mapping of component name to logger
    """
    if settings is None:
        from ..core.config import get_settings
        settings = get_settings()

    level = "DEBUG" if settings.debug else settings.log_level
    return {
        name: setup_logger(
            name,
            log_dir=settings.log_dir,
            level=level,
            file_logging=settings.file_logging,
        )
        for name in COMPONENT_LOGGERS
    }


def get_logger(name: str) -> logging.Logger:
    """Get a logger by name without configuring it."""
    return logging.getLogger(name)
