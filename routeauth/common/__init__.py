"""Common utilities for routeauth.

Route table loading lives in routeauth.common.config.
"""

from .logger import configure_logging, get_logger, setup_logger

__all__ = ["configure_logging", "get_logger", "setup_logger"]
