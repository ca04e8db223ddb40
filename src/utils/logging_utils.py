"""
Logging utilities for convenient logger access and management.

License:
    See LICENSE.md in the repository root.
"""

import inspect
import logging
from typing import Optional

from src.logging_config import LoggerManager


def get_module_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a properly configured logger for the current module.

    This function automatically determines the calling module's name
    and ensures logging is properly configured.

    Args:
        name: Optional logger name (defaults to caller's module name)

    Returns:
        Configured logger instance

    Example:
        # At the top of your module:
        logger = get_module_logger(__name__)
    """
    if name is None:
        frame = inspect.currentframe()
        if frame and frame.f_back:
            name = frame.f_back.f_globals.get('__name__', 'unknown')
        else:
            name = 'unknown'

    # Environment-driven defaults (LOG_LEVEL, LOG_FORMAT, LOG_DISABLE_*) apply
    # until an entry point configures logging explicitly
    manager = LoggerManager.get_instance()
    if not manager.is_setup():
        manager.setup_logging()

    return manager.get_logger(name)


# Re-export from logging_config for convenience
from src.logging_config import LogContext, MetricsLogger, OperationLogger


__all__ = [
    'get_module_logger',
    'LogContext',
    'MetricsLogger',
    'OperationLogger',
]
