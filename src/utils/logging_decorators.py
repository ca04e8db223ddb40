"""
Logging decorators for consistent logging setup across the application.

License:
    See LICENSE.md in the repository root.
"""

import sys
import os
from functools import wraps
from typing import Callable, Optional, Dict, Any, TypeVar, cast
from pathlib import Path

from src.logging_config import LoggerManager, LogContext


F = TypeVar('F', bound=Callable[..., Any])


def configure_logging(
    log_level: Optional[str] = None,
    structured: bool = False,
    context_fields: Optional[Dict[str, Any]] = None,
    log_file: Optional[Path] = None
) -> Callable[[F], F]:
    """
    Decorator to configure logging for main entry points.

    Args:
        log_level: Logging level (defaults to LOG_LEVEL env var or INFO)
        structured: Whether to use structured JSON logging
        context_fields: Additional context fields to add to all logs
        log_file: Optional custom log file path

    Returns:
        Decorated function

    Example:
        @configure_logging(log_level='DEBUG')
        def main():
            logger = get_module_logger(__name__)
            logger.info("Application started")
    """
    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args, **kwargs):
            level = log_level or os.getenv('LOG_LEVEL', 'INFO')
            use_structured = structured or os.getenv('LOG_FORMAT') == 'json'

            script_name = os.path.basename(sys.argv[0])
            if script_name.endswith('.py'):
                script_name = script_name[:-3]

            default_context = {
                'script': script_name,
                'pid': os.getpid()
            }
            context = {**default_context, **(context_fields or {})}

            logger_manager = LoggerManager.get_instance()
            logger_manager.setup_logging(
                log_level=level,
                structured=use_structured,
                context_fields=context,
                log_file=log_file
            )

            logger = logger_manager.get_logger(func.__module__)

            with LogContext(operation=func.__name__):
                logger.debug(f"Starting {script_name}")

                try:
                    return func(*args, **kwargs)
                except KeyboardInterrupt:
                    logger.warning(f"Interrupted {script_name}")
                    raise

        return cast(F, wrapper)
    return decorator


def with_operation_logging(operation_name: Optional[str] = None) -> Callable[[F], F]:
    """
    Decorator that wraps a function with operation logging.

    This provides timing and success tracking for the decorated function.

    Args:
        operation_name: Name of the operation (defaults to function name)

    Returns:
        Decorated function
    """
    def decorator(func: F) -> F:
        op_name = operation_name or func.__name__

        @wraps(func)
        def wrapper(*args, **kwargs):
            with LoggerManager.create_operation_logger(op_name):
                return func(*args, **kwargs)

        return cast(F, wrapper)
    return decorator


__all__ = [
    'configure_logging',
    'with_operation_logging',
]
