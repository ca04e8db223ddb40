"""
Centralized logging configuration for the sample health database builder.

This module provides a consistent logging setup across all modules,
with features like log rotation, formatting, and multiple handlers.
Informational output goes to stdout, warnings and errors go to stderr.

License:
    See LICENSE.md in the repository root.
"""

import logging
import logging.handlers
import sys
import contextvars
from pathlib import Path
from typing import Optional, Dict, Any
from datetime import datetime

from pythonjsonlogger.json import JsonFormatter
from src.config import LogConfig


class ColoredFormatter(logging.Formatter):
    """Custom formatter that adds colors to log output for terminal display."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, fmt=None, datefmt=None, stream=None):
        super().__init__(fmt, datefmt)
        self.stream = stream

    def format(self, record):
        levelname = record.levelname
        stream = self.stream or sys.stderr
        if hasattr(stream, 'isatty') and stream.isatty() and levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"

        try:
            return super().format(record)
        finally:
            record.levelname = levelname


class MaxLevelFilter(logging.Filter):
    """Pass only records strictly below a given level."""

    def __init__(self, max_level: int):
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.max_level


# Context variable for operation tracking
log_context: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar('log_context', default={})


class StructuredFormatter(JsonFormatter):
    """JSON formatter with context injection for structured logging."""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        """Add custom fields to the log record."""
        super().add_fields(log_record, record, message_dict)

        log_record.update(log_context.get())

        log_record['timestamp'] = self.formatTime(record)
        log_record['logger_name'] = record.name
        log_record['level'] = record.levelname
        log_record['module'] = record.module
        log_record['function'] = record.funcName
        log_record['line'] = record.lineno

        if record.exc_info:
            log_record['exception'] = self.formatException(record.exc_info)

        if hasattr(record, 'metrics'):
            log_record['metrics'] = record.metrics

        if 'message' in log_record and not log_record['message']:
            log_record['message'] = record.getMessage()


class LogContext:
    """Context manager for adding fields to all logs within a scope."""

    def __init__(self, **kwargs):
        self.fields = kwargs
        self.token = None

    def __enter__(self):
        current = log_context.get()
        self.token = log_context.set({**current, **self.fields})
        return self

    def __exit__(self, *args):
        if self.token:
            log_context.reset(self.token)


class MetricsLogger:
    """Logger for counts and durations."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def record_count(self, metric_name: str, count: int, **extra_fields) -> None:
        """Record a count metric."""
        self.logger.info(
            f"   {metric_name}: {count}",
            extra={
                "metrics": {
                    "metric_name": metric_name,
                    "count": count,
                    **extra_fields
                }
            }
        )


class LoggerManager:
    """Manages logger configuration and setup for the application."""

    _loggers: Dict[str, logging.Logger] = {}
    _initialized: bool = False

    @classmethod
    def setup_logging(
        cls,
        log_level: str = None,
        log_file: Path = None,
        enable_console: Optional[bool] = None,
        enable_file: Optional[bool] = None,
        format_string: str = None,
        date_format: str = None,
        structured: bool = None,
        context_fields: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Set up the logging configuration for the entire application.

        Args:
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Path to log file
            enable_console: Whether to enable stdout/stderr output
            enable_file: Whether to enable rotating file output
            format_string: Custom format string for log messages
            date_format: Custom date format for log messages
            structured: Whether to use structured (JSON) logging
            context_fields: Initial context fields to add to all logs
        """
        if context_fields:
            log_context.set(context_fields)

        if cls._initialized:
            return

        env_config = LogConfig.get_config()

        log_level = (log_level or env_config['log_level']).upper()
        log_file = log_file or env_config['log_file']
        format_string = format_string or env_config['log_format']
        date_format = date_format or env_config['date_format']
        if enable_console is None:
            enable_console = env_config['enable_console']
        if enable_file is None:
            enable_file = env_config['enable_file']
        if structured is None:
            structured = env_config['structured']

        level = getattr(logging, log_level)
        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        if enable_console:
            stdout_handler = logging.StreamHandler(sys.stdout)
            stdout_handler.setLevel(level)
            stdout_handler.addFilter(MaxLevelFilter(logging.WARNING))

            stderr_handler = logging.StreamHandler(sys.stderr)
            stderr_handler.setLevel(max(level, logging.WARNING))

            for handler in (stdout_handler, stderr_handler):
                if structured:
                    handler.setFormatter(StructuredFormatter())
                else:
                    handler.setFormatter(ColoredFormatter(format_string, date_format, handler.stream))
                root_logger.addHandler(handler)

        if enable_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                str(log_file),
                maxBytes=env_config['max_bytes'],
                backupCount=env_config['backup_count'],
                encoding='utf-8'
            )
            file_handler.setLevel(level)

            if structured:
                file_handler.setFormatter(StructuredFormatter())
            else:
                file_handler.setFormatter(logging.Formatter(format_string, date_format))
            root_logger.addHandler(file_handler)

        cls._initialized = True

    @classmethod
    def set_level(cls, log_level: str) -> None:
        """Change the level of the root logger and its handlers after setup."""
        level = getattr(logging, log_level.upper())
        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        for handler in root_logger.handlers:
            is_stderr = type(handler) is logging.StreamHandler and not any(
                isinstance(f, MaxLevelFilter) for f in handler.filters
            )
            if is_stderr:
                handler.setLevel(max(level, logging.WARNING))
            else:
                handler.setLevel(level)

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """
        Get a logger instance with the given name.

        Args:
            name: Logger name (typically __name__ of the module)

        Returns:
            Configured logger instance
        """
        if not cls._initialized:
            cls.setup_logging()

        if name not in cls._loggers:
            cls._loggers[name] = logging.getLogger(name)

        return cls._loggers[name]

    @classmethod
    def create_operation_logger(cls, operation_name: str) -> 'OperationLogger':
        """Create a logger for a specific operation with timing and success tracking."""
        return OperationLogger(operation_name)

    @classmethod
    def get_metrics_logger(cls, name: str) -> MetricsLogger:
        """Get a metrics logger for counts and durations."""
        return MetricsLogger(cls.get_logger(name))

    @classmethod
    def get_instance(cls) -> 'LoggerManager':
        """Get the singleton instance of LoggerManager."""
        return cls

    @classmethod
    def is_setup(cls) -> bool:
        """Check if logging has been initialized."""
        return cls._initialized


class OperationLogger:
    """Context manager for logging operations with timing and success tracking."""

    def __init__(self, operation_name: str):
        self.operation_name = operation_name
        self.logger = LoggerManager.get_logger(__name__)
        self.start_time = None
        self.success = False

    def __enter__(self):
        self.start_time = datetime.now()
        self.logger.debug(f"Starting operation: {self.operation_name}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = datetime.now() - self.start_time

        if exc_type is None:
            self.success = True
            self.logger.debug(
                f"Completed operation: {self.operation_name} (Duration: {duration})"
            )
        else:
            self.logger.error(
                f"Failed operation: {self.operation_name} "
                f"(Duration: {duration}, Error: {exc_type.__name__}: {exc_val})"
            )

        # Don't suppress exceptions
        return False


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the given module name."""
    return LoggerManager.get_logger(name)


__all__ = [
    'LoggerManager',
    'OperationLogger',
    'MetricsLogger',
    'LogContext',
    'ColoredFormatter',
    'StructuredFormatter',
    'get_logger',
]
