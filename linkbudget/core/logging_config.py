"""
Logging configuration for the link budget service.

Application logs are structured JSON records tagged with a per-request
correlation ID. Calculation events additionally go to a plain-text,
append-only log file with one timestamped line per event.
"""

import json
import logging
import sys
import uuid
from datetime import datetime, timezone
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Optional, TextIO, Union

from linkbudget.core.config import settings

# Context variable for correlation ID (used across request lifecycle)
correlation_id_ctx: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)

CALCULATION_LOGGER_NAME = "linkbudget.calculations"

# Matches the layout of C's ctime(), e.g. "Sun Oct 18 09:14:03 2026"
CALCULATION_DATE_FORMAT = "%a %b %d %H:%M:%S %Y"

_RESERVED_RECORD_FIELDS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'lineno', 'funcName', 'created',
    'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'exc_info', 'exc_text', 'stack_info',
    'taskName',
}


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.
    """

    def __init__(self, include_sensitive: bool = False):
        """
        Initialize structured formatter.

        Args:
            include_sensitive: Whether to include session identifiers and
                cookie values in logs
        """
        super().__init__()
        self.include_sensitive = include_sensitive

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON"""
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        correlation_id = correlation_id_ctx.get()
        if correlation_id:
            log_entry["correlation_id"] = correlation_id

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        extra_fields = {}
        for key, value in record.__dict__.items():
            if key in _RESERVED_RECORD_FIELDS:
                continue
            if not self.include_sensitive and self._is_sensitive_field(key):
                extra_fields[key] = "[REDACTED]"
            else:
                extra_fields[key] = value

        if extra_fields:
            log_entry["extra"] = extra_fields

        return json.dumps(log_entry, default=self._json_default)

    def _is_sensitive_field(self, key: str) -> bool:
        """Check if field name refers to client-identifying data"""
        sensitive_keywords = {'session', 'cookie', 'token'}
        key_lower = key.lower()
        return any(keyword in key_lower for keyword in sensitive_keywords)

    def _json_default(self, obj: Any) -> str:
        """JSON serializer for objects not serializable by default"""
        if isinstance(obj, datetime):
            return obj.isoformat()
        return str(obj)


def setup_logging(
    log_level: str = "INFO",
    enable_json: bool = True,
    stream: Optional[TextIO] = None,
    include_sensitive: bool = False,
) -> None:
    """
    Configure application logging on the root logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        enable_json: Whether to use JSON formatting
        stream: Stream for the console handler (defaults to stderr)
        include_sensitive: Whether to include session data in logs
    """
    logging.root.handlers.clear()

    if enable_json:
        formatter: logging.Formatter = StructuredFormatter(include_sensitive=include_sensitive)
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.addHandler(console_handler)

    # Reduce noise from external libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def configure_calculation_log(log_file: Union[str, Path]) -> logging.Logger:
    """
    Point the calculation logger at an append-only log file.

    Any previously attached file handler is closed and replaced, so calling
    this again with a new path redirects subsequent events.

    Args:
        log_file: Path of the plain-text log file

    Returns:
        The calculation logger
    """
    logger = logging.getLogger(CALCULATION_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8", delay=True)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s: %(message)s", datefmt=CALCULATION_DATE_FORMAT)
    )
    logger.addHandler(file_handler)
    logger.setLevel(logging.INFO)
    return logger


def get_calculation_logger() -> logging.Logger:
    """Return the logger used for calculation and error events."""
    return logging.getLogger(CALCULATION_LOGGER_NAME)


def get_correlation_id() -> str:
    """
    Get or create a correlation ID for request tracking.

    Returns:
        str: Correlation ID for current context
    """
    correlation_id = correlation_id_ctx.get()
    if not correlation_id:
        correlation_id = str(uuid.uuid4())
        correlation_id_ctx.set(correlation_id)
    return correlation_id


def set_correlation_id(correlation_id: str) -> None:
    """
    Set correlation ID for current context.

    Args:
        correlation_id: Correlation ID to set
    """
    correlation_id_ctx.set(correlation_id)


def init_application_logging(stream: Optional[TextIO] = None) -> None:
    """Initialize application and calculation logging from settings"""
    is_dev = settings.DEV_MODE

    log_level = "DEBUG" if is_dev else "INFO"

    # Use JSON logging in production, plain text in development
    enable_json = not is_dev

    setup_logging(
        log_level=log_level,
        enable_json=enable_json,
        stream=stream,
        include_sensitive=is_dev,
    )
    configure_calculation_log(settings.LOG_FILE)

    logger = logging.getLogger("linkbudget.startup")
    logger.debug(
        "Logging initialized",
        extra={
            "dev_mode": is_dev,
            "json_logging": enable_json,
            "log_level": log_level,
            "calculation_log": str(settings.LOG_FILE),
        }
    )
