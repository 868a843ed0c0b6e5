"""
Structured logging configuration for the Deploy Dashboard service.

JSON lines for production log collection, a colored console format for
local development, and correlation ID support for request tracing.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from deploy_dashboard.utils.error_utils import get_correlation_id

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_RECORD_ATTRS = frozenset({
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'lineno', 'funcName', 'created',
    'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'getMessage', 'exc_info',
    'exc_text', 'stack_info', 'taskName', 'message',
})


class StructuredFormatter(logging.Formatter):
    """
    Formatter that outputs one JSON object per log record.

    Includes the correlation ID and any ``extra`` fields passed by the caller.
    """

    def __init__(self, include_extra: bool = True):
        super().__init__()
        self.include_extra = include_extra

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON."""
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        correlation_id = get_correlation_id()
        if correlation_id:
            log_entry["correlation_id"] = correlation_id

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        if self.include_extra:
            extra_fields = {}
            for key, value in record.__dict__.items():
                if key in _RESERVED_RECORD_ATTRS:
                    continue
                try:
                    json.dumps(value)
                    extra_fields[key] = value
                except (TypeError, ValueError):
                    extra_fields[key] = str(value)

            if extra_fields:
                log_entry["extra"] = extra_fields

        return json.dumps(log_entry, ensure_ascii=False)


class ColoredConsoleFormatter(logging.Formatter):
    """Human-readable console formatter for development environments."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record: logging.LogRecord) -> str:
        level_color = self.COLORS.get(record.levelname, '')
        reset_color = self.COLORS['RESET']

        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime('%Y-%m-%d %H:%M:%S')
        parts = [
            timestamp,
            f"{level_color}{record.levelname:8}{reset_color}",
            record.name,
            record.getMessage(),
        ]

        correlation_id = get_correlation_id()
        if correlation_id:
            parts.append(f"[corr_id={correlation_id[:8]}]")

        # Location info for errors
        if record.levelno >= logging.ERROR:
            parts.append(f"({record.filename}:{record.lineno})")

        log_line = " | ".join(parts)

        if record.exc_info:
            log_line += "\n" + self.formatException(record.exc_info)

        return log_line


def setup_logging(
    environment: str = "development",
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    enable_json_logs: Optional[bool] = None,
    enable_console_logs: bool = True
) -> None:
    """
    Set up structured logging for the application.

    Args:
        environment: Environment name (development, production, test)
        log_level: Minimum log level to capture
        log_file: Optional file path for JSON log output
        enable_json_logs: Whether to use JSON formatting (auto-detected if None)
        enable_console_logs: Whether to log to stdout
    """
    if enable_json_logs is None:
        enable_json_logs = environment == "production"

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    handlers = []

    if enable_console_logs:
        console_handler = logging.StreamHandler(sys.stdout)
        if enable_json_logs:
            console_handler.setFormatter(StructuredFormatter())
        else:
            console_handler.setFormatter(ColoredConsoleFormatter())
        console_handler.setLevel(numeric_level)
        handlers.append(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(StructuredFormatter())
        file_handler.setLevel(numeric_level)
        handlers.append(file_handler)

    logging.basicConfig(
        level=numeric_level,
        handlers=handlers,
        force=True
    )

    logger_configs = {
        "uvicorn": logging.WARNING,
        "uvicorn.access": logging.WARNING,
        "fastapi": logging.INFO,
        "httpx": logging.WARNING,
        "deploy_dashboard": numeric_level,
    }

    for logger_name, level in logger_configs.items():
        logging.getLogger(logger_name).setLevel(level)

    logger = logging.getLogger(__name__)
    logger.info(
        "Logging configured",
        extra={
            "environment": environment,
            "log_level": log_level,
            "json_logs": enable_json_logs,
            "console_logs": enable_console_logs,
            "log_file": log_file,
        }
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the specified name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
