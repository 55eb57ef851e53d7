"""
Logging configuration for the UniProt header parser tools.

This module provides structured logging (JSON or human-readable) with
optional process metrics, used by the CLI and by batch callers. Log output
goes to stderr so that parsed records on stdout stay machine-readable.
"""

import logging
import logging.handlers
import json
import sys
import time
from datetime import datetime
from pathlib import Path
import psutil
import os

from .config import LoggingConfig


_STANDARD_RECORD_FIELDS = frozenset([
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'exc_info', 'exc_text', 'stack_info',
    'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'message',
    'taskName', 'iso_timestamp', 'cpu_percent', 'memory_mb',
    'uptime_seconds', 'process_id', 'thread_id',
])


class PerformanceFilter(logging.Filter):
    """Filter to add process metrics to log records."""

    def __init__(self):
        super().__init__()
        self.process = psutil.Process()
        self.start_time = time.time()

    def filter(self, record):
        """Add performance metrics to the log record."""
        try:
            record.cpu_percent = self.process.cpu_percent()
            record.memory_mb = self.process.memory_info().rss / 1024 / 1024
        except psutil.Error:
            record.cpu_percent = 0.0
            record.memory_mb = 0.0
        record.uptime_seconds = time.time() - self.start_time
        record.process_id = os.getpid()
        record.thread_id = record.thread
        record.iso_timestamp = datetime.fromtimestamp(record.created).isoformat()
        return True


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def __init__(self, include_performance=True):
        super().__init__()
        self.include_performance = include_performance

    def format(self, record):
        """Format log record as JSON."""
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        extra_fields = {
            key: value for key, value in record.__dict__.items()
            if key not in _STANDARD_RECORD_FIELDS
        }
        if extra_fields:
            log_entry["extra"] = extra_fields

        if self.include_performance and hasattr(record, 'cpu_percent'):
            log_entry["performance"] = {
                "cpu_percent": getattr(record, 'cpu_percent', 0),
                "memory_mb": getattr(record, 'memory_mb', 0),
                "uptime_seconds": getattr(record, 'uptime_seconds', 0),
                "process_id": getattr(record, 'process_id', 0),
                "thread_id": getattr(record, 'thread_id', 0)
            }

        return json.dumps(log_entry, default=str)


class ContextualFormatter(logging.Formatter):
    """Human-readable formatter with contextual information."""

    def __init__(self, include_performance=True):
        super().__init__()
        self.include_performance = include_performance

        format_str = (
            "%(iso_timestamp)s [%(levelname)s] %(name)s:%(funcName)s:%(lineno)d - %(message)s"
        )
        if include_performance:
            format_str += " [CPU: %(cpu_percent).1f%% MEM: %(memory_mb).1fMB]"

        self._formatter = logging.Formatter(format_str)

    def format(self, record):
        """Format log record with contextual information."""
        if not hasattr(record, 'iso_timestamp'):
            record.iso_timestamp = datetime.fromtimestamp(record.created).isoformat()
        if not hasattr(record, 'cpu_percent'):
            record.cpu_percent = 0.0
        if not hasattr(record, 'memory_mb'):
            record.memory_mb = 0.0

        return self._formatter.format(record)


def _make_formatter(config: LoggingConfig) -> logging.Formatter:
    if config.format.lower() == 'json' and config.structured:
        return JSONFormatter(include_performance=config.include_performance)
    return ContextualFormatter(include_performance=config.include_performance)


def setup_logging(config: LoggingConfig) -> None:
    """
    Set up logging for the parser tools.

    Args:
        config: Logging configuration object
    """
    level = getattr(logging, config.level.upper())

    if config.log_file:
        Path(config.log_file).parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    perf_filter = PerformanceFilter()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.addFilter(perf_filter)
    console_handler.setFormatter(_make_formatter(config))
    root_logger.addHandler(console_handler)

    if config.log_file:
        file_handler = logging.handlers.RotatingFileHandler(
            filename=config.log_file,
            maxBytes=config.max_file_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(level)
        file_handler.addFilter(perf_filter)
        file_handler.setFormatter(_make_formatter(config))
        root_logger.addHandler(file_handler)

    logger = logging.getLogger(__name__)
    logger.debug(
        "Logging system initialized",
        extra={
            "log_level": config.level,
            "log_format": config.format,
            "structured": config.structured,
            "file_logging": bool(config.log_file),
        }
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def log_batch_summary(logger: logging.Logger, source: str, parsed: int,
                      failed: int, duration: float, **kwargs):
    """
    Log the outcome of parsing a batch of headers.

    Args:
        logger: Logger instance
        source: Where the headers came from (file name, "-" for stdin)
        parsed: Number of headers parsed successfully
        failed: Number of headers that failed
        duration: Elapsed time in seconds
        **kwargs: Additional context
    """
    level = logging.WARNING if failed else logging.INFO
    total = parsed + failed

    logger.log(
        level,
        f"Parsed {parsed}/{total} headers from {source}",
        extra={
            "source": source,
            "parsed_count": parsed,
            "failed_count": failed,
            "duration_seconds": duration,
            "headers_per_second": total / duration if duration > 0 else 0,
            **kwargs
        }
    )
