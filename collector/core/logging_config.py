"""Centralized logging configuration for the card collection calculator."""

import json
import logging
import logging.handlers
import sys
from contextvars import ContextVar
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Project root for log directory
PROJECT_ROOT = Path(__file__).parent.parent.parent
LOG_DIR = PROJECT_ROOT / "logs"

# Set per HTTP request by RequestLoggingMiddleware
request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "thread": record.threadName,
        }

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Add extra fields
        if hasattr(record, "extra_data"):
            log_data["extra"] = record.extra_data

        return json.dumps(log_data, default=str)


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that adds context to all log messages.

    The current request id, when one is bound, is added to every record.
    """

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict]:
        extra = kwargs.get("extra", {})
        context = dict(self.extra)
        request_id = request_id_var.get()
        if request_id is not None:
            context["request_id"] = request_id
        extra["extra_data"] = {**context, **extra.get("extra_data", {})}
        kwargs["extra"] = extra
        return msg, kwargs


def setup_logging(
    log_level: str = "INFO",
    enable_console: bool = True,
    enable_file: bool = True,
    log_dir: Path | None = None,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> None:
    """Configure logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        enable_console: Whether to log to console.
        enable_file: Whether to log to files.
        log_dir: Directory for log files (defaults to <project>/logs).
        max_bytes: Maximum size per log file before rotation.
        backup_count: Number of backup files to keep.
    """
    target_dir = log_dir or LOG_DIR

    # Get root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    # Clear existing handlers
    root_logger.handlers.clear()

    # Console handler (human-readable format)
    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)
        console_formatter = logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(threadName)s | %(name)s:%(funcName)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    # File handlers (JSON format for structured parsing)
    if enable_file:
        target_dir.mkdir(parents=True, exist_ok=True)
        json_formatter = JSONFormatter()

        # Main application log
        app_handler = logging.handlers.RotatingFileHandler(
            target_dir / "collector.log",
            maxBytes=max_bytes,
            backupCount=backup_count,
        )
        app_handler.setLevel(logging.DEBUG)
        app_handler.setFormatter(json_formatter)
        root_logger.addHandler(app_handler)

        # Error-only log for quick debugging
        error_handler = logging.handlers.RotatingFileHandler(
            target_dir / "errors.log",
            maxBytes=max_bytes,
            backupCount=backup_count,
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(json_formatter)
        root_logger.addHandler(error_handler)

        # Simulation engine log
        sim_logger = logging.getLogger("collector.services")
        sim_logger.handlers.clear()
        sim_handler = logging.handlers.RotatingFileHandler(
            target_dir / "simulation.log",
            maxBytes=max_bytes,
            backupCount=backup_count,
        )
        sim_handler.setLevel(logging.DEBUG)
        sim_handler.setFormatter(json_formatter)
        sim_logger.addHandler(sim_handler)


def get_logger(name: str, **context: Any) -> ContextLogger:
    """Get a logger with optional context.

    Args:
        name: Logger name (typically __name__).
        **context: Additional context to include in all log messages.

    Returns:
        ContextLogger with the specified context.
    """
    logger = logging.getLogger(name)
    return ContextLogger(logger, context)
