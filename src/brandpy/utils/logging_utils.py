"""Structured logging utilities for BrandPy."""

import json
import logging
import os
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

ROOT_LOGGER_NAME = "brandpy"

# Extra fields copied from log records into structured output
CONTEXT_FIELDS = ("operation", "identifier", "user_id", "status", "error")


class ColoredFormatter(logging.Formatter):
    """Custom formatter with color support for terminal output."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",  # Reset
    }

    def __init__(self, *args: Any, disable_colors: bool = False, **kwargs: Any) -> None:
        """Initialize formatter with color configuration.

        Args:
            disable_colors: Whether to disable colored output
        """
        super().__init__(*args, **kwargs)
        self.disable_colors = disable_colors

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors for terminal output."""
        if (
            not self.disable_colors
            and hasattr(sys.stderr, "isatty")
            and sys.stderr.isatty()
        ):
            color = self.COLORS.get(record.levelname, "")
            reset = self.COLORS["RESET"]
            record.levelname = f"{color}{record.levelname}{reset}"

        return super().format(record)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON."""
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        for name in CONTEXT_FIELDS:
            if hasattr(record, name):
                log_entry[name] = getattr(record, name)

        return json.dumps(log_entry, default=str)


class DetailedFormatter(logging.Formatter):
    """Detailed formatter with context information."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with detailed context."""
        base_msg = super().format(record)

        context_parts = []
        if hasattr(record, "operation"):
            context_parts.append(f"op={record.operation}")
        if hasattr(record, "identifier"):
            context_parts.append(f"id={record.identifier}")
        if hasattr(record, "user_id"):
            context_parts.append(f"user={record.user_id}")
        if hasattr(record, "status"):
            context_parts.append(f"status={record.status}")

        if context_parts:
            return base_msg + " [" + ", ".join(context_parts) + "]"

        return base_msg


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_format: str = "console",
    disable_colors: bool = False,
) -> logging.Logger:
    """Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path; file output is always JSON
        log_format: Console log format (console, json, detailed)
        disable_colors: Whether to disable colored output

    Returns:
        logging.Logger: Configured package logger
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()

    log_level = getattr(logging, level.upper(), logging.WARNING)
    root_logger.setLevel(log_level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)

    if log_format == "json":
        console_formatter: logging.Formatter = StructuredFormatter()
    elif log_format == "detailed":
        console_formatter = DetailedFormatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        console_formatter = ColoredFormatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            disable_colors=disable_colors,
        )

    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(StructuredFormatter())
        root_logger.addHandler(file_handler)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the specified module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger: Logger instance
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_from_env() -> logging.Logger:
    """Configure logging from environment variables.

    Environment variables:
        BRANDPY_LOG_LEVEL: Log level (default: WARNING)
        BRANDPY_LOG_FILE: Log file path (optional)
        BRANDPY_LOG_FORMAT: Log format (console, json, detailed) (default: console)
        BRANDPY_LOG_DISABLE_COLORS: Disable colored output (default: false)

    Returns:
        logging.Logger: Configured logger instance
    """
    return setup_logging(
        level=os.getenv("BRANDPY_LOG_LEVEL", "WARNING"),
        log_file=os.getenv("BRANDPY_LOG_FILE"),
        log_format=os.getenv("BRANDPY_LOG_FORMAT", "console"),
        disable_colors=os.getenv("BRANDPY_LOG_DISABLE_COLORS", "false").lower()
        == "true",
    )


def init_default_logging() -> None:
    """Initialize default logging configuration if not already configured."""
    if not logging.getLogger(ROOT_LOGGER_NAME).handlers:
        configure_from_env()


# Initialize logging when module is imported
init_default_logging()
