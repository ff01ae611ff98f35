"""Logging setup for cmdbox.

Diagnostics go to stderr so they never interleave with rendered output on
stdout. File logs are always JSON.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

logger = logging.getLogger("cmdbox")

# Attributes present on every LogRecord; anything else came in via ``extra=``.
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """JSON formatter for machine-readable logs."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ConsoleFormatter(logging.Formatter):
    """Human-readable formatter with optional ANSI colors."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = True) -> None:
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        level = record.levelname
        message = record.getMessage()
        if record.exc_info and record.levelno <= logging.DEBUG:
            message = f"{message}\n{self.formatException(record.exc_info)}"

        if self.use_color:
            color = self.COLORS.get(level, "")
            return f"{color}{level:8}{self.RESET} {record.name}: {message}"
        return f"{level:8} {record.name}: {message}"


def setup_logging(
    level: str = "WARNING",
    log_file: Path | None = None,
    json_format: bool = False,
    use_color: bool | None = None,
) -> logging.Logger:
    """Configure the ``cmdbox`` logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional file path (``~`` is expanded); records are
            appended as JSON lines.
        json_format: Use JSON on the console as well.
        use_color: Force colors on or off. Defaults to whether stderr is a tty.

    Returns:
        The configured logger.
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    if use_color is None:
        use_color = sys.stderr.isatty()

    logger.setLevel(numeric_level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    if json_format:
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(ConsoleFormatter(use_color=use_color))
    logger.addHandler(console_handler)

    if log_file:
        log_file = log_file.expanduser()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger, e.g. ``get_logger(__name__)``."""
    return logging.getLogger(name)
