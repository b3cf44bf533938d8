"""Logging setup for the codebrief CLI.

Provides three output modes:
- Human mode: [LEVEL] message (colored if TTY)
- Verbose mode: [LEVEL][HH:MM:SS] name: message
- CI/JSON mode: {"level":"...","ts":"...","logger":"...","msg":"..."}

Logs go to stderr so that `analyze --json` can keep stdout for the result.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from enum import Enum
from typing import Any, TextIO

ROOT_LOGGER = "codebrief"

# Attributes every LogRecord has; anything else came in through `extra=`
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
}


class LogMode(Enum):
    """Logging output mode."""

    HUMAN = "human"
    VERBOSE = "verbose"
    JSON = "json"


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    RED = "\033[31m"
    GRAY = "\033[90m"


LEVEL_COLORS = {
    logging.DEBUG: Colors.GRAY,
    logging.INFO: Colors.GREEN,
    logging.WARNING: Colors.YELLOW,
    logging.ERROR: Colors.RED,
    logging.CRITICAL: Colors.RED,
}


def _is_tty(stream: TextIO | None) -> bool:
    """Check if the stream is a TTY (supports colors)."""
    return stream is not None and hasattr(stream, "isatty") and stream.isatty()


class ConsoleFormatter(logging.Formatter):
    """Formatter for terminal output.

    Format: [LEVEL] message, or [LEVEL][HH:MM:SS] name: message with timestamps.
    """

    def __init__(self, use_colors: bool = False, timestamps: bool = False) -> None:
        super().__init__()
        self.use_colors = use_colors
        self.timestamps = timestamps

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record."""
        tag = f"[{record.levelname}]"
        if self.use_colors:
            color = LEVEL_COLORS.get(record.levelno, Colors.RESET)
            tag = f"{color}{tag}{Colors.RESET}"

        if self.timestamps:
            stamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
            line = f"{tag}[{stamp}] {record.name}: {record.getMessage()}"
        else:
            line = f"{tag} {record.getMessage()}"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class JSONFormatter(logging.Formatter):
    """Formatter for JSON lines output (machine-readable).

    Fields passed through `extra=` are merged into the object.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON."""
        entry: dict[str, Any] = {
            "level": record.levelname,
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                entry[key] = value
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Get a logger under the codebrief hierarchy."""
    return logging.getLogger(name)


def setup_logging(
    mode: LogMode = LogMode.HUMAN,
    level: int = logging.INFO,
    stream: TextIO | None = None,
) -> None:
    """Configure the codebrief logger.

    Args:
        mode: Output mode (human, verbose, json)
        level: Minimum log level
        stream: Output stream (default: stderr)
    """
    stream = stream or sys.stderr
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    if mode == LogMode.JSON:
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = ConsoleFormatter(
            use_colors=_is_tty(stream),
            timestamps=mode == LogMode.VERBOSE,
        )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # LiteLLM logs every request at INFO
    logging.getLogger("LiteLLM").setLevel(max(level, logging.WARNING))


def configure_from_cli(
    verbose: bool = False,
    quiet: bool = False,
    ci: bool = False,
) -> None:
    """Configure logging based on CLI flags.

    Args:
        verbose: Enable verbose mode with timestamps
        quiet: Suppress info messages (warnings and errors only)
        ci: Enable JSON output for CI/CD
    """
    if ci:
        mode = LogMode.JSON
    elif verbose:
        mode = LogMode.VERBOSE
    else:
        mode = LogMode.HUMAN

    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    setup_logging(mode=mode, level=level)
