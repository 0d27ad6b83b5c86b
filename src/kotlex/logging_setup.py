# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Structured logging setup for kotlex.

Log records go to a dated JSON-lines file (one object per record) and,
optionally, to stderr in a readable form. stdout is left to the reports.

Records may carry structured data through ``extra={"extra_fields": {...}}``;
the analyzer uses this to attach per-file token and diagnostic counts.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

DEFAULT_LOG_DIR_NAME = ".kotlex_logs"

# Third-party loggers that are noisy below WARNING (observer threads, MCP sessions)
QUIET_LOGGERS = ("watchdog", "mcp")


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Per-file counts and other structured data
        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        return json.dumps(log_data)


def resolve_level(level: Union[int, str]) -> int:
    """Turn a level name from .kotlex.yml ("debug", "WARNING") into a number.

    Raises:
        ValueError: If the name is not a standard logging level.
    """
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def setup_logging(
    log_dir: Optional[Path] = None,
    log_level: Union[int, str] = logging.INFO,
    console_output: bool = True,
) -> Path:
    """Set up structured logging for the application.

    Args:
        log_dir: Directory for log files. If None, uses .kotlex_logs/
        log_level: Level number or name (default: INFO)
        console_output: Whether to also log to stderr (default: True)

    Returns:
        Path of the JSON log file.
    """
    level = resolve_level(log_level)

    if log_dir is None:
        log_dir = Path.cwd() / DEFAULT_LOG_DIR_NAME

    # Nested paths such as build/logs/kotlex are allowed
    log_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Repeated calls (watch restarts, tests) must not stack handlers
    root_logger.handlers.clear()

    # One file per UTC day, shared by every run on that day
    log_file = log_dir / f"kotlex_{datetime.now(timezone.utc).strftime('%Y%m%d')}.log"
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(StructuredFormatter())
    root_logger.addHandler(file_handler)

    # stderr keeps stdout free for reports and --json output
    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    startup_fields = {"log_file": str(log_file), "log_level": logging.getLevelName(level)}
    logging.info(
        f"Logging initialized. Log directory: {log_dir}",
        extra={"extra_fields": startup_fields},
    )
    return log_file
