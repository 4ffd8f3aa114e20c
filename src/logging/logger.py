# src/logging/logger.py — v3
"""Logger setup with JSON and text formatters.

Modules log through logging.getLogger(__name__); setup_logging() attaches
handlers to the package root logger.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from firstcontact.logging.context import get_context

ROOT_LOGGER = "firstcontact"


class JsonFormatter(logging.Formatter):
    """One JSON object per line, with request context when set."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context_dict = get_context().as_dict()
        if context_dict:
            log_entry["context"] = context_dict

        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable text formatter for development."""

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_context()
        parts = [
            datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S"),
            f"[{record.levelname:8s}]",
            record.name,
        ]
        if ctx.task:
            parts.append(f"[{ctx.task}]")
        if ctx.tier:
            parts.append(f"({ctx.tier})")
        parts.append(f"- {record.getMessage()}")
        return " ".join(parts)


def setup_logging(
    level: str = "INFO",
    log_format: str = "text",
    log_file: str | Path | None = None,
    rotation: str = "10MB",
    backups: int = 5,
) -> None:
    """Configure the package root logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        log_format: Output format ("json" or "text").
        log_file: Path to log file (None = stderr only).
        rotation: Max file size before rotation (e.g. "10MB").
        backups: Number of rotated files to keep.
    """
    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove existing handlers to avoid duplicates on re-init
    root_logger.handlers.clear()

    formatter: logging.Formatter
    if log_format == "json":
        formatter = JsonFormatter()
    else:
        formatter = TextFormatter()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        from firstcontact.logging.handlers import create_rotating_handler

        file_handler = create_rotating_handler(log_file, rotation=rotation, backups=backups)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
