# src/logging/handlers.py — v1
"""Size-based rotating handler for log files."""

from __future__ import annotations

import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

_UNITS = {"KB": 1024, "MB": 1024**2, "GB": 1024**3}


def parse_size(size_str: str) -> int:
    """Parse size string like '10MB' into bytes.

    Supported suffixes: KB, MB, GB (case-insensitive).
    """
    match = re.match(r"^(\d+)\s*(KB|MB|GB)$", size_str.strip(), re.IGNORECASE)
    if not match:
        raise ValueError(f"Invalid size format: {size_str!r}. Use e.g. '10MB'.")
    return int(match.group(1)) * _UNITS[match.group(2).upper()]


def create_rotating_handler(
    log_file: str | Path,
    rotation: str = "10MB",
    backups: int = 5,
) -> RotatingFileHandler:
    """Create a rotating file handler, creating the parent directory."""
    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        filename=str(path),
        maxBytes=parse_size(rotation),
        backupCount=backups,
        encoding="utf-8",
    )
