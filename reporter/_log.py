"""Logging utility for reporter."""
from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path

_file_logger: logging.Logger | None = None


def setup_file_logging(log_path: Path) -> None:
    """Configure rotating file handler (notify-only runs have stderr discarded)."""
    global _file_logger
    log_path.parent.mkdir(parents=True, exist_ok=True)
    _file_logger = logging.getLogger("reporter")
    _file_logger.setLevel(logging.INFO)
    handler = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=5 * 1024 * 1024, backupCount=3,
    )
    handler.setFormatter(logging.Formatter("%(asctime)s %(message)s", datefmt="%Y-%m-%d %H:%M:%S"))
    _file_logger.addHandler(handler)


def log(msg: str, tag: str = "reporter") -> None:
    """Log a tagged line to stderr, and to the log file when one is configured."""
    line = f"[{tag}] {msg}"
    if _file_logger:
        _file_logger.info(line)
    print(line, file=sys.stderr)
