# src/noteleaf/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import Settings

LOG_FILE_NAME = "noteleaf.log"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the console readable:
    - allow noteleaf logs at the handler level
    - suppress everything else unless ERROR+, including Python warnings
      captured as 'py.warnings'
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name == "noteleaf" or name.startswith("noteleaf."):
            return True

        return record.levelno >= logging.ERROR


def _parse_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(
    *,
    log_dir: str | Path = ".local/noteleaf/logs",
    console_level: int | str = logging.INFO,
    file_level: int | str = logging.DEBUG,
) -> Path:
    """
    Configure logging with:
    - Console handler: filtered for interactive use
    - File handler: full logs for debugging

    Call this ONCE, very early. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(_parse_level(console_level))
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(_parse_level(file_level))
    fh.setFormatter(fmt)
    root.addHandler(fh)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)

    return log_file


def setup_logging_from_settings(settings: Settings) -> Path:
    """setup_logging() driven by Settings (log_dir, log_level)."""
    return setup_logging(log_dir=settings.log_dir, console_level=settings.log_level)
