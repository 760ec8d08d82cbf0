from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

from .config import LoggingSettings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_LOG_BYTES = 1_000_000
LOG_BACKUPS = 5

# Marks handlers installed here so a second call leaves the root logger alone.
_HANDLER_TAG = "_shared_calendar"


def resolve_level(name: Optional[str], settings: LoggingSettings) -> int:
    level = logging.getLevelName((name or settings.level).upper())
    return level if isinstance(level, int) else logging.INFO


def _handlers(log_file: Path) -> List[logging.Handler]:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: List[logging.Handler] = [
        RotatingFileHandler(str(log_file), maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"),
        logging.StreamHandler(),
    ]
    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_TAG, True)
    return handlers


def configure_logging(level: Optional[str] = None, *, log_path: Optional[Path] = None) -> None:
    """Send records to the rotating store log and the console.

    ``level`` and ``log_path`` override the ``SHARED_CALENDAR_LOG_*`` settings.
    """

    root = logging.getLogger()
    if any(getattr(handler, _HANDLER_TAG, False) for handler in root.handlers):
        return

    settings = get_settings().logging
    log_file = log_path or settings.log_file
    root.setLevel(resolve_level(level, settings))
    for handler in _handlers(log_file):
        root.addHandler(handler)
    logging.getLogger(__name__).debug("Logging to %s", log_file)


__all__ = ["configure_logging", "resolve_level"]
