from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from platformdirs import user_data_dir

load_dotenv()

APP_NAME = "Shared Calendar"
APP_AUTHOR = "SharedCalendar"


@dataclass(frozen=True)
class StorageSettings:
    data_dir: Path
    data_file: str
    map_file: str

    @property
    def data_path(self) -> Path:
        return self.data_dir / self.data_file

    @property
    def map_path(self) -> Path:
        return self.data_dir / self.map_file


@dataclass(frozen=True)
class ServerSettings:
    host: str
    port: int


@dataclass(frozen=True)
class LoggingSettings:
    level: str
    log_file: Path


@dataclass(frozen=True)
class AppSettings:
    storage: StorageSettings
    server: ServerSettings
    logging: LoggingSettings


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    data_dir = Path(os.getenv("SHARED_CALENDAR_DATA_DIR") or user_data_dir(APP_NAME, APP_AUTHOR))

    storage = StorageSettings(
        data_dir=data_dir,
        data_file=os.getenv("SHARED_CALENDAR_DATA_FILE", "calendarData.json"),
        map_file=os.getenv("SHARED_CALENDAR_MAP_FILE", "calendarMap.json"),
    )

    server = ServerSettings(
        host=os.getenv("SHARED_CALENDAR_HOST", "127.0.0.1"),
        port=_int_from_env("SHARED_CALENDAR_PORT", 8000),
    )

    log_file = os.getenv("SHARED_CALENDAR_LOG_FILE")
    logging = LoggingSettings(
        level=os.getenv("SHARED_CALENDAR_LOG_LEVEL", "INFO").upper(),
        log_file=Path(log_file) if log_file else data_dir / "shared_calendar.log",
    )

    return AppSettings(storage=storage, server=server, logging=logging)
