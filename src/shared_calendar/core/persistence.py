from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import orjson

from ..config import StorageSettings, get_settings
from ..domain import Calendar

logger = logging.getLogger(__name__)

CalendarMap = Dict[str, Calendar]
NameIndex = Dict[str, Dict[str, str]]


class JsonPersistence:
    """Reads and writes the calendar records and the name/code index as two JSON files."""

    def __init__(self, data_path: Path, map_path: Path) -> None:
        self._data_path = data_path
        self._map_path = map_path

    @classmethod
    def from_settings(cls, settings: Optional[StorageSettings] = None) -> "JsonPersistence":
        storage = settings or get_settings().storage
        return cls(storage.data_path, storage.map_path)

    @property
    def data_path(self) -> Path:
        return self._data_path

    @property
    def map_path(self) -> Path:
        return self._map_path

    @staticmethod
    def _read(path: Path) -> Dict[str, Any]:
        if not path.exists():
            return {}
        raw = path.read_bytes()
        if not raw.strip():
            return {}
        return orjson.loads(raw)

    @staticmethod
    def _write(path: Path, payload: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2) + b"\n")

    def load(self) -> Tuple[CalendarMap, NameIndex]:
        records = self._read(self._data_path)
        raw_index = self._read(self._map_path)
        calendars = {uid: Calendar.from_record({"uid": uid, **record}) for uid, record in records.items()}
        index: NameIndex = {str(name): {str(code): str(uid) for code, uid in codes.items()} for name, codes in raw_index.items()}
        reconcile_index(calendars, index)
        logger.debug("Loaded %d calendars from %s", len(calendars), self._data_path)
        return calendars, index

    def save(self, calendars: CalendarMap, index: NameIndex) -> None:
        self._write(self._data_path, {uid: calendar.to_record() for uid, calendar in calendars.items()})
        self._write(self._map_path, index)


def reconcile_index(calendars: CalendarMap, index: NameIndex) -> None:
    """Repair ``index`` in place so it points at exactly the calendars in ``calendars``.

    When two records claim the same name and code, the one already indexed wins
    and the other is removed from ``calendars``.
    """

    for name in list(index):
        codes = index[name]
        for code in list(codes):
            uid = codes[code]
            calendar = calendars.get(uid)
            if calendar is None or calendar.name != name or calendar.code != code:
                logger.warning("Dropping index entry %s #%s -> %s", name, code, uid)
                del codes[code]
        if not codes:
            del index[name]

    for uid in list(calendars):
        calendar = calendars[uid]
        codes = index.setdefault(calendar.name, {})
        owner = codes.get(calendar.code)
        if owner == uid:
            continue
        if owner is not None:
            logger.warning(
                "Dropping calendar %s: %s #%s already belongs to %s", uid, calendar.name, calendar.code, owner
            )
            del calendars[uid]
            continue
        logger.warning("Re-indexing calendar %s as %s #%s", uid, calendar.name, calendar.code)
        codes[calendar.code] = uid


__all__ = ["CalendarMap", "JsonPersistence", "NameIndex", "reconcile_index"]
