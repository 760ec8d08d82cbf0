from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .entries import Entry, validate_entry
from .timeparse import normalize_date_key, parse_date

logger = logging.getLogger(__name__)


def _now_millis() -> int:
    return int(time.time() * 1000)


def _entries_from_record(raw: Dict[str, Any]) -> Dict[str, List[Entry]]:
    # Older files may hold zero-padded keys; merge them under the normalized key.
    entries: Dict[str, List[Entry]] = {}
    for day, items in raw.items():
        if not isinstance(items, list):
            logger.warning("Skipping malformed entries on %s: %r", day, items)
            continue
        key = normalize_date_key(day) if parse_date(day).ok else str(day)
        for item in items:
            if not validate_entry(item):
                logger.warning("Skipping malformed entry on %s: %r", day, item)
                continue
            entries.setdefault(key, []).append(Entry.from_record(item))
    return entries


@dataclass(slots=True)
class Calendar:
    id: str
    name: str
    code: str
    created: int = field(default_factory=_now_millis)
    entries: Dict[str, List[Entry]] = field(default_factory=dict)

    @classmethod
    def new(cls, name: str, code: str) -> "Calendar":
        return cls(id=str(uuid.uuid4()), name=name, code=code)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Calendar":
        return cls(
            id=str(record.get("uid") or record["id"]),
            name=str(record["name"]),
            code=str(record["code"]),
            created=int(record.get("created") or 0),
            entries=_entries_from_record(record.get("entries") or {}),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "uid": self.id,
            "name": self.name,
            "code": self.code,
            "created": self.created,
            "entries": {day: [entry.to_record() for entry in items] for day, items in self.entries.items()},
        }
