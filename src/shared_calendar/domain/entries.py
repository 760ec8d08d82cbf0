"""Entry model, validation and ordering.

An entry is written either as an object ``{"text", "start"?, "end"?}`` or, for
older clients, as a bare string. Both forms become an :class:`Entry` at the
boundary so nothing downstream needs to know about the shorthand.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Dict, Iterable, List, Optional

from .errors import ErrorKind, Ok, Result, fail
from .timeparse import END_OF_DAY, START_OF_DAY, TimeOfDay, compare_times, is_valid_time, parse_time

ENTRY_FIELDS = frozenset({"text", "start", "end"})


@dataclass(frozen=True, slots=True)
class Entry:
    text: str
    start: Optional[str] = None
    end: Optional[str] = None

    @classmethod
    def from_record(cls, record: Any) -> "Entry":
        if isinstance(record, str):
            return cls(text=record)
        return cls(text=str(record["text"]), start=record.get("start"), end=record.get("end"))

    def to_record(self) -> Dict[str, str]:
        record = {"text": self.text}
        if self.start is not None:
            record["start"] = self.start
        if self.end is not None:
            record["end"] = self.end
        return record

    @property
    def effective_start(self) -> TimeOfDay:
        return _effective(self.start, START_OF_DAY)

    @property
    def effective_end(self) -> TimeOfDay:
        return _effective(self.end, END_OF_DAY)


def _effective(value: Optional[str], default: TimeOfDay) -> TimeOfDay:
    parsed = parse_time(value)
    if parsed.ok and parsed.value is not None:
        return parsed.value
    return default


def validate_entry(entry: Any) -> bool:
    if isinstance(entry, str):
        return bool(entry)
    if not isinstance(entry, dict):
        return False
    text = entry.get("text")
    if not isinstance(text, str) or not text:
        return False
    if not is_valid_time(entry.get("start")) or not is_valid_time(entry.get("end")):
        return False
    return set(entry) <= ENTRY_FIELDS


def validate_entry_batch(entries: Any) -> bool:
    return isinstance(entries, list) and all(validate_entry(entry) for entry in entries)


def parse_entry_batch(data: Any) -> Result[List[Entry]]:
    if data is None:
        return fail(ErrorKind.ENTRY_DATA_MISSING)
    if not isinstance(data, list):
        return fail(ErrorKind.INVALID_ENTRY_DATA)
    if not validate_entry_batch(data):
        return fail(ErrorKind.INVALID_ENTRY)
    return Ok([Entry.from_record(item) for item in data])


def compare_entries(first: Entry, second: Entry) -> int:
    by_start = compare_times(first.effective_start, second.effective_start)
    if by_start:
        return by_start
    return compare_times(first.effective_end, second.effective_end)


def sort_entries(entries: Iterable[Entry]) -> List[Entry]:
    return sorted(entries, key=cmp_to_key(compare_entries))


__all__ = [
    "ENTRY_FIELDS",
    "Entry",
    "compare_entries",
    "parse_entry_batch",
    "sort_entries",
    "validate_entry",
    "validate_entry_batch",
]
