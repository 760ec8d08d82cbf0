"""Read-side lookups over a calendar's entries.

Range queries use a containment filter: an entry matches only when the
requested window encloses the entry's whole ``[start, end]`` interval.
Missing bounds on either side default to ``00:00`` and ``24:00``.
"""

from __future__ import annotations

import re
from typing import Any, List, Mapping

from ..domain import (
    Calendar,
    Entry,
    ErrorKind,
    Ok,
    Result,
    TimeOfDay,
    compare_times,
    fail,
    parse_date_key,
    parse_time,
    sort_entries,
)
from ..domain.timeparse import END_OF_DAY, START_OF_DAY

ENTRY_ATTRIBUTES = ("text", "start", "end")

_INDEX_PATTERN = re.compile(r"[0-9]+")


def resolve_index(index: Mapping[str, Mapping[str, str]], name: Any, code: Any) -> Result[str]:
    if name is None:
        return fail(ErrorKind.NAME_MISSING)
    if code is None:
        return fail(ErrorKind.CODE_MISSING)
    uid = index.get(name, {}).get(code) if isinstance(name, str) and isinstance(code, str) else None
    if uid is None:
        return fail(ErrorKind.NOT_FOUND, f"{name} #{code} does not exist")
    return Ok(uid)


def parse_index(value: Any, length: int) -> Result[int]:
    if value is None:
        return fail(ErrorKind.INDEX_MISSING)
    if isinstance(value, bool):
        return fail(ErrorKind.INVALID_INDEX)
    if isinstance(value, str):
        if not _INDEX_PATTERN.fullmatch(value):
            return fail(ErrorKind.INVALID_INDEX)
        position = int(value)
    elif isinstance(value, int):
        if value < 0:
            return fail(ErrorKind.INVALID_INDEX)
        position = value
    else:
        return fail(ErrorKind.INVALID_INDEX)
    if position >= length:
        return fail(ErrorKind.INDEX_OUT_OF_RANGE)
    return Ok(position)


def entries_on_date(calendar: Calendar, day: Any) -> Result[List[Entry]]:
    key = parse_date_key(day)
    if not key.ok:
        return key
    return Ok(list(calendar.entries.get(key.value, [])))


def in_range(entry: Entry, start: TimeOfDay = START_OF_DAY, end: TimeOfDay = END_OF_DAY) -> bool:
    return compare_times(start, entry.effective_start) <= 0 and compare_times(end, entry.effective_end) >= 0


def entries_in_range(
    calendar: Calendar,
    day: Any,
    start: Any = None,
    end: Any = None,
    *,
    ordered: bool = False,
) -> Result[List[Entry]]:
    entries = entries_on_date(calendar, day)
    if not entries.ok:
        return entries
    lower, upper = parse_time(start), parse_time(end)
    if not lower.ok:
        return lower
    if not upper.ok:
        return upper
    matched = [
        entry
        for entry in entries.value
        if in_range(entry, lower.value or START_OF_DAY, upper.value or END_OF_DAY)
    ]
    return Ok(sort_entries(matched) if ordered else matched)


def entry_at(calendar: Calendar, day: Any, index: Any) -> Result[Entry]:
    entries = entries_on_date(calendar, day)
    if not entries.ok:
        return entries
    position = parse_index(index, len(entries.value))
    if not position.ok:
        return position
    return Ok(entries.value[position.value])


def project_attribute(entries: List[Entry], attr: Any) -> Result[List[str]]:
    if attr is None:
        return fail(ErrorKind.ATTRIBUTE_MISSING)
    if attr not in ENTRY_ATTRIBUTES:
        return fail(ErrorKind.INVALID_ATTRIBUTE)
    return Ok([value for value in (getattr(entry, attr) for entry in entries) if value is not None])


__all__ = [
    "ENTRY_ATTRIBUTES",
    "entries_in_range",
    "entries_on_date",
    "entry_at",
    "in_range",
    "parse_index",
    "project_attribute",
    "resolve_index",
]
