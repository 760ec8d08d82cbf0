"""Parsing and comparison of ``D-M-YYYY`` dates and ``H:MM`` times.

Dates and times are opaque local values; no timezone is ever attached.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Union

from .errors import ErrorKind, Ok, Result, fail

_DATE_PART = re.compile(r"[0-9]+")
_TIME_PATTERN = re.compile(r"([0-9]{1,2}):([0-9]{2})")


@dataclass(frozen=True, slots=True, order=True)
class TimeOfDay:
    hour: int
    minute: int

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


START_OF_DAY = TimeOfDay(0, 0)
END_OF_DAY = TimeOfDay(24, 0)


def _split_date(value: str) -> Optional[tuple[int, int, int]]:
    parts = value.split("-")
    if len(parts) != 3 or not all(_DATE_PART.fullmatch(part) for part in parts):
        return None
    day, month, year = (int(part) for part in parts)
    return day, month, year


def parse_date(value: Any) -> Result[date]:
    if value is None:
        return fail(ErrorKind.DATE_MISSING)
    if not isinstance(value, str):
        return fail(ErrorKind.INVALID_DATE)
    parts = _split_date(value)
    if parts is None:
        return fail(ErrorKind.INVALID_DATE)
    day, month, year = parts
    try:
        return Ok(date(year, month, day))
    except ValueError:
        return fail(ErrorKind.INVALID_DATE)


def normalize_date_key(value: str) -> str:
    """Render ``value`` without zero padding so ``01-02-2022`` keys as ``1-2-2022``."""

    parts = _split_date(value)
    if parts is None:
        raise ValueError(f"Unsupported date value: {value!r}")
    day, month, year = parts
    return f"{day}-{month}-{year}"


def parse_date_key(value: Any) -> Result[str]:
    parsed = parse_date(value)
    if not parsed.ok:
        return parsed
    return Ok(normalize_date_key(value))


def parse_time(value: Any) -> Result[Optional[TimeOfDay]]:
    if value is None:
        return Ok(None)
    if not isinstance(value, str):
        return fail(ErrorKind.INVALID_TIME)
    match = _TIME_PATTERN.fullmatch(value)
    if match is None:
        return fail(ErrorKind.INVALID_TIME)
    hour, minute = int(match.group(1)), int(match.group(2))
    if 0 <= hour <= 23 and 0 <= minute <= 59:
        return Ok(TimeOfDay(hour, minute))
    if hour == 24 and minute == 0:
        return Ok(END_OF_DAY)
    return fail(ErrorKind.INVALID_TIME)


def is_valid_time(value: Any) -> bool:
    return parse_time(value).ok


def _coerce(value: Union[str, TimeOfDay]) -> TimeOfDay:
    if isinstance(value, TimeOfDay):
        return value
    parsed = parse_time(value)
    if not parsed.ok or parsed.value is None:
        raise ValueError(f"Unsupported time value: {value!r}")
    return parsed.value


def compare_times(first: Union[str, TimeOfDay], second: Union[str, TimeOfDay]) -> int:
    left, right = _coerce(first), _coerce(second)
    if left == right:
        return 0
    return -1 if left < right else 1


__all__ = [
    "END_OF_DAY",
    "START_OF_DAY",
    "TimeOfDay",
    "compare_times",
    "is_valid_time",
    "normalize_date_key",
    "parse_date",
    "parse_date_key",
    "parse_time",
]
