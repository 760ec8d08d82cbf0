from __future__ import annotations

from typing import Any, Dict

from ..domain import Calendar, Entry
from .models import CalendarPayload, EntryPayload


def serialize_calendar(calendar: Calendar) -> Dict[str, Any]:
    return CalendarPayload.from_domain(calendar).model_dump(exclude_none=True)


def serialize_entry(entry: Entry) -> Dict[str, Any]:
    return EntryPayload.from_domain(entry).model_dump(exclude_none=True)
