"""Calendar store, query engine and persistence."""

from .calendar_store import CODE_WINDOW, CalendarStore
from .persistence import JsonPersistence, reconcile_index
from .query import (
    ENTRY_ATTRIBUTES,
    entries_in_range,
    entries_on_date,
    entry_at,
    in_range,
    parse_index,
    project_attribute,
)

__all__ = [
    "CODE_WINDOW",
    "CalendarStore",
    "ENTRY_ATTRIBUTES",
    "JsonPersistence",
    "entries_in_range",
    "entries_on_date",
    "entry_at",
    "in_range",
    "parse_index",
    "project_attribute",
    "reconcile_index",
]
