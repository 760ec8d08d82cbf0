"""Request and response models for the HTTP surface."""

from __future__ import annotations

from .models import CalendarPayload, CreateCalendarRequest, EntryPayload, UpdateEntriesRequest
from .serializers import serialize_calendar, serialize_entry

__all__ = [
    "CalendarPayload",
    "CreateCalendarRequest",
    "EntryPayload",
    "UpdateEntriesRequest",
    "serialize_calendar",
    "serialize_entry",
]
