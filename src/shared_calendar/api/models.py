from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain import Calendar, Entry


class EntryPayload(BaseModel):
    text: str
    start: Optional[str] = Field(default=None)
    end: Optional[str] = Field(default=None)

    @classmethod
    def from_domain(cls, entry: Entry) -> "EntryPayload":
        return cls(text=entry.text, start=entry.start, end=entry.end)


class CalendarPayload(BaseModel):
    uid: str
    name: str
    code: str
    created: int
    entries: Dict[str, List[EntryPayload]] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, calendar: Calendar) -> "CalendarPayload":
        return cls(
            uid=calendar.id,
            name=calendar.name,
            code=calendar.code,
            created=calendar.created,
            entries={
                day: [EntryPayload.from_domain(entry) for entry in items]
                for day, items in calendar.entries.items()
            },
        )


# Request fields stay untyped; the store does its own validation and error reporting.


class CreateCalendarRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Any = None
    code: Any = None


class UpdateEntriesRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Any = None
    code: Any = None
    date: Any = None
    data: Any = None
    append: Any = None
