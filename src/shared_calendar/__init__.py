"""Shared calendar application package."""

from __future__ import annotations

from .core import CalendarStore, JsonPersistence
from .domain import Calendar, Entry, ErrorKind, Failure, Ok

__all__ = ["Calendar", "CalendarStore", "Entry", "ErrorKind", "Failure", "JsonPersistence", "Ok", "main"]


def main() -> None:
    from .cli import main as cli_main

    raise SystemExit(cli_main())
