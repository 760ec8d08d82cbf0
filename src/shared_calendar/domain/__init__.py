"""Calendar and entry records, their validation, and the result types."""

from .entries import Entry, compare_entries, parse_entry_batch, sort_entries, validate_entry, validate_entry_batch
from .errors import ErrorKind, Failure, Ok, Result, fail
from .models import Calendar
from .timeparse import TimeOfDay, compare_times, normalize_date_key, parse_date, parse_date_key, parse_time

__all__ = [
    "Calendar",
    "Entry",
    "ErrorKind",
    "Failure",
    "Ok",
    "Result",
    "TimeOfDay",
    "compare_entries",
    "compare_times",
    "fail",
    "normalize_date_key",
    "parse_date",
    "parse_date_key",
    "parse_entry_batch",
    "parse_time",
    "sort_entries",
    "validate_entry",
    "validate_entry_batch",
]
