from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Generic, Optional, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    NAME_MISSING = "name_missing"
    CODE_MISSING = "code_missing"
    ID_MISSING = "id_missing"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    INVALID_NAME = "invalid_name"
    DATE_MISSING = "date_missing"
    INVALID_DATE = "invalid_date"
    INVALID_TIME = "invalid_time"
    INDEX_MISSING = "index_missing"
    INVALID_INDEX = "invalid_index"
    INDEX_OUT_OF_RANGE = "index_out_of_range"
    ENTRY_DATA_MISSING = "entry_data_missing"
    INVALID_ENTRY_DATA = "invalid_entry_data"
    INVALID_ENTRY = "invalid_entry"
    INVALID_APPEND = "invalid_append"
    ATTRIBUTE_MISSING = "attribute_missing"
    INVALID_ATTRIBUTE = "invalid_attribute"
    STORAGE = "storage"


# Client-facing messages; existing clients match on these strings.
DEFAULT_MESSAGES = {
    ErrorKind.NAME_MISSING: "Calendar name missing",
    ErrorKind.CODE_MISSING: "Calendar code missing",
    ErrorKind.ID_MISSING: "UUID missing",
    ErrorKind.NOT_FOUND: "Calendar does not exist",
    ErrorKind.ALREADY_EXISTS: "Calendar already exists",
    ErrorKind.INVALID_NAME: "Invalid calendar name",
    ErrorKind.DATE_MISSING: "No date specified",
    ErrorKind.INVALID_DATE: "Invalid Date",
    ErrorKind.INVALID_TIME: "Invalid start/end time",
    ErrorKind.INDEX_MISSING: "Entry Index is missing",
    ErrorKind.INVALID_INDEX: "Invalid Index",
    ErrorKind.INDEX_OUT_OF_RANGE: "Index out of range",
    ErrorKind.ENTRY_DATA_MISSING: "No Entry Data",
    ErrorKind.INVALID_ENTRY_DATA: "Data must be an array of entry objects",
    ErrorKind.INVALID_ENTRY: "Data included an Invalid Entry",
    ErrorKind.INVALID_APPEND: "Invalid append",
    ErrorKind.ATTRIBUTE_MISSING: "Entry attribute missing",
    ErrorKind.INVALID_ATTRIBUTE: "Invalid attribute",
    ErrorKind.STORAGE: "An error occurred",
}


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    ok: ClassVar[bool] = True


@dataclass(frozen=True, slots=True)
class Failure:
    kind: ErrorKind
    message: str
    status_code: int = 400

    ok: ClassVar[bool] = False


Result = Union[Ok[T], Failure]


def fail(kind: ErrorKind, message: Optional[str] = None) -> Failure:
    status_code = 500 if kind is ErrorKind.STORAGE else 400
    return Failure(kind=kind, message=message or DEFAULT_MESSAGES[kind], status_code=status_code)


__all__ = ["DEFAULT_MESSAGES", "ErrorKind", "Failure", "Ok", "Result", "fail"]
