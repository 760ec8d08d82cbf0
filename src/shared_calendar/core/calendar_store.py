from __future__ import annotations

import logging
import random
from copy import deepcopy
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, TypeVar

from ..domain import Calendar, ErrorKind, Failure, Ok, Result, fail, parse_date, parse_date_key, parse_entry_batch
from .persistence import CalendarMap, JsonPersistence, NameIndex
from .query import parse_index, resolve_index

logger = logging.getLogger(__name__)

T = TypeVar("T")

CODE_WINDOW = 10_000


class CalendarStore:
    """In-memory calendar records plus the ``name -> code -> id`` index.

    Both maps are private; every mutation goes through a store method and is
    written back through the persistence collaborator before returning.
    """

    def __init__(
        self,
        persistence: JsonPersistence,
        calendars: Optional[CalendarMap] = None,
        index: Optional[NameIndex] = None,
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._persistence = persistence
        self._calendars: CalendarMap = calendars if calendars is not None else {}
        self._index: NameIndex = index if index is not None else {}
        self._rng = rng or random.Random()

    @classmethod
    def open(cls, persistence: Optional[JsonPersistence] = None, *, rng: Optional[random.Random] = None) -> "CalendarStore":
        source = persistence or JsonPersistence.from_settings()
        calendars, index = source.load()
        logger.info("Calendar store opened with %d calendars", len(calendars))
        return cls(source, calendars, index, rng=rng)

    def reload(self, persistence: Optional[JsonPersistence] = None) -> None:
        source = persistence or self._persistence
        calendars, index = source.load()
        self._persistence, self._calendars, self._index = source, calendars, index
        logger.info("Calendar store reloaded with %d calendars", len(calendars))

    def _persist(self) -> Optional[Failure]:
        try:
            self._persistence.save(self._calendars, self._index)
        except OSError:
            logger.exception("Failed to persist calendar store")
            return fail(ErrorKind.STORAGE)
        return None

    def _mutate(self, callback: Callable[[], T]) -> Result[T]:
        calendars, index = deepcopy(self._calendars), deepcopy(self._index)
        result = callback()
        failure = self._persist()
        if failure is not None:
            self._calendars, self._index = calendars, index
            return failure
        return Ok(result)

    # Calendars

    def _generate_code(self, name: str) -> str:
        taken = self._index.get(name, {})
        attempt = 0
        while True:
            low = attempt * CODE_WINDOW
            code = str(self._rng.randrange(low, low + CODE_WINDOW))
            if code not in taken:
                return code
            attempt += 1

    def create(self, name: Any, code: Any = None) -> Result[Calendar]:
        if not isinstance(name, str) or not name:
            return fail(ErrorKind.INVALID_NAME)
        if isinstance(code, str):
            if code in self._index.get(name, {}):
                return fail(ErrorKind.ALREADY_EXISTS, f"{name} #{code} already exists")
        else:
            code = self._generate_code(name)

        calendar = Calendar.new(name, code)

        def _insert() -> Calendar:
            self._calendars[calendar.id] = calendar
            self._index.setdefault(name, {})[code] = calendar.id
            return deepcopy(calendar)

        result = self._mutate(_insert)
        if result.ok:
            logger.info("Created calendar %s #%s (%s)", name, code, calendar.id)
        return result

    def _resolve(self, name: Any, code: Any) -> Result[Calendar]:
        resolved = resolve_index(self._index, name, code)
        if not resolved.ok:
            return resolved
        return Ok(self._calendars[resolved.value])

    def lookup_by_name_code(self, name: Any, code: Any) -> Result[Calendar]:
        resolved = self._resolve(name, code)
        if not resolved.ok:
            return resolved
        return Ok(deepcopy(resolved.value))

    def lookup_by_id(self, calendar_id: Any) -> Result[Calendar]:
        if not calendar_id:
            return fail(ErrorKind.ID_MISSING)
        calendar = self._calendars.get(calendar_id) if isinstance(calendar_id, str) else None
        if calendar is None:
            return fail(ErrorKind.NOT_FOUND, f"No calendar exists with UID : {calendar_id}")
        return Ok(deepcopy(calendar))

    def delete(self, name: Any, code: Any) -> Result[None]:
        resolved = self._resolve(name, code)
        if not resolved.ok:
            return resolved
        calendar = resolved.value

        def _remove() -> None:
            del self._calendars[calendar.id]
            codes = self._index[calendar.name]
            del codes[calendar.code]
            if not codes:
                del self._index[calendar.name]

        result = self._mutate(_remove)
        if result.ok:
            logger.info("Deleted calendar %s #%s (%s)", calendar.name, calendar.code, calendar.id)
        return result

    def list_ids(self) -> List[str]:
        return list(self._calendars)

    def list_ids_created_after(self, day: Any) -> Result[List[str]]:
        parsed = parse_date(day)
        if not parsed.ok:
            return parsed
        threshold = datetime(parsed.value.year, parsed.value.month, parsed.value.day, tzinfo=timezone.utc)
        cutoff = int(threshold.timestamp() * 1000)
        return Ok([uid for uid, calendar in self._calendars.items() if calendar.created > cutoff])

    # Entries

    def _live(self, calendar: Calendar) -> Result[Calendar]:
        live = self._calendars.get(calendar.id)
        if live is None:
            return fail(ErrorKind.NOT_FOUND, f"{calendar.name} #{calendar.code} does not exist")
        return Ok(live)

    def set_entries_for_date(self, calendar: Calendar, day: Any, data: Any, append: Any = None) -> Result[None]:
        key = parse_date_key(day)
        if not key.ok:
            return key
        entries = parse_entry_batch(data)
        if not entries.ok:
            return entries
        if append is not None and not isinstance(append, bool):
            return fail(ErrorKind.INVALID_APPEND)
        live = self._live(calendar)
        if not live.ok:
            return live
        target, date_key, new_entries = live.value, key.value, entries.value

        def _apply() -> None:
            if not new_entries:
                target.entries.pop(date_key, None)
            elif append and date_key in target.entries:
                target.entries[date_key].extend(new_entries)
            else:
                target.entries[date_key] = list(new_entries)

        result = self._mutate(_apply)
        if result.ok:
            logger.debug("Updated %d entries on %s for %s", len(new_entries), date_key, target.id)
        return result

    def delete_entries_for_date(self, calendar: Calendar, day: Any, index: Any = None) -> Result[None]:
        key = parse_date_key(day)
        if not key.ok:
            return key
        live = self._live(calendar)
        if not live.ok:
            return live
        target, date_key = live.value, key.value
        entries = target.entries.get(date_key)
        if entries is None:
            return Ok(None)

        if index is None:

            def _drop() -> None:
                del target.entries[date_key]

            return self._mutate(_drop)

        position = parse_index(index, len(entries))
        if not position.ok:
            return position

        def _remove() -> None:
            if len(entries) == 1:
                del target.entries[date_key]
            else:
                del entries[position.value]

        return self._mutate(_remove)


__all__ = ["CODE_WINDOW", "CalendarStore"]
