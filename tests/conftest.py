from __future__ import annotations

import random

import pytest

from shared_calendar.core import CalendarStore, JsonPersistence


@pytest.fixture
def persistence(tmp_path) -> JsonPersistence:
    return JsonPersistence(tmp_path / "calendarData.json", tmp_path / "calendarMap.json")


@pytest.fixture
def store(persistence) -> CalendarStore:
    return CalendarStore.open(persistence, rng=random.Random(7))


@pytest.fixture
def calendar(store):
    return store.create("Test Calendar", "1234").value
