"""HTTP contract for the calendar routes (status codes, bodies, error strings)."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from shared_calendar.core import CalendarStore
from shared_calendar.services.http import create_app

DAY = "22-8-2022"


@pytest.fixture
def seeded(store: CalendarStore) -> CalendarStore:
    test_calendar = store.create("Test Calendar", "1234").value
    store.set_entries_for_date(
        test_calendar,
        DAY,
        [
            {"text": "t1", "start": "09:00"},
            {"text": "t2", "start": "11:00", "end": "12:00"},
            "legacy",
        ],
    )
    store.create("Delete Me", "0000")
    return store


@pytest.fixture
def client(seeded: CalendarStore) -> TestClient:
    return TestClient(create_app(seeded))


def test_get_calendar(client: TestClient) -> None:
    assert client.get("/calendar").json() == {"error": "Calendar name missing"}
    res = client.get("/calendar", params={"name": "Test Calendar"})
    assert res.status_code == 400
    assert res.json()["error"] == "Calendar code missing"

    res = client.get("/calendar", params={"name": "Test Calendar", "code": "1234"})
    assert res.status_code == 200
    body = res.json()
    assert body["name"] == "Test Calendar"
    assert body["code"] == "1234"
    assert body["entries"][DAY][2] == {"text": "legacy"}


def test_get_calendar_by_uid(client: TestClient) -> None:
    res = client.get("/calendar/not-a-valid-uid")
    assert res.status_code == 400
    assert res.json()["error"] == "No calendar exists with UID : not-a-valid-uid"

    uid = client.get("/calendar", params={"name": "Test Calendar", "code": "1234"}).json()["uid"]
    assert client.get(f"/calendar/{uid}").json()["uid"] == uid


def test_post_new(client: TestClient) -> None:
    res = client.post("/new", json={})
    assert res.status_code == 400
    assert res.json()["error"] == "Invalid calendar name"

    res = client.post("/new", json={"name": "Test Calendar", "code": "1234"})
    assert res.json()["error"] == "Test Calendar #1234 already exists"

    res = client.post("/new", json={"name": "newcalendar", "code": "9876"})
    assert res.status_code == 200
    assert res.json()["code"] == "9876"
    assert res.json()["entries"] == {}

    res = client.post("/new", json={"name": "Test Calendar"})
    assert res.status_code == 200
    assert res.json()["code"].isdigit()
    assert res.json()["code"] != "1234"


def test_delete_calendar(client: TestClient) -> None:
    assert client.delete("/delete").json()["error"] == "Calendar name missing"
    assert client.delete("/delete", params={"name": "Delete Me"}).json()["error"] == "Calendar code missing"
    assert client.delete("/delete", params={"name": "Delete Me", "code": "0000"}).status_code == 200
    assert client.get("/calendar", params={"name": "Delete Me", "code": "0000"}).status_code == 400


def test_list_all(client: TestClient) -> None:
    assert len(client.get("/all").json()["uids"]) == 2
    assert client.get("/all/notAdate").json()["error"] == "Invalid Date"
    assert client.get("/all/30-2-2022").json()["error"] == "Invalid Date"
    assert len(client.get("/all/2-2-1970").json()["uids"]) == 2
    assert client.get("/all/1-1-3000").json()["uids"] == []


def test_get_entries(client: TestClient) -> None:
    query = {"name": "Test Calendar", "code": "1234"}
    assert client.get("/entries", params=query).json()["error"] == "No date specified"
    assert client.get("/entries", params={**query, "date": "notAdate"}).json()["error"] == "Invalid Date"
    assert len(client.get("/entries", params={**query, "date": DAY}).json()["entries"]) == 3
    assert client.get("/entries", params={**query, "date": "1-1-3000"}).json()["entries"] == []

    res = client.get("/entries", params={**query, "date": DAY, "start": "aa:bb"})
    assert res.status_code == 400
    assert res.json()["error"] == "Invalid start/end time"

    res = client.get("/entries", params={**query, "date": DAY, "start": "10:00", "end": "20:00"})
    assert res.json()["entries"] == [{"text": "t2", "start": "11:00", "end": "12:00"}]


def test_get_entries_sorted(client: TestClient) -> None:
    params = {"name": "Test Calendar", "code": "1234", "date": DAY, "sort": "true"}
    texts = [entry["text"] for entry in client.get("/entries", params=params).json()["entries"]]
    assert texts == ["legacy", "t1", "t2"]


def test_get_entry_attribute(client: TestClient) -> None:
    assert client.get("/entries/text").json()["error"] == "Calendar name missing"
    res = client.get("/entries/text", params={"name": "Not Valid", "code": "abcd"})
    assert res.json()["error"] == "Not Valid #abcd does not exist"

    query = {"name": "Test Calendar", "code": "1234", "date": DAY}
    assert client.get("/entries/example", params=query).json()["error"] == "Invalid attribute"
    assert client.get("/entries/text", params=query).json()["entries"] == ["t1", "t2", "legacy"]
    assert client.get("/entries/start", params=query).json()["entries"] == ["09:00", "11:00"]


def test_get_entry(client: TestClient) -> None:
    query = {"name": "Test Calendar", "code": "1234", "date": DAY}
    assert client.get("/entry", params=query).json()["error"] == "Entry Index is missing"
    assert client.get("/entry", params={**query, "index": "x"}).json()["error"] == "Invalid Index"
    assert client.get("/entry", params={**query, "index": "5"}).json()["error"] == "Index out of range"
    assert client.get("/entry", params={**query, "index": "0"}).json() == {"text": "t1", "start": "09:00"}


def test_post_update(client: TestClient) -> None:
    body = {"name": "Test Calendar", "code": "1234", "date": "1-9-2022"}
    assert client.post("/update", json=body).json()["error"] == "No Entry Data"
    assert client.post("/update", json={**body, "data": "x"}).json()["error"] == "Data must be an array of entry objects"
    res = client.post("/update", json={**body, "data": [{"text": "a", "bad": 1}]})
    assert res.json()["error"] == "Data included an Invalid Entry"
    assert client.post("/update", json={**body, "data": ["a"], "append": "yes"}).json()["error"] == "Invalid append"

    assert client.post("/update", json={**body, "data": ["a"]}).status_code == 201
    assert client.post("/update", json={**body, "data": [{"text": "b"}], "append": True}).status_code == 201
    params = {"name": "Test Calendar", "code": "1234", "date": "01-09-2022"}
    assert client.get("/entries/text", params=params).json()["entries"] == ["a", "b"]


def test_delete_entries(client: TestClient) -> None:
    query = {"name": "Test Calendar", "code": "1234", "date": DAY}
    assert client.delete("/entries", params={**query, "index": "9"}).json()["error"] == "Index out of range"
    assert client.delete("/entries", params={**query, "index": "1"}).status_code == 200
    assert client.get("/entries/text", params=query).json()["entries"] == ["t1", "legacy"]

    assert client.delete("/entries", params=query).status_code == 200
    assert client.get("/entries", params=query).json()["entries"] == []
    assert client.delete("/entries", params={**query, "date": "1-1-3000"}).status_code == 200


@pytest.mark.parametrize(
    "method, path, kwargs",
    [
        ("post", "/update", {"content": b"{not json", "headers": {"Content-Type": "application/json"}}),
        ("post", "/new", {"content": b"{not json", "headers": {"Content-Type": "application/json"}}),
        ("post", "/new", {"json": ["Test Calendar"]}),
        ("get", "/entries", {"params": {"name": "Test Calendar", "code": "1234", "date": DAY, "sort": "maybe"}}),
    ],
)
def test_malformed_requests_answer_400(client: TestClient, method: str, path: str, kwargs) -> None:
    res = client.request(method.upper(), path, **kwargs)
    assert res.status_code == 400
    assert res.json() == {"error": "An error occurred"}
