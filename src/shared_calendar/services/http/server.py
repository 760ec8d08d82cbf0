from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from ...api import CreateCalendarRequest, UpdateEntriesRequest, serialize_calendar, serialize_entry
from ...core import CalendarStore, entries_in_range, entry_at, project_attribute
from ...domain import Failure, Result

logger = logging.getLogger(__name__)


def _error(failure: Failure) -> JSONResponse:
    return JSONResponse({"error": failure.message}, status_code=failure.status_code)


def _respond(result: Result[Any], status_code: int = 200) -> Response:
    if not result.ok:
        logger.debug("Request rejected: %s (%s)", result.message, result.kind.value)
        return _error(result)
    if result.value is None:
        return Response(status_code=status_code)
    return JSONResponse(result.value, status_code=status_code)


def get_store(request: Request) -> CalendarStore:
    store: Optional[CalendarStore] = request.app.state.store
    if store is None:
        store = CalendarStore.open()
        request.app.state.store = store
    return store


def _entries_for(
    store: CalendarStore,
    name: Optional[str],
    code: Optional[str],
    date: Optional[str],
    start: Optional[str],
    end: Optional[str],
    ordered: bool,
) -> Result[Any]:
    calendar = store.lookup_by_name_code(name, code)
    if not calendar.ok:
        return calendar
    return entries_in_range(calendar.value, date, start, end, ordered=ordered)


def create_app(store: Optional[CalendarStore] = None) -> FastAPI:
    app = FastAPI(title="Shared Calendar API", version="1.0.0")
    app.state.store = store
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def malformed_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.debug("Malformed request for %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse({"error": "An error occurred"}, status_code=400)

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error for %s %s", request.method, request.url.path)
        return JSONResponse({"error": "An error occurred"}, status_code=400)

    @app.get("/all")
    def list_calendars(store: CalendarStore = Depends(get_store)) -> JSONResponse:
        return JSONResponse({"uids": store.list_ids()})

    @app.get("/all/{date}")
    def list_calendars_since(date: str, store: CalendarStore = Depends(get_store)) -> Response:
        result = store.list_ids_created_after(date)
        if not result.ok:
            return _error(result)
        return JSONResponse({"uids": result.value})

    @app.get("/calendar")
    def get_calendar(
        name: Optional[str] = None,
        code: Optional[str] = None,
        store: CalendarStore = Depends(get_store),
    ) -> Response:
        result = store.lookup_by_name_code(name, code)
        if not result.ok:
            return _error(result)
        return JSONResponse(serialize_calendar(result.value))

    @app.get("/calendar/{uid}")
    def get_calendar_by_id(uid: str, store: CalendarStore = Depends(get_store)) -> Response:
        result = store.lookup_by_id(uid)
        if not result.ok:
            return _error(result)
        return JSONResponse(serialize_calendar(result.value))

    @app.post("/new")
    def create_calendar(
        payload: Optional[CreateCalendarRequest] = None,
        store: CalendarStore = Depends(get_store),
    ) -> Response:
        payload = payload or CreateCalendarRequest()
        result = store.create(payload.name, payload.code)
        if not result.ok:
            return _error(result)
        return JSONResponse(serialize_calendar(result.value))

    @app.delete("/delete")
    def delete_calendar(
        name: Optional[str] = None,
        code: Optional[str] = None,
        store: CalendarStore = Depends(get_store),
    ) -> Response:
        return _respond(store.delete(name, code))

    @app.get("/entries")
    def list_entries(
        name: Optional[str] = None,
        code: Optional[str] = None,
        date: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
        sort: bool = False,
        store: CalendarStore = Depends(get_store),
    ) -> Response:
        result = _entries_for(store, name, code, date, start, end, sort)
        if not result.ok:
            return _error(result)
        return JSONResponse({"entries": [serialize_entry(entry) for entry in result.value]})

    @app.get("/entries/{attr}")
    def list_entry_attribute(
        attr: str,
        name: Optional[str] = None,
        code: Optional[str] = None,
        date: Optional[str] = None,
        start: Optional[str] = None,
        end: Optional[str] = None,
        sort: bool = False,
        store: CalendarStore = Depends(get_store),
    ) -> Response:
        # The attribute is checked before the calendar lookup.
        checked = project_attribute([], attr)
        if not checked.ok:
            return _error(checked)
        result = _entries_for(store, name, code, date, start, end, sort)
        if not result.ok:
            return _error(result)
        return JSONResponse({"entries": project_attribute(result.value, attr).value})

    @app.get("/entry")
    def get_entry(
        name: Optional[str] = None,
        code: Optional[str] = None,
        date: Optional[str] = None,
        index: Optional[str] = None,
        store: CalendarStore = Depends(get_store),
    ) -> Response:
        calendar = store.lookup_by_name_code(name, code)
        if not calendar.ok:
            return _error(calendar)
        result = entry_at(calendar.value, date, index)
        if not result.ok:
            return _error(result)
        return JSONResponse(serialize_entry(result.value))

    @app.post("/update")
    def update_entries(
        payload: Optional[UpdateEntriesRequest] = None,
        store: CalendarStore = Depends(get_store),
    ) -> Response:
        payload = payload or UpdateEntriesRequest()
        calendar = store.lookup_by_name_code(payload.name, payload.code)
        if not calendar.ok:
            return _error(calendar)
        return _respond(
            store.set_entries_for_date(calendar.value, payload.date, payload.data, payload.append),
            status_code=201,
        )

    @app.delete("/entries")
    def delete_entries(
        name: Optional[str] = None,
        code: Optional[str] = None,
        date: Optional[str] = None,
        index: Optional[str] = None,
        store: CalendarStore = Depends(get_store),
    ) -> Response:
        calendar = store.lookup_by_name_code(name, code)
        if not calendar.ok:
            return _error(calendar)
        return _respond(store.delete_entries_for_date(calendar.value, date, index))

    return app


app = create_app()


def run_local_server(host: Optional[str] = None, port: Optional[int] = None) -> None:
    import asyncio
    from hypercorn.asyncio import serve
    from hypercorn.config import Config

    from ...config import get_settings

    settings = get_settings().server
    config = Config()
    config.bind = [f"{host or settings.host}:{port or settings.port}"]
    logger.info("Serving shared calendar API on %s", config.bind[0])
    asyncio.run(serve(app, config))
