from __future__ import annotations

import logging

import pytest

from shared_calendar import cli
from shared_calendar.config import LoggingSettings, get_settings
from shared_calendar.core import CalendarStore, JsonPersistence
from shared_calendar.logging import configure_logging, resolve_level


@pytest.fixture
def env_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("SHARED_CALENDAR_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("SHARED_CALENDAR_PORT", "not-a-port")
    monkeypatch.setenv("SHARED_CALENDAR_LOG_LEVEL", "debug")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


def test_settings_read_environment(env_settings, tmp_path) -> None:
    assert env_settings.storage.data_path == tmp_path / "calendarData.json"
    assert env_settings.storage.map_path == tmp_path / "calendarMap.json"
    assert env_settings.server.port == 8000
    assert env_settings.logging.level == "DEBUG"
    assert env_settings.logging.log_file == tmp_path / "shared_calendar.log"


def test_persistence_from_settings(env_settings) -> None:
    persistence = JsonPersistence.from_settings()
    assert persistence.data_path == env_settings.storage.data_path


def test_cli_lists_calendars(env_settings, monkeypatch, capsys) -> None:
    monkeypatch.setattr(cli, "configure_logging", lambda: None)
    created = CalendarStore.open().create("Test Calendar", "1234").value

    assert cli.main(["list"]) == 0
    assert capsys.readouterr().out.split() == [created.id]

    assert cli.main(["list", "--since", "1-1-3000"]) == 0
    assert capsys.readouterr().out == ""

    assert cli.main(["list", "--since", "30-2-2022"]) == 1
    assert "Invalid Date" in capsys.readouterr().err


def test_resolve_level_prefers_argument_and_falls_back_to_info(tmp_path) -> None:
    settings = LoggingSettings(level="WARNING", log_file=tmp_path / "x.log")
    assert resolve_level(None, settings) == logging.WARNING
    assert resolve_level("debug", settings) == logging.DEBUG
    assert resolve_level("chatty", settings) == logging.INFO


def test_configure_logging_installs_handlers_once(env_settings, tmp_path) -> None:
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    log_file = tmp_path / "logs" / "calendar.log"
    try:
        configure_logging("debug", log_path=log_file)
        configure_logging("debug", log_path=log_file)
        added = [handler for handler in root.handlers if handler not in before]
        assert len(added) == 2
        assert root.level == logging.DEBUG
        assert log_file.parent.is_dir()
    finally:
        for handler in root.handlers[:]:
            if handler not in before:
                root.removeHandler(handler)
                handler.close()
        root.setLevel(level)
