from __future__ import annotations

import pytest

from board_service import __main__ as cli
from board_service.application.exceptions import StartupError
from board_service.config import Settings


@pytest.fixture
def base() -> Settings:
    return Settings(_env_file=None, BOARD_STORE="memory", DB_CONN_STRING=None)


def test_defaults_come_from_settings(base):
    resolved = cli.resolve_settings([], base)

    assert resolved.HOST == "127.0.0.1"
    assert resolved.PORT == 3000
    assert resolved.BOARD_TITLE == "TestChat"
    assert resolved.BOARD_STORE == "memory"


def test_flags_override_settings(base):
    resolved = cli.resolve_settings(
        ["--host", "0.0.0.0", "-p", "8080", "-t", "Lobby", "--log-level", "debug"],
        base,
    )

    assert resolved.HOST == "0.0.0.0"
    assert resolved.PORT == 8080
    assert resolved.BOARD_TITLE == "Lobby"
    assert resolved.LOG_LEVEL == "DEBUG"


def test_unknown_log_level_is_a_usage_error(base, capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.resolve_settings(["--log-level", "bogus"], base)

    assert exc_info.value.code == 2
    assert "--log-level" in capsys.readouterr().err


def test_log_level_from_environment_is_normalized(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "warning")
    assert Settings(_env_file=None).LOG_LEVEL == "WARNING"


def test_unknown_log_level_in_environment_is_rejected(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "bogus")
    with pytest.raises(ValueError):
        Settings(_env_file=None)


def test_database_flag_selects_database_store(base):
    resolved = cli.resolve_settings(["-d", "sqlite+aiosqlite:///board.db"], base)

    assert resolved.BOARD_STORE == "database"
    assert resolved.DB_CONN_STRING == "sqlite+aiosqlite:///board.db"


def test_connection_string_falls_back_to_environment(monkeypatch):
    monkeypatch.setenv("DB_CONN_STRING", "sqlite+aiosqlite:///env.db")
    base = Settings(_env_file=None)

    resolved = cli.resolve_settings(["--store", "database"], base)

    assert resolved.DB_CONN_STRING == "sqlite+aiosqlite:///env.db"


@pytest.mark.asyncio
async def test_database_store_without_connection_string_fails(base):
    settings = base.model_copy(update={"BOARD_STORE": "database"})

    with pytest.raises(StartupError):
        await cli.check_startup(settings)


def test_main_exits_non_zero_on_startup_error(monkeypatch, base):
    monkeypatch.setattr(cli, "default_settings", base)
    monkeypatch.setattr(cli.uvicorn, "run", lambda *a, **kw: pytest.fail("server started"))

    assert cli.main(["--store", "database"]) == 1


def test_main_serves_app_with_resolved_settings(monkeypatch, base):
    calls = {}
    monkeypatch.setattr(cli, "default_settings", base)
    monkeypatch.setattr(cli.uvicorn, "run", lambda app, **kw: calls.update(app=app, **kw))

    assert cli.main(["--port", "4000", "--title", "Lobby"]) == 0
    assert calls["port"] == 4000
    assert calls["host"] == "127.0.0.1"
    assert calls["app"].state.metadata.title == "Lobby"
