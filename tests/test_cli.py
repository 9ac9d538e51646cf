# tests/test_cli.py

from __future__ import annotations

import logging

import pytest

from taskboard.cli import main as cli_main


@pytest.fixture()
def wired(monkeypatch: pytest.MonkeyPatch, settings):
    calls: dict[str, list] = {"logging": [], "uvicorn": [], "board": []}

    monkeypatch.setattr(cli_main, "get_settings", lambda: settings)
    monkeypatch.setattr(
        cli_main, "setup_logging", lambda **kw: calls["logging"].append(kw)
    )
    monkeypatch.setattr(
        cli_main.uvicorn, "run", lambda app, **kw: calls["uvicorn"].append((app, kw))
    )
    monkeypatch.setattr(
        cli_main, "run_console_loop", lambda board, **kw: calls["board"].append((board, kw))
    )
    return calls


def test_serve_is_the_default_command(wired, settings) -> None:
    cli_main.main([])

    (app, kw), = wired["uvicorn"]
    assert kw == {"host": "127.0.0.1", "port": 5000, "log_config": None}
    assert app.state.store.backend_name == "file"
    assert wired["logging"][0]["log_dir"] == settings.data_dir


def test_serve_flags_override_settings(wired) -> None:
    cli_main.main(["serve", "--host", "0.0.0.0", "--port", "8123"])

    (_, kw), = wired["uvicorn"]
    assert kw["host"] == "0.0.0.0"
    assert kw["port"] == 8123


def test_board_command_runs_console(wired) -> None:
    cli_main.main(["board"])

    (board, kw), = wired["board"]
    assert board.tasks == []
    assert kw == {"app_name": "taskboard-test"}
    assert wired["uvicorn"] == []
    assert wired["logging"][0]["console_level"] >= logging.WARNING
