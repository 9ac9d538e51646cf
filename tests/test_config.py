# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from taskboard.cli.bootstrap import create_board, create_task_store
from taskboard.config import STORAGE_FILE, STORAGE_MEMORY, Settings

_VARS = (
    "TODO_APP_NAME",
    "TODO_ENV",
    "TODO_LOG_LEVEL",
    "TODO_HOST",
    "TODO_PORT",
    "PORT",
    "TODO_STORAGE",
    "TODO_DATA_DIR",
    "TODO_TASKS_PATH",
    "TODO_CORS_ORIGINS",
    "TODO_BOARD_DARK_MODE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    s = Settings.from_env()

    assert s.app_name == "taskboard"
    assert s.environment == "development"
    assert s.is_production is False
    assert s.port == 5000
    assert s.storage == STORAGE_FILE
    assert s.data_dir == Path(".local/taskboard")
    assert s.tasks_path == Path(".local/taskboard/todos.json")
    assert s.cors_origins == ["*"]
    assert s.board_dark_mode is False


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TODO_ENV", "Production")
    monkeypatch.setenv("TODO_PORT", "8080")
    monkeypatch.setenv("TODO_STORAGE", "memory")
    monkeypatch.setenv("TODO_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TODO_CORS_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("TODO_BOARD_DARK_MODE", "yes")

    s = Settings.from_env()

    assert s.is_production is True
    assert s.port == 8080
    assert s.storage == STORAGE_MEMORY
    assert s.tasks_path == tmp_path / "todos.json"
    assert s.cors_origins == ["http://a.test", "http://b.test"]
    assert s.board_dark_mode is True


def test_bad_values_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TODO_PORT", "not-a-port")
    monkeypatch.setenv("TODO_STORAGE", "postgres")

    s = Settings.from_env()

    assert s.port == 5000
    assert s.storage == STORAGE_FILE


def test_generic_port_variable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "9000")
    assert Settings.from_env().port == 9000


def test_bootstrap_builds_configured_backend(settings) -> None:
    file_store = create_task_store(settings=settings)
    assert file_store.backend_name == "file"
    assert settings.tasks_path.exists()

    settings.storage = "memory"
    mem_store = create_task_store(settings=settings)
    assert mem_store.backend_name == "memory"


def test_bootstrap_board_mode(settings) -> None:
    settings.board_dark_mode = True
    assert create_board(settings=settings).dark_mode is True
