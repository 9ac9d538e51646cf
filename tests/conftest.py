# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from taskboard.api.app import create_app
from taskboard.tasks.task_store import JsonFileTaskBackend, TaskStore

from .fakes import FakeClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with create_app and the bootstrap helpers.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskboard-test",
        environment="development",
        log_level="INFO",
        host="127.0.0.1",
        port=5000,
        is_production=False,
        cors_origins=["*"],
        storage="file",
        data_dir=tmp_path,
        tasks_path=tmp_path / "data" / "todos.json",
        board_dark_mode=False,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(settings: SimpleNamespace, clock: FakeClock) -> TaskStore:
    """
    Real JSON-file store on a tmp path: file round-trips are part of what we test.
    """
    return TaskStore(JsonFileTaskBackend(settings.tasks_path), clock=clock)


@pytest.fixture()
def client(settings: SimpleNamespace, store: TaskStore) -> TestClient:
    return TestClient(create_app(settings, store))
