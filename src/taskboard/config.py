# src/taskboard/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Read once at startup; everything else gets it injected.

Environment variables (all optional):
- TODO_APP_NAME         display name (default: taskboard)
- TODO_ENV              development | production (production hides error details)
- TODO_LOG_LEVEL        console log level (default: INFO)
- TODO_HOST, TODO_PORT  HTTP bind address (default: 127.0.0.1:5000)
- TODO_STORAGE          file | memory (default: file)
- TODO_DATA_DIR         local data + log directory (default: .local/taskboard)
- TODO_TASKS_PATH       JSON file with todos (default: <data_dir>/todos.json)
- TODO_CORS_ORIGINS     comma/space separated origins (default: *)
- TODO_BOARD_DARK_MODE  start the console board in dark mode (default: false)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

ENV_PREFIX = "TODO"

STORAGE_FILE = "file"
STORAGE_MEMORY = "memory"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv() -> None:
    from dotenv import load_dotenv

    load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    parts = [p.strip() for p in raw.replace(",", " ").split() if p.strip()]
    return parts


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    environment: str
    log_level: str

    # ---- HTTP ----
    host: str
    port: int
    cors_origins: List[str]

    # ---- Storage ----
    storage: str
    data_dir: Path
    tasks_path: Path

    # ---- Board ----
    board_dark_mode: bool

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskboard").strip() or "taskboard"
        environment = _env(_k("ENV"), "development").strip().lower() or "development"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        host = _env(_k("HOST"), "127.0.0.1")
        port = _env_int(_k("PORT"), _env_int("PORT", 5000))
        cors_origins = _env_list(_k("CORS_ORIGINS"), ["*"])

        storage = _env(_k("STORAGE"), STORAGE_FILE).strip().lower()
        if storage not in (STORAGE_FILE, STORAGE_MEMORY):
            storage = STORAGE_FILE

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskboard"))
        tasks_path = _env_path(_k("TASKS_PATH"), data_dir / "todos.json")

        board_dark_mode = _env_bool(_k("BOARD_DARK_MODE"), False)

        return Settings(
            app_name=app_name,
            environment=environment,
            log_level=log_level,
            host=host,
            port=port,
            cors_origins=cors_origins,
            storage=storage,
            data_dir=data_dir,
            tasks_path=tasks_path,
            board_dark_mode=board_dark_mode,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Process-wide settings, built on first use."""
    global _SETTINGS
    if _SETTINGS is None:
        _load_dotenv()
        _SETTINGS = Settings.from_env()
    return _SETTINGS
