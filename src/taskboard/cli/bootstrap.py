# src/taskboard/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the configured backend into a TaskStore,
- builds the HTTP app and the console board.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from ..api.app import create_app
from ..board.board_state import TaskBoard
from ..config import STORAGE_MEMORY, get_settings
from ..core.ports import TaskBackend
from ..tasks.task_store import JsonFileTaskBackend, MemoryTaskBackend, TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)


def create_task_backend(settings) -> TaskBackend:
    if settings.storage == STORAGE_MEMORY:
        logger.info("Using in-memory todo storage (data is lost on restart).")
        return MemoryTaskBackend()
    return JsonFileTaskBackend(settings.tasks_path)


def create_task_store(*, settings=None) -> TaskStore:
    """
    Create the TaskStore from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)
    return TaskStore(create_task_backend(settings))


def create_api(*, settings=None) -> FastAPI:
    if settings is None:
        settings = get_settings()
    return create_app(settings, create_task_store(settings=settings))


def create_board(*, settings=None) -> TaskBoard:
    if settings is None:
        settings = get_settings()
    return TaskBoard(dark_mode=bool(getattr(settings, "board_dark_mode", False)))
