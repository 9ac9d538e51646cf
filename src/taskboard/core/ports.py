# src/taskboard/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the task store.

The store depends on Protocols instead of concrete implementations.
This keeps backends swappable and makes testing easier.
"""

from datetime import datetime
from typing import Callable, Protocol

from ..tasks.task_models import Task

IdFactory = Callable[[], str]
Clock = Callable[[], datetime]


class TaskBackend(Protocol):
    """
    Whole-collection persistence.

    load_tasks() returns the full collection; save_tasks() replaces it.
    Both raise TaskStorageError on I/O or decode failures.
    """

    name: str

    def load_tasks(self) -> list[Task]: ...
    def save_tasks(self, tasks: list[Task]) -> None: ...
