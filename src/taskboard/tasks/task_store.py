# src/taskboard/tasks/task_store.py

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from collections.abc import Callable, Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any, TypeVar

from ..core.ports import Clock, IdFactory, TaskBackend
from .task_errors import TaskNotFoundError, TaskStorageError, TaskValidationError
from .task_models import Priority, Task, new_task_id, utc_now
from .task_reports import (
    completion_history,
    compute_stats,
    filter_tasks,
    parse_priority_filter,
    parse_status_filter,
    sort_tasks,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MemoryTaskBackend:
    """Process-memory backend. Lost on restart."""

    name = "memory"

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self._tasks: list[Task] = list(tasks or [])

    def load_tasks(self) -> list[Task]:
        return list(self._tasks)

    def save_tasks(self, tasks: list[Task]) -> None:
        self._tasks = list(tasks)


class JsonFileTaskBackend:
    """
    One JSON file holding the whole collection as a pretty-printed array.

    Reads parse the full file; writes go to a uniquely named temp file in the same
    directory and replace the original, so readers never see a half-written file.

    Entries the lenient parser cannot use are left out of `load_tasks`, but they
    stay in the file: `save_tasks` writes them back unchanged after the tasks.
    """

    name = "file"

    def __init__(self, path: str | Path = "todos.json") -> None:
        self._path = Path(path)
        self._write_lock = threading.Lock()
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._path

    def _ensure_file(self) -> None:
        with self._write_lock:
            if self._path.exists():
                return
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                self._write_text("[]\n")
            except OSError as e:
                raise TaskStorageError(f"Cannot create todo file {self._path}: {e}") from e
        logger.info("Created empty todo file %s", self._path)

    def _write_text(self, text: str) -> None:
        f = tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=self._path.parent,
            prefix=self._path.name + ".",
            suffix=".tmp",
            delete=False,
        )
        tmp = Path(f.name)
        try:
            with f:
                f.write(text)
            os.replace(tmp, self._path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise

    def _read_entries(self) -> list[Any]:
        """Raw array from disk; [] when the file is gone."""
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except FileNotFoundError:
            return []
        except (OSError, ValueError) as e:
            raise TaskStorageError(f"Cannot read todo file {self._path}: {e}") from e

        if not isinstance(data, list):
            raise TaskStorageError(f"Todo file {self._path} does not contain a JSON array")
        return data

    def _split_entries(
        self, data: list[Any], *, warn: bool = True
    ) -> tuple[list[Task], list[Any]]:
        tasks: list[Task] = []
        skipped: list[Any] = []
        for i, item in enumerate(data):
            if not isinstance(item, dict):
                if warn:
                    logger.warning("Skipping non-object entry #%d in %s", i, self._path)
                skipped.append(item)
                continue
            try:
                tasks.append(Task.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                if warn:
                    logger.warning("Skipping malformed entry #%d in %s: %s", i, self._path, e)
                skipped.append(item)
        return tasks, skipped

    def load_tasks(self) -> list[Task]:
        if not self._path.exists():
            self._ensure_file()
            return []
        tasks, _ = self._split_entries(self._read_entries())
        return tasks

    def save_tasks(self, tasks: list[Task]) -> None:
        with self._write_lock:
            _, skipped = self._split_entries(self._read_entries(), warn=False)
            entries = [t.to_dict() for t in tasks] + skipped
            payload = json.dumps(entries, ensure_ascii=False, indent=2)
            try:
                self._write_text(payload + "\n")
            except OSError as e:
                raise TaskStorageError(f"Cannot write todo file {self._path}: {e}") from e
        logger.debug(
            "Saved %d todos to %s (%d unparsed entries kept)", len(tasks), self._path, len(skipped)
        )


def _clean_title(raw: Any) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise TaskValidationError("Title is required", field="title")
    return raw.strip()


def _clean_description(raw: Any) -> str:
    if raw is None:
        return ""
    if not isinstance(raw, str):
        raise TaskValidationError("Description must be a string", field="description")
    return raw


class TaskStore:
    """
    The todo collection and every operation on it.

    Read-only operations load the full collection and degrade to an empty list
    when the backend cannot be read.

    Mutations go through `_mutate`: load, change, save, all under one lock, so
    requests handled by this process never interleave their read-modify-write.
    Two processes sharing one JSON file can still overwrite each other's changes.
    """

    def __init__(
        self,
        backend: TaskBackend,
        *,
        id_factory: IdFactory = new_task_id,
        clock: Clock = utc_now,
    ) -> None:
        self._backend = backend
        self._id_factory = id_factory
        self._clock = clock
        self._lock = threading.Lock()
        logger.info("TaskStore ready backend=%s total=%s", backend.name, self.count_tasks())

    @property
    def backend_name(self) -> str:
        return self._backend.name

    # ---- low-level helpers ----

    def _snapshot(self) -> list[Task]:
        try:
            return self._backend.load_tasks()
        except TaskStorageError:
            logger.exception("Todo read failed; serving an empty collection.")
            return []

    def _mutate(self, change: Callable[[list[Task]], tuple[list[Task], T]]) -> T:
        with self._lock:
            tasks = self._backend.load_tasks()
            new_tasks, result = change(tasks)
            self._backend.save_tasks(new_tasks)
            return result

    @staticmethod
    def _index_of(tasks: list[Task], task_id: str) -> int:
        for i, t in enumerate(tasks):
            if t.id == task_id:
                return i
        raise TaskNotFoundError(task_id)

    def _next_id(self, tasks: list[Task]) -> str:
        taken = {t.id for t in tasks}
        task_id = self._id_factory()
        while task_id in taken:
            logger.warning("Id factory returned a taken id %s; retrying.", task_id)
            task_id = self._id_factory()
        return task_id

    # ---- public API ----

    def count_tasks(self) -> int:
        return len(self._snapshot())

    def list_tasks(
        self,
        *,
        status: str | None = None,
        priority: str | None = None,
        sort_by: str | None = None,
    ) -> list[Task]:
        status_f = parse_status_filter(status)
        priority_f = parse_priority_filter(priority)
        tasks = filter_tasks(self._snapshot(), status=status_f, priority=priority_f)
        return sort_tasks(tasks, sort_by)

    def get_task(self, task_id: str) -> Task:
        for t in self._snapshot():
            if t.id == task_id:
                return t
        raise TaskNotFoundError(task_id)

    def add_task(
        self,
        *,
        title: Any,
        description: Any = None,
        priority: Any = None,
    ) -> Task:
        clean_title = _clean_title(title)
        clean_description = _clean_description(description)
        clean_priority = Priority.LOW if priority is None else Priority.parse(priority)

        def change(tasks: list[Task]) -> tuple[list[Task], Task]:
            now = self._clock()
            task = Task(
                id=self._next_id(tasks),
                title=clean_title,
                description=clean_description,
                priority=clean_priority,
                completed=False,
                created_at=now,
                updated_at=now,
            )
            return [*tasks, task], task

        task = self._mutate(change)
        logger.debug("Todo added id=%s priority=%s", task.id, task.priority.value)
        return task

    def update_task(self, task_id: str, changes: Mapping[str, Any]) -> Task:
        """
        Merge the supplied fields into an existing task.

        Unknown keys are ignored. Every supplied field is validated before the
        collection is touched, so a rejected update leaves the record as it was.
        """
        fields: dict[str, Any] = {}
        if "title" in changes:
            fields["title"] = _clean_title(changes["title"])
        if "description" in changes:
            fields["description"] = _clean_description(changes["description"])
        if "priority" in changes:
            fields["priority"] = Priority.parse(changes["priority"])
        if "completed" in changes:
            completed = changes["completed"]
            if not isinstance(completed, bool):
                raise TaskValidationError("Completed must be a boolean", field="completed")
            fields["completed"] = completed

        def change(tasks: list[Task]) -> tuple[list[Task], Task]:
            i = self._index_of(tasks, task_id)
            updated = replace(tasks[i], **fields, updated_at=self._clock())
            return [*tasks[:i], updated, *tasks[i + 1 :]], updated

        task = self._mutate(change)
        logger.debug("Todo updated id=%s fields=%s", task_id, sorted(fields))
        return task

    def delete_task(self, task_id: str) -> Task:
        def change(tasks: list[Task]) -> tuple[list[Task], Task]:
            i = self._index_of(tasks, task_id)
            return [*tasks[:i], *tasks[i + 1 :]], tasks[i]

        task = self._mutate(change)
        logger.debug("Todo deleted id=%s", task_id)
        return task

    def toggle_task(self, task_id: str) -> Task:
        def change(tasks: list[Task]) -> tuple[list[Task], Task]:
            i = self._index_of(tasks, task_id)
            cur = tasks[i]
            updated = replace(cur, completed=not cur.completed, updated_at=self._clock())
            return [*tasks[:i], updated, *tasks[i + 1 :]], updated

        task = self._mutate(change)
        logger.debug("Todo toggled id=%s completed=%s", task_id, task.completed)
        return task

    def stats(self) -> dict[str, Any]:
        return compute_stats(self._snapshot(), self._clock())

    def history(self) -> dict[str, list[dict[str, Any]]]:
        return completion_history(self._snapshot())
