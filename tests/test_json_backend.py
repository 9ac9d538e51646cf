# tests/test_json_backend.py

from __future__ import annotations

import json
import threading
from pathlib import Path

import pytest

from taskboard.tasks import task_store
from taskboard.tasks.task_errors import TaskStorageError
from taskboard.tasks.task_models import Priority
from taskboard.tasks.task_store import JsonFileTaskBackend, TaskStore

from .fakes import FakeClock


def test_file_is_created_empty_on_first_use(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "dir" / "todos.json"

    backend = JsonFileTaskBackend(path)

    assert path.exists()
    assert json.loads(path.read_text("utf-8")) == []
    assert backend.load_tasks() == []


def test_saved_file_is_pretty_printed_array(tmp_path: Path, clock: FakeClock) -> None:
    path = tmp_path / "todos.json"
    store = TaskStore(JsonFileTaskBackend(path), clock=clock)
    task = store.add_task(title="Buy milk", priority="medium")

    raw = path.read_text("utf-8")
    data = json.loads(raw)

    assert raw.startswith("[\n  {")
    assert data == [
        {
            "id": task.id,
            "title": "Buy milk",
            "description": "",
            "priority": "medium",
            "completed": False,
            "createdAt": "2026-10-18T12:00:00.000Z",
            "updatedAt": "2026-10-18T12:00:00.000Z",
        }
    ]
    assert list(tmp_path.glob("*.tmp")) == []


def test_every_mutation_rewrites_the_file(tmp_path: Path, clock: FakeClock) -> None:
    path = tmp_path / "todos.json"
    store = TaskStore(JsonFileTaskBackend(path), clock=clock)
    a = store.add_task(title="a")
    b = store.add_task(title="b")

    store.toggle_task(a.id)
    store.delete_task(b.id)

    # A fresh store over the same file sees exactly what the first one wrote.
    reopened = TaskStore(JsonFileTaskBackend(path), clock=clock)
    tasks = reopened.list_tasks()
    assert [t.id for t in tasks] == [a.id]
    assert tasks[0].completed is True


def test_external_edits_are_seen_on_next_request(tmp_path: Path, clock: FakeClock) -> None:
    path = tmp_path / "todos.json"
    store = TaskStore(JsonFileTaskBackend(path), clock=clock)
    store.add_task(title="from api")

    path.write_text("[]", "utf-8")

    assert store.list_tasks() == []


def test_legacy_and_partial_records_are_normalised(tmp_path: Path) -> None:
    path = tmp_path / "todos.json"
    path.write_text(
        json.dumps(
            [
                {"id": 1, "title": " Old one ", "createdAt": "2024-01-02T03:04:05.000Z"},
                {
                    "id": "x2",
                    "title": "Odd priority",
                    "priority": "urgent",
                    "completed": "true",
                    "createdAt": "2024-01-03T00:00:00",
                    "updatedAt": "2024-01-04T00:00:00Z",
                },
            ]
        ),
        "utf-8",
    )

    tasks = JsonFileTaskBackend(path).load_tasks()

    assert [t.id for t in tasks] == ["1", "x2"]
    old, odd = tasks
    assert old.title == "Old one"
    assert old.description == ""
    assert old.priority is Priority.LOW
    assert old.completed is False
    assert old.updated_at == old.created_at
    assert odd.priority is Priority.LOW
    assert odd.completed is False
    assert odd.updated_at.isoformat() == "2024-01-04T00:00:00+00:00"


def test_malformed_entries_are_skipped(tmp_path: Path) -> None:
    path = tmp_path / "todos.json"
    path.write_text(
        json.dumps(
            [
                "not an object",
                {"title": "no id", "createdAt": "2024-01-01T00:00:00Z"},
                {"id": "a", "title": "   ", "createdAt": "2024-01-01T00:00:00Z"},
                {"id": "b", "title": "bad date", "createdAt": "yesterday"},
                {"id": "c", "title": "good", "createdAt": "2024-01-01T00:00:00Z"},
            ]
        ),
        "utf-8",
    )

    tasks = JsonFileTaskBackend(path).load_tasks()

    assert [t.id for t in tasks] == ["c"]


@pytest.mark.parametrize("content", ["{not json", '{"todos": []}', ""])
def test_unreadable_file_raises_storage_error(tmp_path: Path, content: str) -> None:
    path = tmp_path / "todos.json"
    path.write_text(content, "utf-8")

    with pytest.raises(TaskStorageError):
        JsonFileTaskBackend(path).load_tasks()


def test_corrupt_file_reads_empty_and_refuses_mutations(tmp_path: Path, clock: FakeClock) -> None:
    path = tmp_path / "todos.json"
    path.write_text("{corrupt", "utf-8")
    store = TaskStore(JsonFileTaskBackend(path), clock=clock)

    assert store.list_tasks() == []
    with pytest.raises(TaskStorageError):
        store.add_task(title="would clobber the file")
    assert path.read_text("utf-8") == "{corrupt"


def test_deleted_file_is_recreated(tmp_path: Path) -> None:
    path = tmp_path / "todos.json"
    backend = JsonFileTaskBackend(path)
    path.unlink()

    assert backend.load_tasks() == []
    assert path.exists()


def test_write_failure_raises_storage_error(
    tmp_path: Path, clock: FakeClock, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = tmp_path / "todos.json"
    store = TaskStore(JsonFileTaskBackend(path), clock=clock)
    store.add_task(title="kept")

    def refuse(src, dst):
        raise OSError("read-only file system")

    monkeypatch.setattr(task_store.os, "replace", refuse)

    with pytest.raises(TaskStorageError):
        store.add_task(title="lost")
    assert [t.title for t in store.list_tasks()] == ["kept"]
    assert list(tmp_path.glob("*.tmp")) == []


def test_unparsed_entries_survive_mutations(tmp_path: Path, clock: FakeClock) -> None:
    path = tmp_path / "todos.json"
    legacy = {"id": "legacy", "title": "no timestamp yet"}
    path.write_text(
        json.dumps(
            [
                {"id": "keep", "title": "Keep me", "createdAt": "2024-01-01T00:00:00.000Z"},
                legacy,
                "stray note",
            ]
        ),
        "utf-8",
    )
    store = TaskStore(JsonFileTaskBackend(path), clock=clock)

    store.toggle_task("keep")
    added = store.add_task(title="new")
    store.delete_task("keep")

    data = json.loads(path.read_text("utf-8"))
    assert data[0]["id"] == added.id
    assert data[1:] == [legacy, "stray note"]
    assert [t.id for t in store.list_tasks()] == [added.id]


def test_recreating_a_deleted_file_never_drops_writes(tmp_path: Path, clock: FakeClock) -> None:
    path = tmp_path / "todos.json"
    store = TaskStore(JsonFileTaskBackend(path), clock=clock)
    path.unlink()

    def add(i: int) -> None:
        store.add_task(title=f"task {i}")

    def read() -> None:
        store.list_tasks()

    threads = [threading.Thread(target=add, args=(i,)) for i in range(10)]
    threads += [threading.Thread(target=read) for _ in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert store.count_tasks() == 10
    assert list(tmp_path.glob("*.tmp")) == []
