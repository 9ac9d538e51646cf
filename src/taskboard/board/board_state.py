# src/taskboard/board/board_state.py

from __future__ import annotations

import itertools
from collections.abc import Iterator
from dataclasses import dataclass, field, replace

from ..tasks.task_models import Priority

DRAFT_FIELDS = ("title", "date", "priority", "description")


def parse_board_priority(raw: str) -> Priority | None:
    """Form-style priority: "High", "low", ... or empty for "not selected"."""
    value = raw.strip().lower()
    if not value:
        return None
    try:
        return Priority(value)
    except ValueError:
        allowed = ", ".join(p.value for p in Priority)
        raise ValueError(f"Priority must be one of: {allowed}") from None


@dataclass(frozen=True, slots=True)
class BoardTask:
    id: int
    title: str
    date: str
    priority: Priority | None
    description: str
    completed: bool = False


@dataclass(frozen=True, slots=True)
class BoardCounts:
    total: int
    completed: int
    pending: int


@dataclass(slots=True)
class BoardDraft:
    title: str = ""
    date: str = ""
    priority: Priority | None = None
    description: str = ""


@dataclass
class TaskBoard:
    """
    Local, ephemeral task list for the console board.

    Nothing here talks to the HTTP service or touches the disk: the list,
    the display mode and the draft are gone once the process exits.
    """

    dark_mode: bool = False
    tasks: list[BoardTask] = field(default_factory=list)
    draft: BoardDraft = field(default_factory=BoardDraft)
    _ids: Iterator[int] = field(default_factory=lambda: itertools.count(1), repr=False)

    # ---- draft ----

    def set_draft_field(self, name: str, value: str) -> None:
        """Raises ValueError for unknown fields or an unknown priority."""
        if name not in DRAFT_FIELDS:
            raise ValueError(f"Unknown field {name!r}; expected one of: {', '.join(DRAFT_FIELDS)}")
        if name == "priority":
            self.draft.priority = parse_board_priority(value)
        else:
            setattr(self.draft, name, value)

    def clear_draft(self) -> None:
        self.draft = BoardDraft()

    # ---- tasks ----

    def add_task(self) -> BoardTask | None:
        """Append a task built from the draft. Blank title: nothing happens, draft kept."""
        if not self.draft.title.strip():
            return None

        task = BoardTask(
            id=next(self._ids),
            title=self.draft.title.strip(),
            date=self.draft.date.strip(),
            priority=self.draft.priority,
            description=self.draft.description.strip(),
        )
        self.tasks = [*self.tasks, task]
        self.clear_draft()
        return task

    def delete_task(self, task_id: int) -> bool:
        before = len(self.tasks)
        self.tasks = [t for t in self.tasks if t.id != task_id]
        return len(self.tasks) != before

    def toggle_task(self, task_id: int) -> BoardTask | None:
        toggled: BoardTask | None = None
        out: list[BoardTask] = []
        for t in self.tasks:
            if t.id == task_id:
                t = replace(t, completed=not t.completed)
                toggled = t
            out.append(t)
        self.tasks = out
        return toggled

    def toggle_dark_mode(self) -> bool:
        self.dark_mode = not self.dark_mode
        return self.dark_mode

    def counts(self) -> BoardCounts:
        done = sum(1 for t in self.tasks if t.completed)
        return BoardCounts(total=len(self.tasks), completed=done, pending=len(self.tasks) - done)
