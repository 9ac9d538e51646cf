# src/taskboard/tasks/task_models.py

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from .task_errors import TaskValidationError


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """Sort weight: high > medium > low."""
        return _PRIORITY_RANK[self]

    @classmethod
    def parse(cls, raw: Any) -> Priority:
        """Strict parse used for client input. Raises TaskValidationError."""
        if isinstance(raw, str):
            try:
                return cls(raw)
            except ValueError:
                pass
        allowed = ", ".join(p.value for p in cls)
        raise TaskValidationError(f"Priority must be one of: {allowed}", field="priority")

    @classmethod
    def from_db(cls, raw: Any) -> Priority:
        if not isinstance(raw, str):
            return cls.LOW
        try:
            return cls(raw)
        except ValueError:
            return cls.LOW


_PRIORITY_RANK = {Priority.LOW: 0, Priority.MEDIUM: 1, Priority.HIGH: 2}


class StatusFilter(StrEnum):
    COMPLETED = "completed"
    PENDING = "pending"


def utc_now() -> datetime:
    return datetime.now(UTC)


def format_ts(ts: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a trailing Z."""
    return ts.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_ts(raw: str) -> datetime:
    """Parse a stored timestamp. Naive values are taken as UTC."""
    ts = datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts.astimezone(UTC)


def new_task_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    description: str
    priority: Priority
    completed: bool
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> dict[str, Any]:
        """Wire / file representation (camelCase keys)."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
            "completed": self.completed,
            "createdAt": format_ts(self.created_at),
            "updatedAt": format_ts(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        """
        Lenient parse of a persisted record.

        Raises ValueError/TypeError/KeyError when id, title or createdAt are unusable;
        everything else falls back to defaults.
        """
        raw_id = data["id"]
        if isinstance(raw_id, bool) or not isinstance(raw_id, (str, int)):
            raise TypeError(f"bad id type: {type(raw_id).__name__}")
        task_id = str(raw_id).strip()
        if not task_id:
            raise ValueError("empty id")

        title = data["title"]
        if not isinstance(title, str) or not title.strip():
            raise ValueError("empty title")

        raw_created = data["createdAt"]
        if not isinstance(raw_created, str):
            raise TypeError("createdAt must be a string")
        created_at = parse_ts(raw_created)
        raw_updated = data.get("updatedAt")
        updated_at = parse_ts(raw_updated) if isinstance(raw_updated, str) else created_at

        description = data.get("description")
        return cls(
            id=task_id,
            title=title.strip(),
            description=description if isinstance(description, str) else "",
            priority=Priority.from_db(data.get("priority")),
            completed=data.get("completed") is True,
            created_at=created_at,
            updated_at=updated_at,
        )
