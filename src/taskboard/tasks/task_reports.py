# src/taskboard/tasks/task_reports.py

from __future__ import annotations

"""
Read-side helpers over a full task list: filtering, sorting, stats and history.

All functions are pure; "now" is passed in so results are deterministic in tests.
"""

import math
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from typing import Any

from .task_errors import TaskValidationError
from .task_models import Priority, StatusFilter, Task, format_ts

SORT_PRIORITY = "priority"


def parse_status_filter(raw: str | None) -> StatusFilter | None:
    if raw is None or raw == "":
        return None
    try:
        return StatusFilter(raw)
    except ValueError:
        raise TaskValidationError(
            "Status must be one of: completed, pending", field="status"
        ) from None


def parse_priority_filter(raw: str | None) -> Priority | None:
    if raw is None or raw == "":
        return None
    return Priority.parse(raw)


def filter_tasks(
    tasks: Iterable[Task],
    *,
    status: StatusFilter | None = None,
    priority: Priority | None = None,
) -> list[Task]:
    out: list[Task] = []
    for t in tasks:
        if status is StatusFilter.COMPLETED and not t.completed:
            continue
        if status is StatusFilter.PENDING and t.completed:
            continue
        if priority is not None and t.priority is not priority:
            continue
        out.append(t)
    return out


def sort_tasks(tasks: Iterable[Task], sort_by: str | None = None) -> list[Task]:
    """
    sort_by="priority": high > medium > low, newest first within a priority.
    Anything else: createdAt descending.
    """
    newest_first = sorted(tasks, key=lambda t: t.created_at, reverse=True)
    if sort_by == SORT_PRIORITY:
        # sorted() is stable, so the createdAt order survives inside each priority.
        return sorted(newest_first, key=lambda t: t.priority.rank, reverse=True)
    return newest_first


def completion_rate(completed: int, total: int) -> int:
    """Rounded percentage (half-up), 0 for an empty collection."""
    if total <= 0:
        return 0
    return int(math.floor(100 * completed / total + 0.5))


def _bucket_counts(stamps: Iterable[datetime], now: datetime) -> dict[str, int]:
    week_ago = now - timedelta(days=7)
    month_ago = now - timedelta(days=30)
    today = now.astimezone(UTC).date()

    counts = {"today": 0, "last7Days": 0, "last30Days": 0}
    for ts in stamps:
        if ts.astimezone(UTC).date() == today:
            counts["today"] += 1
        if ts >= week_ago:
            counts["last7Days"] += 1
        if ts >= month_ago:
            counts["last30Days"] += 1
    return counts


def compute_stats(tasks: list[Task], now: datetime) -> dict[str, Any]:
    total = len(tasks)
    completed = sum(1 for t in tasks if t.completed)

    by_priority = {p.value: 0 for p in Priority}
    for t in tasks:
        by_priority[t.priority.value] += 1

    return {
        "total": total,
        "completed": completed,
        "pending": total - completed,
        "completionRate": completion_rate(completed, total),
        "byPriority": by_priority,
        "created": _bucket_counts((t.created_at for t in tasks), now),
        "completedRecently": _bucket_counts((t.updated_at for t in tasks if t.completed), now),
    }


def completion_history(tasks: list[Task]) -> dict[str, list[dict[str, Any]]]:
    """
    Completed tasks grouped by the UTC date of their last update.

    Dates are ordered newest first, and so are the entries inside a date.
    """
    done = sorted((t for t in tasks if t.completed), key=lambda t: t.updated_at, reverse=True)

    history: dict[str, list[dict[str, Any]]] = {}
    for t in done:
        completed_at = format_ts(t.updated_at)
        key = completed_at[:10]
        history.setdefault(key, []).append(
            {
                "id": t.id,
                "title": t.title,
                "priority": t.priority.value,
                "completedAt": completed_at,
            }
        )
    return history
