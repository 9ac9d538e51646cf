# src/taskboard/api/routes.py

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request

from ..tasks.task_store import TaskStore
from .schemas import TodoCreate, TodoUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


def get_store(request: Request) -> TaskStore:
    """The store is created by the composition root and attached to app.state."""
    return request.app.state.store


# Fixed paths first, otherwise "/stats" would be captured by "/{task_id}".


@router.get("/stats")
def todo_stats(store: TaskStore = Depends(get_store)) -> dict[str, Any]:
    return {"success": True, "data": store.stats()}


@router.get("/history")
def todo_history(store: TaskStore = Depends(get_store)) -> dict[str, Any]:
    return {"success": True, "data": store.history()}


@router.get("")
def list_todos(
    status: Optional[str] = None,
    priority: Optional[str] = None,
    sortBy: Optional[str] = None,
    store: TaskStore = Depends(get_store),
) -> dict[str, Any]:
    tasks = store.list_tasks(status=status, priority=priority, sort_by=sortBy)
    return {
        "success": True,
        "count": len(tasks),
        "data": [t.to_dict() for t in tasks],
        "message": f"Found {len(tasks)} todo(s)",
    }


@router.post("", status_code=201)
def create_todo(payload: TodoCreate, store: TaskStore = Depends(get_store)) -> dict[str, Any]:
    task = store.add_task(
        title=payload.title,
        description=payload.description,
        priority=payload.priority,
    )
    logger.info("Todo created id=%s", task.id)
    return {"success": True, "data": task.to_dict(), "message": "Todo created"}


@router.get("/{task_id}")
def get_todo(task_id: str, store: TaskStore = Depends(get_store)) -> dict[str, Any]:
    return {"success": True, "data": store.get_task(task_id).to_dict()}


@router.put("/{task_id}")
def update_todo(
    task_id: str, payload: TodoUpdate, store: TaskStore = Depends(get_store)
) -> dict[str, Any]:
    task = store.update_task(task_id, payload.model_dump(exclude_unset=True))
    return {"success": True, "data": task.to_dict(), "message": "Todo updated"}


@router.delete("/{task_id}")
def delete_todo(task_id: str, store: TaskStore = Depends(get_store)) -> dict[str, Any]:
    task = store.delete_task(task_id)
    logger.info("Todo deleted id=%s", task.id)
    return {"success": True, "data": task.to_dict(), "message": "Todo deleted"}


@router.patch("/{task_id}/toggle")
def toggle_todo(task_id: str, store: TaskStore = Depends(get_store)) -> dict[str, Any]:
    task = store.toggle_task(task_id)
    state = "completed" if task.completed else "pending"
    return {"success": True, "data": task.to_dict(), "message": f"Todo marked as {state}"}
