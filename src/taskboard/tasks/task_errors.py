# src/taskboard/tasks/task_errors.py

from __future__ import annotations


class TaskError(Exception):
    """Base class for task store errors. `status_code` is the HTTP mapping."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TaskValidationError(TaskError):
    status_code = 400

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class TaskNotFoundError(TaskError):
    status_code = 404

    def __init__(self, task_id: str) -> None:
        super().__init__("Todo not found")
        self.task_id = task_id


class TaskStorageError(TaskError):
    """Backend read/write failure during a mutation."""
