# src/taskboard/api/schemas.py

"""
Request bodies.

Models only check JSON types; the business rules (non-blank title, allowed
priorities) live in TaskStore so every caller gets the same validation.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, StrictBool


class TodoCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None


class TodoUpdate(BaseModel):
    """Any subset of fields; only the keys the client sent are applied."""

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    description: Optional[str] = None
    completed: Optional[StrictBool] = None
    priority: Optional[str] = None
