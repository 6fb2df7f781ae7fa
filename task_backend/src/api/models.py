from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Tuple, TypedDict


# Fields a client may change after creation, in write order.
MUTABLE_FIELDS: Tuple[str, ...] = ("title", "color", "completed")


# PUBLIC_INTERFACE
class TaskFields(TypedDict):
    """The complete set of client-controlled values of a Task."""

    title: str
    color: str
    completed: bool


# PUBLIC_INTERFACE
class TaskEntity(TypedDict):
    """
    A lightweight domain model representing a Task for the storage backends.

    Fields:
    - id: Unique string identifier (UUID4), assigned on creation
    - title: Non-empty title
    - color: Non-empty free-form color label
    - completed: Boolean completion flag
    - created_at: UTC creation timestamp (datetime)
    """

    id: str
    title: str
    color: str
    completed: bool
    created_at: datetime


# PUBLIC_INTERFACE
def coalesce(existing: TaskEntity, changes: Mapping[str, Any]) -> TaskFields:
    """
    Merge a partial set of changes onto an existing task.

    Each mutable field takes the value from ``changes`` when the key is present,
    otherwise the stored value. The result always carries every mutable field so
    that the write never depends on what the backend does with missing keys.
    """
    merged = {}
    for field in MUTABLE_FIELDS:
        merged[field] = changes[field] if field in changes else existing[field]
    return TaskFields(**merged)  # type: ignore[typeddict-item]
