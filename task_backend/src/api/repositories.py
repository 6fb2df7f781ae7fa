from __future__ import annotations

import itertools
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from functools import lru_cache
from threading import RLock
from typing import Dict, List, Optional

from .models import TaskEntity, TaskFields
from .schemas import TaskCreate
from .settings import get_settings


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for task storage backends."""

    @abstractmethod
    def list_all(self) -> List[TaskEntity]:
        """Return every TaskEntity, newest first."""

    @abstractmethod
    def create(self, data: TaskCreate) -> TaskEntity:
        """Create and return a new TaskEntity. The backend assigns id and created_at."""

    @abstractmethod
    def get(self, task_id: str) -> Optional[TaskEntity]:
        """Return a TaskEntity by id, or None if not found."""

    @abstractmethod
    def update(self, task_id: str, fields: TaskFields) -> Optional[TaskEntity]:
        """
        Write the complete set of mutable fields of an existing task.
        Return the updated entity, or None if the task no longer exists.
        """

    @abstractmethod
    def delete(self, task_id: str) -> bool:
        """Delete a TaskEntity by id. Return True if deleted, False if not found."""


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository suitable for testing and ephemeral runs.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: Dict[str, TaskEntity] = {}
        # Insertion sequence breaks ties between identical timestamps.
        self._seq: Dict[str, int] = {}
        self._counter = itertools.count()

    def list_all(self) -> List[TaskEntity]:
        with self._lock:
            items = sorted(
                self._items.values(),
                key=lambda t: (t["created_at"], self._seq[t["id"]]),
                reverse=True,
            )
            # Return copies to avoid external mutation
            return [t.copy() for t in items]

    def create(self, data: TaskCreate) -> TaskEntity:
        entity: TaskEntity = {
            "id": _new_id(),
            "title": data.title,
            "color": data.color,
            "completed": data.completed,
            "created_at": _now(),
        }
        with self._lock:
            self._items[entity["id"]] = entity
            self._seq[entity["id"]] = next(self._counter)
        return entity.copy()

    def get(self, task_id: str) -> Optional[TaskEntity]:
        with self._lock:
            item = self._items.get(task_id)
            return None if item is None else item.copy()

    def update(self, task_id: str, fields: TaskFields) -> Optional[TaskEntity]:
        with self._lock:
            existing = self._items.get(task_id)
            if existing is None:
                return None
            updated = existing.copy()
            updated["title"] = fields["title"]
            updated["color"] = fields["color"]
            updated["completed"] = fields["completed"]
            self._items[task_id] = updated
            return updated.copy()

    def delete(self, task_id: str) -> bool:
        with self._lock:
            self._seq.pop(task_id, None)
            return self._items.pop(task_id, None) is not None


# PUBLIC_INTERFACE
@lru_cache(maxsize=1)
def get_repository() -> Repository:
    """
    Return the process-wide repository configured in settings.
    - memory: InMemoryRepository
    - sqlite: SQLiteRepository
    The instance is created once and shared by every request.
    """
    settings = get_settings()
    if settings.persistence_backend == "memory":
        return InMemoryRepository()
    from .db import SQLiteRepository

    return SQLiteRepository(settings.sqlite_db_path)
