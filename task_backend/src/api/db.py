from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from threading import RLock
from typing import Generator, List, Optional

from .models import TaskEntity, TaskFields
from .repositories import Repository, _new_id, _now
from .schemas import TaskCreate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Cols:
    table: str = "tasks"
    id: str = "id"
    title: str = "title"
    color: str = "color"
    completed: str = "completed"
    created_at: str = "created_at"


_COLS = _Cols()


class SQLiteRepository(Repository):
    """
    SQLite repository holding a single connection shared by all requests.
    Calls are serialized with a lock since the connection crosses threads.
    """

    def __init__(self, db_path: str) -> None:
        if db_path != ":memory:":
            os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        self._db_path = db_path
        self._lock = RLock()
        self._connection = sqlite3.connect(db_path, check_same_thread=False)
        self._connection.row_factory = sqlite3.Row
        self._init_db()
        logger.info("SQLite storage initialized at %s", db_path)

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        with self._lock:
            try:
                yield self._connection
                self._connection.commit()
            except Exception:
                self._connection.rollback()
                raise

    def _init_db(self) -> None:
        with self._conn() as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {_COLS.table} (
                    {_COLS.id} TEXT PRIMARY KEY,
                    {_COLS.title} TEXT NOT NULL,
                    {_COLS.color} TEXT NOT NULL,
                    {_COLS.completed} INTEGER NOT NULL DEFAULT 0,
                    {_COLS.created_at} TEXT NOT NULL
                )
                """
            )
            conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_{_COLS.table}_created_at ON {_COLS.table}({_COLS.created_at})"
            )

    def close(self) -> None:
        with self._lock:
            self._connection.close()

    def _row_to_entity(self, row: sqlite3.Row) -> TaskEntity:
        return {
            "id": str(row[_COLS.id]),
            "title": str(row[_COLS.title]),
            "color": str(row[_COLS.color]),
            "completed": bool(row[_COLS.completed]),
            "created_at": datetime.fromisoformat(row[_COLS.created_at]),
        }

    def _select(self, conn: sqlite3.Connection, task_id: str) -> Optional[sqlite3.Row]:
        return conn.execute(f"SELECT * FROM {_COLS.table} WHERE {_COLS.id} = ?", (task_id,)).fetchone()

    def list_all(self) -> List[TaskEntity]:
        with self._conn() as conn:
            # rowid keeps insertion order among equal timestamps
            rows = conn.execute(
                f"SELECT * FROM {_COLS.table} ORDER BY {_COLS.created_at} DESC, rowid DESC"
            ).fetchall()
            return [self._row_to_entity(r) for r in rows]

    def create(self, data: TaskCreate) -> TaskEntity:
        new_id = _new_id()
        with self._conn() as conn:
            conn.execute(
                f"""
                INSERT INTO {_COLS.table} ({_COLS.id}, {_COLS.title}, {_COLS.color},
                    {_COLS.completed}, {_COLS.created_at})
                VALUES (?, ?, ?, ?, ?)
                """,
                (new_id, data.title, data.color, 1 if data.completed else 0, _now().isoformat(timespec="microseconds")),
            )
            row = self._select(conn, new_id)
            assert row is not None
            return self._row_to_entity(row)

    def get(self, task_id: str) -> Optional[TaskEntity]:
        with self._conn() as conn:
            row = self._select(conn, task_id)
            return self._row_to_entity(row) if row else None

    def update(self, task_id: str, fields: TaskFields) -> Optional[TaskEntity]:
        with self._conn() as conn:
            cur = conn.execute(
                f"""
                UPDATE {_COLS.table}
                SET {_COLS.title} = ?, {_COLS.color} = ?, {_COLS.completed} = ?
                WHERE {_COLS.id} = ?
                """,
                (fields["title"], fields["color"], 1 if fields["completed"] else 0, task_id),
            )
            if cur.rowcount == 0:
                return None
            row = self._select(conn, task_id)
            assert row is not None
            return self._row_to_entity(row)

    def delete(self, task_id: str) -> bool:
        with self._conn() as conn:
            cur = conn.execute(f"DELETE FROM {_COLS.table} WHERE {_COLS.id} = ?", (task_id,))
            return cur.rowcount > 0
