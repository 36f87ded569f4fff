"""SQLite-backed project store.

Mirrors a hosted table scoped by owner: every read and write filters on
``user_id``. Failures are raised as :class:`PersistenceError`.
"""
from __future__ import annotations

import logging
import os
import sqlite3
import uuid
from typing import Any, Dict, List, Protocol

from ..errors import PersistenceError

logger = logging.getLogger(__name__)

SCHEMA_PATH = os.path.join(os.path.dirname(__file__), "schema.sql")

PROJECT_COLUMNS = (
    "name",
    "description",
    "start_date",
    "end_date",
    "status",
    "overhead_allocation_percentage",
    "price",
)


class ProjectStore(Protocol):
    def fetch_all(self, owner_id: str) -> List[Dict[str, Any]]: ...

    def insert(self, record: Dict[str, Any]) -> Dict[str, Any]: ...

    def update(self, project_id: str, owner_id: str, partial: Dict[str, Any]) -> None: ...

    def delete(self, project_id: str, owner_id: str) -> None: ...


class SqliteProjectStore:
    def __init__(self, db_path: str) -> None:
        self.db_path = db_path
        self._initialized = False

    def _connect(self) -> sqlite3.Connection:
        try:
            if not self._initialized:
                self.ensure_db()
            conn = sqlite3.connect(self.db_path)
        except (sqlite3.Error, OSError) as exc:
            raise PersistenceError(f"Could not open project store: {exc}") from exc
        conn.row_factory = sqlite3.Row
        return conn

    def ensure_db(self) -> None:
        """Create DB file and run schema if missing."""
        folder = os.path.dirname(self.db_path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        try:
            with open(SCHEMA_PATH, "r", encoding="utf-8") as f:
                conn.executescript(f.read())
            conn.commit()
        finally:
            conn.close()
        self._initialized = True

    def fetch_all(self, owner_id: str) -> List[Dict[str, Any]]:
        conn = self._connect()
        try:
            cur = conn.execute(
                "SELECT * FROM projects WHERE user_id = ? ORDER BY created_at DESC, rowid DESC",
                (owner_id,),
            )
            return [dict(row) for row in cur.fetchall()]
        except sqlite3.Error as exc:
            raise PersistenceError(f"Failed to fetch projects: {exc}") from exc
        finally:
            conn.close()

    def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        if not record.get("user_id"):
            raise PersistenceError("Project record is missing its owner.")
        row = {col: record[col] for col in PROJECT_COLUMNS if col in record}
        row["id"] = str(record.get("id") or uuid.uuid4())
        row["user_id"] = record["user_id"]
        cols = ", ".join(row)
        marks = ", ".join("?" for _ in row)
        conn = self._connect()
        try:
            conn.execute(f"INSERT INTO projects({cols}) VALUES ({marks})", tuple(row.values()))
            conn.commit()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Failed to insert project: {exc}") from exc
        finally:
            conn.close()
        return row

    def update(self, project_id: str, owner_id: str, partial: Dict[str, Any]) -> None:
        changes = {col: partial[col] for col in PROJECT_COLUMNS if col in partial}
        if not changes:
            return
        assignments = ", ".join(f"{col} = ?" for col in changes)
        assignments += ", updated_at = strftime('%Y-%m-%dT%H:%M:%f', 'now')"
        conn = self._connect()
        try:
            cur = conn.execute(
                f"UPDATE projects SET {assignments} WHERE id = ? AND user_id = ?",
                (*changes.values(), project_id, owner_id),
            )
            conn.commit()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Failed to update project: {exc}") from exc
        finally:
            conn.close()
        if cur.rowcount == 0:
            logger.debug("Update matched no project %s for owner %s", project_id, owner_id)

    def delete(self, project_id: str, owner_id: str) -> None:
        conn = self._connect()
        try:
            conn.execute("DELETE FROM projects WHERE id = ? AND user_id = ?", (project_id, owner_id))
            conn.commit()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Failed to delete project: {exc}") from exc
        finally:
            conn.close()
