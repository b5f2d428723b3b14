"""SQLite project store — implements the ProjectStore port.

A single flat ``projects`` table.  File databases get a short-lived
connection per operation, so the store is safe to call from FastAPI's
threadpool.  ``:memory:`` databases only live as long as their connection,
so that case keeps one connection for the store's lifetime behind a lock.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from repo_insights.domain.entities import Project
from repo_insights.domain.exceptions import PersistenceError

logger = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"


class SqliteProjectStore:
    """Concrete ``ProjectStore`` backed by a local SQLite file."""

    def __init__(self, database_path: str) -> None:
        self._database_path = database_path
        self._lock = threading.Lock()
        self._memory_conn: sqlite3.Connection | None = None
        if database_path == MEMORY_DATABASE:
            self._memory_conn = sqlite3.connect(MEMORY_DATABASE, check_same_thread=False)
            self._memory_conn.row_factory = sqlite3.Row

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        if self._memory_conn is not None:
            with self._lock:
                yield self._memory_conn
            return

        Path(self._database_path).parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self._database_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def init_schema(self) -> None:
        """Create the ``projects`` table if it does not exist yet."""
        try:
            with self._connection() as conn, conn:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS projects (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        name TEXT NOT NULL,
                        repo_url TEXT NOT NULL
                    )
                """)
        except sqlite3.Error as exc:
            raise PersistenceError(str(exc)) from exc
        logger.info("Project store ready at %s", self._database_path)

    def list_projects(self) -> list[Project]:
        try:
            with self._connection() as conn:
                rows = conn.execute(
                    "SELECT id, name, repo_url FROM projects ORDER BY name ASC"
                ).fetchall()
        except sqlite3.Error as exc:
            raise PersistenceError(str(exc)) from exc
        return [_to_project(row) for row in rows]

    def insert_project(self, name: str, repo_url: str) -> Project:
        try:
            with self._connection() as conn, conn:
                cursor = conn.execute(
                    "INSERT INTO projects (name, repo_url) VALUES (?, ?)",
                    (name, repo_url),
                )
                row = conn.execute(
                    "SELECT id, name, repo_url FROM projects WHERE id = ?",
                    (cursor.lastrowid,),
                ).fetchone()
        except sqlite3.Error as exc:
            raise PersistenceError(str(exc)) from exc
        return _to_project(row)

    def close(self) -> None:
        """Release the shared in-memory connection, if any."""
        if self._memory_conn is not None:
            self._memory_conn.close()
            self._memory_conn = None


def _to_project(row: sqlite3.Row) -> Project:
    return Project(id=row["id"], name=row["name"], repo_url=row["repo_url"])
