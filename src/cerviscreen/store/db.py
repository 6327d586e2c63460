from __future__ import annotations

import sqlite3
import threading


class Database:
    """SQLite connection shared by the API's request threads.

    Reads and writes are serialized on one re-entrant lock; a write commits
    before the lock is released.
    """

    def __init__(self, path: str = ":memory:") -> None:
        self._path = path
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.RLock()

    @property
    def path(self) -> str:
        return self._path

    def connect(self) -> None:
        self._conn = sqlite3.connect(self._path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        if self._path != ":memory:":
            self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.execute("PRAGMA foreign_keys=ON")

    def close(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None

    def _require(self) -> sqlite3.Connection:
        assert self._conn is not None, "Database not connected"
        return self._conn

    def write(self, sql: str, params: tuple = ()) -> int:
        """Run one INSERT/UPDATE statement, commit, and return the affected row count."""
        conn = self._require()
        with self._lock:
            cursor = conn.execute(sql, params)
            conn.commit()
            return cursor.rowcount

    def executescript(self, script: str) -> None:
        conn = self._require()
        with self._lock:
            conn.executescript(script)
            conn.commit()

    def fetch_one(self, sql: str, params: tuple = ()) -> sqlite3.Row | None:
        conn = self._require()
        with self._lock:
            return conn.execute(sql, params).fetchone()

    def fetch_all(self, sql: str, params: tuple = ()) -> list[sqlite3.Row]:
        conn = self._require()
        with self._lock:
            return conn.execute(sql, params).fetchall()
