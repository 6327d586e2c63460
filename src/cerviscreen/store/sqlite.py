from __future__ import annotations

import re

from cerviscreen.store.base import Row
from cerviscreen.store.db import Database

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _ident(name: str) -> str:
    if not _IDENTIFIER.match(name):
        raise ValueError(f"Invalid SQL identifier: {name!r}")
    return name


def _where(filters: Row | None) -> tuple[str, tuple]:
    if not filters:
        return "", ()
    clause = " AND ".join(f"{_ident(col)} = ?" for col in filters)
    return f" WHERE {clause}", tuple(filters.values())


class SqliteStore:
    """TableStore backed by the local SQLite database."""

    def __init__(self, db: Database) -> None:
        self._db = db

    def insert(self, table: str, row: Row) -> None:
        columns = ", ".join(_ident(c) for c in row)
        placeholders = ", ".join("?" for _ in row)
        self._db.write(
            f"INSERT INTO {_ident(table)} ({columns}) VALUES ({placeholders})",
            tuple(row.values()),
        )

    def upsert(self, table: str, row: Row, *, key: str = "id") -> None:
        columns = ", ".join(_ident(c) for c in row)
        placeholders = ", ".join("?" for _ in row)
        updates = ", ".join(f"{c} = excluded.{c}" for c in row if c != key)
        conflict = f"DO UPDATE SET {updates}" if updates else "DO NOTHING"
        self._db.write(
            f"INSERT INTO {_ident(table)} ({columns}) VALUES ({placeholders}) "
            f"ON CONFLICT({_ident(key)}) {conflict}",
            tuple(row.values()),
        )

    def select(
        self,
        table: str,
        *,
        filters: Row | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Row]:
        where, params = _where(filters)
        sql = f"SELECT * FROM {_ident(table)}{where}"
        if order_by:
            sql += f" ORDER BY {_ident(order_by)} {'DESC' if descending else 'ASC'}"
        if limit is not None:
            sql += " LIMIT ?"
            params += (limit,)
        return [dict(r) for r in self._db.fetch_all(sql, params)]

    def update(self, table: str, values: Row, *, filters: Row) -> int:
        assignments = ", ".join(f"{_ident(c)} = ?" for c in values)
        where, params = _where(filters)
        return self._db.write(
            f"UPDATE {_ident(table)} SET {assignments}{where}",
            tuple(values.values()) + params,
        )

    def count(self, table: str, *, filters: Row | None = None) -> int:
        where, params = _where(filters)
        row = self._db.fetch_one(f"SELECT COUNT(*) as cnt FROM {_ident(table)}{where}", params)
        assert row is not None
        return row["cnt"]
