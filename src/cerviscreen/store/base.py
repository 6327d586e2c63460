from __future__ import annotations

from typing import Any, Protocol

Row = dict[str, Any]


class TableStore(Protocol):
    """Protocol for row-level table access.

    Filters are column/value equality pairs combined with AND.
    """

    def insert(self, table: str, row: Row) -> None: ...

    def upsert(self, table: str, row: Row, *, key: str = "id") -> None:
        """Insert ``row`` or merge it into the existing row with the same key."""
        ...

    def select(
        self,
        table: str,
        *,
        filters: Row | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Row]: ...

    def update(self, table: str, values: Row, *, filters: Row) -> int:
        """Update matching rows and return how many changed."""
        ...

    def count(self, table: str, *, filters: Row | None = None) -> int: ...
