"""
Content persistence (raw SQL).

One `TableRepository` per entity table. Identifiers come from the static
`Table` definitions in `content/kinds.py`, never from request data; values
always travel as positional parameters.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from core.db import Database


@dataclass(frozen=True)
class Table:
    name: str
    # Columns a client may write.
    columns: tuple[str, ...]
    json_columns: frozenset[str] = field(default_factory=frozenset)
    # Refreshed with now() on every update.
    touch_column: str | None = None


def _quote(identifier: str) -> str:
    # "row" and "index" are keywords; quote everything.
    return '"' + identifier.replace('"', '""') + '"'


def _json_arg(value: Any) -> str | None:
    """
    asyncpg does not encode Python lists/dicts for json parameters.
    We pass JSON as a string and cast to jsonb in SQL.
    """
    if value is None:
        return None
    return json.dumps(value, ensure_ascii=True)


class TableRepository:
    def __init__(self, db: Database, table: Table) -> None:
        self.db = db
        self.table = table

    def _placeholder(self, column: str, position: int) -> str:
        if column in self.table.json_columns:
            return f"${position}::jsonb"
        return f"${position}"

    def _arg(self, column: str, value: Any) -> Any:
        if column in self.table.json_columns:
            return _json_arg(value)
        return value

    def _check_columns(self, values: dict[str, Any]) -> None:
        unknown = set(values) - set(self.table.columns)
        if unknown:
            raise ValueError(f"Unknown columns for {self.table.name}: {sorted(unknown)}")

    def _decode(self, row: dict[str, Any] | None) -> dict[str, Any] | None:
        if row is None:
            return None
        for column in self.table.json_columns:
            if isinstance(row.get(column), str):
                row[column] = json.loads(row[column])
        return row

    async def list_all(self) -> list[dict[str, Any]]:
        rows = await self.db.fetch_all(f"SELECT * FROM {_quote(self.table.name)}")
        return [self._decode(r) for r in rows]

    async def list_where(self, column: str, value: Any, *, order_by: str) -> list[dict[str, Any]]:
        rows = await self.db.fetch_all(
            f"""
            SELECT *
            FROM {_quote(self.table.name)}
            WHERE {_quote(column)} = $1
            ORDER BY {_quote(order_by)} ASC
            """,
            value,
        )
        return [self._decode(r) for r in rows]

    async def get(self, record_id: int) -> dict[str, Any] | None:
        row = await self.db.fetch_one(
            f"SELECT * FROM {_quote(self.table.name)} WHERE id = $1",
            record_id,
        )
        return self._decode(row)

    async def insert(self, values: dict[str, Any]) -> dict[str, Any]:
        self._check_columns(values)
        columns = list(values)
        row = await self.db.fetch_one(
            f"""
            INSERT INTO {_quote(self.table.name)} ({", ".join(_quote(c) for c in columns)})
            VALUES ({", ".join(self._placeholder(c, i) for i, c in enumerate(columns, start=1))})
            RETURNING *
            """,
            *[self._arg(c, values[c]) for c in columns],
        )
        if row is None:
            raise RuntimeError(f"Failed to insert into {self.table.name}.")
        return self._decode(row)

    async def update(self, record_id: int, values: dict[str, Any]) -> dict[str, Any] | None:
        """
        Apply `values` to one row. Returns the updated row, or None when the id is unknown.
        """
        self._check_columns(values)
        if not values:
            raise ValueError("update called with no values.")

        columns = list(values)
        assignments = [f"{_quote(c)} = {self._placeholder(c, i)}" for i, c in enumerate(columns, start=1)]
        if self.table.touch_column:
            assignments.append(f"{_quote(self.table.touch_column)} = now()")

        row = await self.db.fetch_one(
            f"""
            UPDATE {_quote(self.table.name)}
            SET {", ".join(assignments)}
            WHERE id = ${len(columns) + 1}
            RETURNING *
            """,
            *[self._arg(c, values[c]) for c in columns],
            record_id,
        )
        return self._decode(row)

    async def delete(self, record_id: int) -> dict[str, Any] | None:
        row = await self.db.fetch_one(
            f"DELETE FROM {_quote(self.table.name)} WHERE id = $1 RETURNING *",
            record_id,
        )
        return self._decode(row)
