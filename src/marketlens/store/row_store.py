"""SQLite-backed row store exposing insert/select/update/delete on named tables."""

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Optional
from uuid import uuid4


class RowStore:
    """
    Key-value-ish row store. Each row is a JSON object keyed by (table, id);
    filters are plain equality on top-level keys. Writes are last-write-wins
    per row and no multi-row transactional guarantee is relied upon.
    """

    def __init__(self, db_path: str | Path = "marketlens.db"):
        self._db_path = Path(db_path)
        self._ensure_schema()

    def _connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        schema_path = Path(__file__).parent / "schema.sql"
        with self._connection() as conn:
            conn.executescript(schema_path.read_text())

    @staticmethod
    def _matches(row: dict[str, Any], filters: dict[str, Any]) -> bool:
        return all(row.get(k) == v for k, v in filters.items())

    def _load(self, table: str) -> list[dict[str, Any]]:
        with self._connection() as conn:
            rows = conn.execute(
                "SELECT data FROM rows WHERE table_name = ? ORDER BY created_at, rowid",
                (table,),
            ).fetchall()
        return [json.loads(r["data"]) for r in rows]

    def insert(self, table: str, rows: dict[str, Any] | Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
        """Insert one or many rows. Rows without an id get a uuid4. Returns the stored rows."""
        if isinstance(rows, dict):
            rows = [rows]
        now = datetime.now(timezone.utc).isoformat()
        stored: list[dict[str, Any]] = []
        with self._connection() as conn:
            for row in rows:
                row = dict(row)
                row_id = str(row.get("id") or uuid4())
                row["id"] = row_id
                conn.execute(
                    """
                    INSERT INTO rows (table_name, id, data, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?)
                    ON CONFLICT(table_name, id) DO UPDATE SET
                        data = excluded.data,
                        updated_at = excluded.updated_at
                    """,
                    (table, row_id, json.dumps(row, default=str), now, now),
                )
                stored.append(row)
            conn.commit()
        return stored

    def select(self, table: str, *, limit: Optional[int] = None, **filters: Any) -> list[dict[str, Any]]:
        """Rows of table matching every filter, oldest first."""
        matched = [r for r in self._load(table) if self._matches(r, filters)]
        return matched[:limit] if limit is not None else matched

    def select_in(self, table: str, column: str, values: Iterable[Any]) -> list[dict[str, Any]]:
        """Rows whose column value is one of values."""
        wanted = set(values)
        return [r for r in self._load(table) if r.get(column) in wanted]

    def get(self, table: str, row_id: str) -> Optional[dict[str, Any]]:
        """Single row by id."""
        with self._connection() as conn:
            row = conn.execute(
                "SELECT data FROM rows WHERE table_name = ? AND id = ?",
                (table, row_id),
            ).fetchone()
        return json.loads(row["data"]) if row else None

    def update(self, table: str, values: dict[str, Any], **filters: Any) -> int:
        """Merge values into every matching row. Returns number of rows updated."""
        now = datetime.now(timezone.utc).isoformat()
        targets = [r for r in self._load(table) if self._matches(r, filters)]
        with self._connection() as conn:
            for row in targets:
                row.update(values)
                conn.execute(
                    "UPDATE rows SET data = ?, updated_at = ? WHERE table_name = ? AND id = ?",
                    (json.dumps(row, default=str), now, table, row["id"]),
                )
            conn.commit()
        return len(targets)

    def delete(self, table: str, **filters: Any) -> int:
        """Delete every matching row. Returns number of rows deleted."""
        targets = [r["id"] for r in self._load(table) if self._matches(r, filters)]
        with self._connection() as conn:
            conn.executemany(
                "DELETE FROM rows WHERE table_name = ? AND id = ?",
                [(table, row_id) for row_id in targets],
            )
            conn.commit()
        return len(targets)
