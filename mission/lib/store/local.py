"""SQLite-backed entity store: one JSON document table per record kind."""

import json
import logging
import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from mission.errors import NotFoundError, StoreError
from mission.lib import clock
from mission.lib.ids import uuid7
from mission.lib.patch import UNSET
from mission.lib.store import base, migrations
from mission.lib.store.base import Order, Record
from mission.lib.store.sqlite import connect

logger = logging.getLogger(__name__)


def _encode(fields: Record) -> str:
    return json.dumps(fields, separators=(",", ":"))


def _decode(row: sqlite3.Row) -> Record:
    record = json.loads(row["data"])
    record["id"] = row["id"]
    record["creation_time"] = row["creation_time"]
    return record


def _sql_value(value: Any) -> Any:
    # json_extract yields 1/0 for JSON booleans
    if isinstance(value, bool):
        return int(value)
    return value


class SqliteStore:
    """Each call runs in its own transaction; nothing spans calls."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self._lock = threading.Lock()
        db_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            migrations.ensure_schema(db_path)
            self._conn = connect(db_path)
        except sqlite3.Error as e:
            raise StoreError(f"Cannot open store at {db_path}: {e}") from e

    def insert(self, kind: str, fields: Record) -> str:
        base.check_kind(kind)
        base.check_fields(fields)
        record_id = uuid7()
        created = clock.now_ms()
        with self._transaction(f"insert {kind}") as conn:
            conn.execute(
                f"INSERT INTO {kind} (id, creation_time, data) VALUES (?, ?, ?)",
                (record_id, created, _encode(fields)),
            )
        logger.debug(f"insert {kind} {record_id}")
        return record_id

    def patch(self, kind: str, record_id: str, fields: Record) -> None:
        base.check_kind(kind)
        base.check_fields(fields)
        with self._transaction(f"patch {kind}") as conn:
            row = conn.execute(f"SELECT data FROM {kind} WHERE id = ?", (record_id,)).fetchone()
            if row is None:
                raise NotFoundError(f"{kind} record not found: {record_id}")
            data = json.loads(row["data"])
            data.update(fields)
            conn.execute(f"UPDATE {kind} SET data = ? WHERE id = ?", (_encode(data), record_id))
        logger.debug(f"patch {kind} {record_id} {sorted(fields)}")

    def get(self, kind: str, record_id: str) -> Record | None:
        base.check_kind(kind)
        rows = self._read(f"SELECT id, creation_time, data FROM {kind} WHERE id = ?", (record_id,))
        return _decode(rows[0]) if rows else None

    def scan(
        self,
        kind: str,
        index: str | None = None,
        eq: Any = UNSET,
        order: Order = "asc",
        limit: int | None = None,
    ) -> list[Record]:
        base.check_scan(kind, index, eq, order, limit)
        direction = "DESC" if order == "desc" else "ASC"
        query = f"SELECT id, creation_time, data FROM {kind}"
        params: list[Any] = []

        if index is not None:
            expr = f"json_extract(data, '$.{base.index_field(kind, index)}')"
            if eq is not UNSET:
                query += f" WHERE {expr} IS ?"
                params.append(_sql_value(eq))
            query += f" ORDER BY {expr} {direction}, rowid {direction}"
        else:
            query += f" ORDER BY rowid {direction}"

        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        rows = self._read(query, params)
        logger.debug(f"scan {kind} index={index} -> {len(rows)} rows")
        return [_decode(row) for row in rows]

    def close(self) -> None:
        self._conn.close()

    def _read(self, query: str, params) -> list[sqlite3.Row]:
        try:
            with self._lock:
                return self._conn.execute(query, params).fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"Store read failed: {e}") from e

    @contextmanager
    def _transaction(self, label: str) -> Iterator[sqlite3.Connection]:
        with self._lock:
            try:
                self._conn.execute("BEGIN IMMEDIATE")
                try:
                    yield self._conn
                except BaseException:
                    self._conn.execute("ROLLBACK")
                    raise
                self._conn.execute("COMMIT")
            except sqlite3.Error as e:
                raise StoreError(f"{label} failed: {e}") from e
