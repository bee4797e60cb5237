"""Schema migrations for the sqlite store."""

import logging
import sqlite3
from collections.abc import Callable
from pathlib import Path

from mission.errors import StoreError
from mission.lib.store.base import INDEXES
from mission.lib.store.sqlite import connect

logger = logging.getLogger(__name__)

Migration = tuple[str, str | Callable[[sqlite3.Connection], None]]


def _initial_schema() -> str:
    statements = []
    for kind, indexes in INDEXES.items():
        statements.append(
            f"CREATE TABLE IF NOT EXISTS {kind} ("
            "id TEXT PRIMARY KEY, "
            "creation_time INTEGER NOT NULL, "
            "data TEXT NOT NULL);"
        )
        for index, field in indexes.items():
            statements.append(
                f"CREATE INDEX IF NOT EXISTS idx_{kind}_{index} "
                f"ON {kind}(json_extract(data, '$.{field}'));"
            )
    return "\n".join(statements)


MIGRATIONS: list[Migration] = [
    ("001_initial_schema", _initial_schema()),
]


def ensure_schema(db_path: Path, migs: list[Migration] | None = None) -> None:
    """Ensure schema exists and apply migrations."""
    conn = connect(db_path)
    try:
        migrate(conn, MIGRATIONS if migs is None else migs)
    finally:
        conn.close()


def migrate(conn: sqlite3.Connection, migs: list[Migration]) -> None:
    """Apply pending migrations, refusing any that lose rows."""
    conn.execute("CREATE TABLE IF NOT EXISTS _migrations (name TEXT PRIMARY KEY)")

    for name, migration in migs:
        applied = conn.execute("SELECT 1 FROM _migrations WHERE name = ?", (name,)).fetchone()
        if applied:
            continue

        before = {table: _get_table_count(conn, table) for table in _tables(conn)}
        try:
            conn.execute("BEGIN IMMEDIATE")
            if callable(migration):
                migration(conn)
            else:
                for statement in migration.split(";"):
                    if statement.strip():
                        conn.execute(statement)

            for table, count_before in before.items():
                _check_migration_safety(conn, table, count_before)

            conn.execute("INSERT OR IGNORE INTO _migrations (name) VALUES (?)", (name,))
            conn.execute("COMMIT")
        except Exception as e:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            logger.error(f"Migration '{name}' failed: {e}")
            if isinstance(e, StoreError):
                raise
            raise StoreError(f"Migration '{name}' failed: {e}") from e
        logger.info(f"Applied migration {name}")


def _tables(conn: sqlite3.Connection) -> list[str]:
    cursor = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' "
        "AND name != '_migrations' AND name != 'sqlite_sequence'"
    )
    return [row[0] for row in cursor.fetchall()]


def _get_table_count(conn: sqlite3.Connection, table: str) -> int:
    """Row count for table, 0 if it doesn't exist."""
    try:
        result = conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()
        return result[0] if result else 0
    except sqlite3.OperationalError:
        return 0


def _check_migration_safety(conn: sqlite3.Connection, table: str, before: int) -> None:
    after = _get_table_count(conn, table)
    lost = before - after
    if lost > 0:
        msg = f"Migration {table}: {lost} rows lost (before: {before}, after: {after})"
        logger.error(msg)
        raise StoreError(msg)
