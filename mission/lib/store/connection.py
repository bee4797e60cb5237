import contextvars
import logging
import threading
from dataclasses import fields
from pathlib import Path
from typing import Any, TypeVar

from mission.lib import config
from mission.lib.store.base import Store
from mission.lib.store.local import SqliteStore
from mission.lib.store.remote import HttpStore

T = TypeVar("T")

logger = logging.getLogger(__name__)

_DB_FILE = "mission.db"
_lock = threading.Lock()
_stores: dict[str, Store] = {}

# Overrides for test isolation: a db directory, or a whole store
_db_path_override: contextvars.ContextVar[Path | None] = contextvars.ContextVar(
    "db_path_override", default=None
)
_store_override: contextvars.ContextVar[Store | None] = contextvars.ContextVar(
    "store_override", default=None
)


def from_row(row: dict[str, Any], dataclass_type: type[T]) -> T:
    """Convert a store record to a dataclass instance, ignoring unknown keys."""
    field_names = {f.name for f in fields(dataclass_type)}
    kwargs = {key: row[key] for key in field_names if key in row}
    return dataclass_type(**kwargs)


def ensure() -> Store:
    """Return the configured store, opening it on first use.

    A configured URL selects the HTTP backend; otherwise sqlite.
    """
    override = _store_override.get()
    if override is not None:
        return override

    db_dir = _db_path_override.get()
    if db_dir is not None:
        cache_key = str(db_dir / _DB_FILE)
    else:
        settings = config.store_settings()
        cache_key = settings.url or str(settings.db_path)

    with _lock:
        store = _stores.get(cache_key)
        if store is not None:
            return store

        if db_dir is not None:
            store = SqliteStore(db_dir / _DB_FILE)
        elif settings.url:
            logger.info(f"Using remote store at {settings.url}")
            store = HttpStore(settings.url, settings.deploy_key, timeout=settings.timeout)
        else:
            store = SqliteStore(settings.db_path)

        _stores[cache_key] = store
        return store


def close_all() -> None:
    """Close all cached stores."""
    with _lock:
        for store in _stores.values():
            store.close()
        _stores.clear()


def set_test_db_path(db_dir: Path | None) -> None:
    """Point ensure() at a sqlite db under db_dir. None clears."""
    _db_path_override.set(db_dir)


def set_store(store: Store | None) -> None:
    """Make ensure() return store. None clears."""
    _store_override.set(store)


def _reset_for_testing() -> None:
    _db_path_override.set(None)
    _store_override.set(None)
    close_all()
