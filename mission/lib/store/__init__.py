"""Entity store: contract, backends, and connection management."""

from mission.lib.store.base import INDEXES, KINDS, Record, Store
from mission.lib.store.connection import (
    _reset_for_testing,
    close_all,
    ensure,
    from_row,
    set_store,
    set_test_db_path,
)
from mission.lib.store.local import SqliteStore
from mission.lib.store.remote import HttpStore

__all__ = [
    "INDEXES",
    "KINDS",
    "Record",
    "Store",
    "SqliteStore",
    "HttpStore",
    "ensure",
    "from_row",
    "close_all",
    "set_store",
    "set_test_db_path",
    "_reset_for_testing",
]
