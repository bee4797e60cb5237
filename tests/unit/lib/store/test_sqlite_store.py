"""SQLite store: primitive contracts."""

import pytest

from mission.errors import NotFoundError, ValidationError
from mission.lib import clock
from mission.lib.store import SqliteStore


@pytest.fixture
def db(tmp_path):
    store = SqliteStore(tmp_path / "mission.db")
    yield store
    store.close()


def test_insert_get_roundtrip(db, fixed_clock):
    record_id = db.insert("tasks", {"title": "T", "status": "inbox", "assignee_ids": ["a", "b"]})

    record = db.get("tasks", record_id)
    assert record["id"] == record_id
    assert record["title"] == "T"
    assert record["assignee_ids"] == ["a", "b"]
    assert record["creation_time"] == clock.now_ms()


def test_get_missing_returns_none(db):
    assert db.get("tasks", "nope") is None


def test_ids_are_collection_scoped(db):
    record_id = db.insert("tasks", {"title": "T"})
    assert db.get("agents", record_id) is None


def test_patch_is_partial_merge(db):
    record_id = db.insert("tasks", {"title": "T", "description": "D", "status": "inbox"})
    db.patch("tasks", record_id, {"status": "done"})

    record = db.get("tasks", record_id)
    assert record["status"] == "done"
    assert record["title"] == "T"
    assert record["description"] == "D"


def test_patch_explicit_none_overwrites(db):
    record_id = db.insert("agents", {"name": "A", "current_task_id": "t1"})
    db.patch("agents", record_id, {"current_task_id": None})
    assert db.get("agents", record_id)["current_task_id"] is None


def test_patch_missing_record(db):
    with pytest.raises(NotFoundError, match="nope"):
        db.patch("tasks", "nope", {"status": "done"})


def test_store_assigned_fields_not_writable(db):
    record_id = db.insert("tasks", {"title": "T"})
    with pytest.raises(ValidationError):
        db.patch("tasks", record_id, {"id": "other"})
    with pytest.raises(ValidationError):
        db.insert("tasks", {"title": "T", "creation_time": 1})


def test_scan_index_equality(db):
    a = db.insert("tasks", {"title": "A", "status": "inbox"})
    db.insert("tasks", {"title": "B", "status": "done"})
    c = db.insert("tasks", {"title": "C", "status": "inbox"})

    rows = db.scan("tasks", index="by_status", eq="inbox")
    assert [r["id"] for r in rows] == [a, c]


def test_scan_boolean_equality(db):
    pending = db.insert("notifications", {"content": "x", "delivered": False})
    db.insert("notifications", {"content": "y", "delivered": True})

    rows = db.scan("notifications", index="by_delivered", eq=False)
    assert [r["id"] for r in rows] == [pending]
    assert rows[0]["delivered"] is False


def test_scan_ordered_by_index_desc_with_limit(db):
    for ts in (300, 100, 200):
        db.insert("activities", {"type": "t", "message": str(ts), "timestamp": ts})

    rows = db.scan("activities", index="by_timestamp", order="desc", limit=2)
    assert [r["timestamp"] for r in rows] == [300, 200]


def test_scan_without_index_is_insertion_order(db):
    ids = [db.insert("documents", {"title": str(i)}) for i in range(3)]
    assert [r["id"] for r in db.scan("documents")] == ids
    assert [r["id"] for r in db.scan("documents", order="desc")] == ids[::-1]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"kind": "widgets"},
        {"kind": "tasks", "index": "by_title"},
        {"kind": "tasks", "eq": "inbox"},
        {"kind": "tasks", "order": "sideways"},
        {"kind": "tasks", "limit": 0},
    ],
)
def test_scan_rejects_bad_arguments(db, kwargs):
    with pytest.raises(ValidationError):
        db.scan(**kwargs)


def test_data_survives_reopen(tmp_path):
    first = SqliteStore(tmp_path / "mission.db")
    record_id = first.insert("agents", {"name": "Jarvis"})
    first.close()

    second = SqliteStore(tmp_path / "mission.db")
    assert second.get("agents", record_id)["name"] == "Jarvis"
    second.close()
