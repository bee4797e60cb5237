"""Entity store contract: keyed inserts, partial patches, gets, ordered scans."""

from typing import Any, Literal, Protocol

from mission.errors import ValidationError
from mission.lib.patch import UNSET

Record = dict[str, Any]
Order = Literal["asc", "desc"]

# Store-assigned keys; never writable by callers.
RESERVED = frozenset({"id", "creation_time"})

INDEXES: dict[str, dict[str, str]] = {
    "agents": {"by_name": "name"},
    "tasks": {"by_status": "status"},
    "messages": {"by_task": "task_id"},
    "activities": {"by_timestamp": "timestamp"},
    "documents": {"by_task": "task_id"},
    "notifications": {"by_agent": "mentioned_agent_id", "by_delivered": "delivered"},
    "calendar": {"by_title": "title"},
}

KINDS = tuple(INDEXES)


class Store(Protocol):
    def insert(self, kind: str, fields: Record) -> str: ...

    def patch(self, kind: str, record_id: str, fields: Record) -> None: ...

    def get(self, kind: str, record_id: str) -> Record | None: ...

    def scan(
        self,
        kind: str,
        index: str | None = None,
        eq: Any = UNSET,
        order: Order = "asc",
        limit: int | None = None,
    ) -> list[Record]: ...

    def close(self) -> None: ...


def check_kind(kind: str) -> None:
    if kind not in INDEXES:
        raise ValidationError(f"Unknown record kind: {kind}")


def index_field(kind: str, index: str) -> str:
    check_kind(kind)
    try:
        return INDEXES[kind][index]
    except KeyError as e:
        raise ValidationError(f"Unknown index '{index}' on {kind}") from e


def check_fields(fields: Record) -> None:
    reserved = RESERVED & fields.keys()
    if reserved:
        raise ValidationError(f"Store-assigned fields cannot be written: {sorted(reserved)}")


def check_scan(kind: str, index: str | None, eq: Any, order: str, limit: int | None) -> None:
    check_kind(kind)
    if index is not None:
        index_field(kind, index)
    elif eq is not UNSET:
        raise ValidationError("Equality scan requires an index")
    if order not in ("asc", "desc"):
        raise ValidationError(f"Invalid order: {order}")
    if limit is not None and limit < 1:
        raise ValidationError(f"Limit must be positive, got {limit}")
