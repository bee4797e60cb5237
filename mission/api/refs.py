"""Reference checks shared by the coordination operations."""

from mission.errors import NotFoundError, ValidationError
from mission.lib import store
from mission.lib.store import Record

LABELS = {
    "agents": "Agent",
    "tasks": "Task",
    "messages": "Message",
    "activities": "Activity",
    "documents": "Document",
    "notifications": "Notification",
    "calendar": "Calendar entry",
}


def require_record(kind: str, record_id: str) -> Record:
    """Fetch a record by full id or raise NotFoundError echoing the id."""
    if not record_id:
        raise ValidationError(f"{LABELS[kind]} id is required")
    record = store.ensure().get(kind, record_id)
    if record is None:
        raise NotFoundError(f"{LABELS[kind]} not found: {record_id}")
    return record


def require_text(value: str | None, name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{name} is required")
    return value
