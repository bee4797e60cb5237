"""Activity feed: append-only log, read newest first."""

from mission.api.refs import require_record, require_text
from mission.errors import ValidationError
from mission.lib import clock, store
from mission.models import Activity

DEFAULT_LIMIT = 20


def _row_to_activity(row: store.Record) -> Activity:
    return store.from_row(row, Activity)


def log_activity(type: str, message: str, agent_id: str | None = None) -> str:
    require_text(type, "type")
    require_text(message, "message")
    if agent_id is not None:
        require_record("agents", agent_id)

    return store.ensure().insert(
        "activities",
        {"type": type, "agent_id": agent_id, "message": message, "timestamp": clock.now_ms()},
    )


def list_recent(limit: int | None = None) -> list[Activity]:
    limit = DEFAULT_LIMIT if limit is None else limit
    if limit < 1:
        raise ValidationError(f"Limit must be positive, got {limit}")
    rows = store.ensure().scan("activities", index="by_timestamp", order="desc", limit=limit)
    return [_row_to_activity(row) for row in rows]
