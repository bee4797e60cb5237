"""Message operations: append-only task threads."""

from mission.api.refs import require_record, require_text
from mission.lib import store
from mission.models import Message


def _row_to_message(row: store.Record) -> Message:
    return store.from_row(row, Message)


def post_message(
    task_id: str,
    from_agent_id: str,
    content: str,
    attachments: list[str] | None = None,
) -> str:
    require_text(content, "content")
    require_record("tasks", task_id)
    require_record("agents", from_agent_id)

    fields = {"task_id": task_id, "from_agent_id": from_agent_id, "content": content}
    if attachments:
        fields["attachments"] = list(attachments)
    return store.ensure().insert("messages", fields)


def list_messages(task_id: str) -> list[Message]:
    """Messages on a task, oldest first."""
    rows = store.ensure().scan("messages", index="by_task", eq=task_id)
    return [_row_to_message(row) for row in rows]
