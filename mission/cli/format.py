"""Record formatting for CLI display."""

from datetime import datetime, timezone

from mission.lib.ids import short_id
from mission.models import (
    Activity,
    Agent,
    CalendarEntry,
    Document,
    Message,
    Notification,
    Task,
)


def ts(ms: int | None) -> str:
    """Epoch ms as `YYYY-MM-DD HH:MM:SS` UTC."""
    if ms is None:
        return "-"
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def _value(field) -> str:
    return getattr(field, "value", field)


def format_task_list(tasks: list[Task]) -> str:
    lines = []
    for task in tasks:
        count = len(task.assignee_ids)
        assignees = f" ({count} assignee(s))" if count else ""
        lines.append(f"[{short_id(task.id)}] [{_value(task.status)}] {task.title}{assignees}")
    return "\n".join(lines)


def format_agent_list(agents: list[Agent]) -> str:
    lines = []
    for agent in agents:
        task = f" -> task:{short_id(agent.current_task_id)}" if agent.current_task_id else ""
        lines.append(
            f"[{short_id(agent.id)}] [{_value(agent.status)}] {agent.name} - {agent.role}{task}"
        )
    return "\n".join(lines)


def format_messages(messages: list[Message], names: dict[str, str]) -> str:
    lines = []
    for msg in messages:
        sender = names.get(msg.from_agent_id, short_id(msg.from_agent_id))
        attached = f" (+{len(msg.attachments)} attachment(s))" if msg.attachments else ""
        lines.append(f"[{ts(msg.creation_time)}] {sender}: {msg.content}{attached}")
    return "\n".join(lines)


def format_document_list(docs: list[Document]) -> str:
    return "\n".join(f"[{short_id(d.id)}] [{_value(d.type)}] {d.title}" for d in docs)


def format_document(doc: Document) -> str:
    lines = [
        f"ID: {doc.id}",
        f"Title: {doc.title}",
        f"Type: {_value(doc.type)}",
    ]
    if doc.task_id:
        lines.append(f"Task: {short_id(doc.task_id)}")
    lines.append(f"\n{doc.content}")
    return "\n".join(lines)


def format_activity_feed(activities: list[Activity]) -> str:
    return "\n".join(f"[{ts(a.timestamp)}] [{a.type}] {a.message}" for a in activities)


def format_notifications(notifications: list[Notification], names: dict[str, str]) -> str:
    lines = []
    for n in notifications:
        to = names.get(n.mentioned_agent_id, short_id(n.mentioned_agent_id))
        lines.append(f"[{short_id(n.id)}] -> {to}: {n.content}")
    return "\n".join(lines)


def format_calendar(entries: list[CalendarEntry]) -> str:
    lines = []
    for entry in entries:
        state = "on" if entry.enabled else "off"
        upcoming = f" (next: {ts(entry.next_run_at)})" if entry.enabled and entry.next_run_at else ""
        lines.append(
            f"[{short_id(entry.id)}] [{state}] {entry.schedule}: {entry.title}"
            f" @{entry.agent_id or '-'}{upcoming}"
        )
    return "\n".join(lines)
