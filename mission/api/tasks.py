"""Task operations: shared work items and their assignees."""

import logging
from collections.abc import Iterable

from mission.api.refs import require_record, require_text
from mission.errors import ValidationError
from mission.lib import ids, store
from mission.lib.patch import UNSET, compact, is_set
from mission.models import Task, TaskStatus, parse_enum

logger = logging.getLogger(__name__)


def _row_to_task(row: store.Record) -> Task:
    return store.from_row(row, Task)


def _unique(agent_ids: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(agent_ids))


def create_task(
    title: str,
    description: str = "",
    status: TaskStatus | str = TaskStatus.INBOX,
    assignee_ids: Iterable[str] = (),
) -> str:
    require_text(title, "title")
    status = parse_enum(TaskStatus, status, "task status")
    assignees = _unique(assignee_ids)
    for agent_id in assignees:
        require_record("agents", agent_id)

    task_id = store.ensure().insert(
        "tasks",
        {
            "title": title,
            "description": description or "",
            "status": status.value,
            "assignee_ids": assignees,
        },
    )
    logger.info(f"Created task {ids.short_id(task_id)}")
    return task_id


def list_tasks(status: TaskStatus | str | None = None) -> list[Task]:
    """List tasks, optionally only those in one status."""
    if status is None:
        rows = store.ensure().scan("tasks")
    else:
        status = parse_enum(TaskStatus, status, "task status")
        rows = store.ensure().scan("tasks", index="by_status", eq=status.value)
    return [_row_to_task(row) for row in rows]


def get_task(task_id: str) -> Task | None:
    row = store.ensure().get("tasks", task_id)
    return _row_to_task(row) if row else None


def update_task(
    task_id: str,
    *,
    title: str = UNSET,
    description: str = UNSET,
    status: TaskStatus | str = UNSET,
) -> None:
    """Partial update. Any status may follow any status."""
    if is_set(title):
        require_text(title, "title")
    if is_set(status):
        status = parse_enum(TaskStatus, status, "task status").value
    require_record("tasks", task_id)

    fields = compact(title=title, description=description, status=status)
    if not fields:
        return
    store.ensure().patch("tasks", task_id, fields)
    logger.info(f"Updated task {ids.short_id(task_id)}: {sorted(fields)}")


def assign_task(task_id: str, agent_ids: Iterable[str]) -> None:
    """Replace assignees. Always forces status to assigned."""
    assignees = _unique(agent_ids)
    if not assignees:
        raise ValidationError("At least one agent is required to assign a task")
    require_record("tasks", task_id)
    for agent_id in assignees:
        require_record("agents", agent_id)

    store.ensure().patch(
        "tasks",
        task_id,
        {"assignee_ids": assignees, "status": TaskStatus.ASSIGNED.value},
    )
    logger.info(f"Assigned task {ids.short_id(task_id)} to {len(assignees)} agent(s)")
