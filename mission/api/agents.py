"""Agent operations: registry of named actors and their status."""

import logging

from mission.api.refs import require_record, require_text
from mission.errors import ValidationError
from mission.lib import ids, store
from mission.lib.patch import UNSET, compact, is_set
from mission.models import Agent, AgentStatus, parse_enum

logger = logging.getLogger(__name__)


def _row_to_agent(row: store.Record) -> Agent:
    return store.from_row(row, Agent)


def create_agent(
    name: str,
    role: str,
    status: AgentStatus | str = AgentStatus.IDLE,
    session_key: str | None = None,
) -> str:
    """Register agent. Names are unique by lookup-before-insert, not by the store."""
    require_text(name, "name")
    require_text(role, "role")
    status = parse_enum(AgentStatus, status, "agent status")

    if get_agent_by_name(name) is not None:
        raise ValidationError(f"Agent '{name}' already exists")

    agent_id = store.ensure().insert(
        "agents",
        {"name": name, "role": role, "status": status.value, "session_key": session_key},
    )
    logger.info(f"Created agent {name} ({ids.short_id(agent_id)})")
    return agent_id


def list_agents() -> list[Agent]:
    return [_row_to_agent(row) for row in store.ensure().scan("agents")]


def get_agent(agent_id: str) -> Agent | None:
    row = store.ensure().get("agents", agent_id)
    return _row_to_agent(row) if row else None


def get_agent_by_name(name: str) -> Agent | None:
    """Exact indexed lookup, then case-insensitive match. First match wins."""
    rows = store.ensure().scan("agents", index="by_name", eq=name, limit=1)
    if rows:
        return _row_to_agent(rows[0])
    return ids.match_name(name, list_agents())


def update_status(
    agent_id: str,
    status: AgentStatus | str,
    current_task_id: str | None = UNSET,
) -> None:
    """Set status; current_task_id is written only when supplied."""
    status = parse_enum(AgentStatus, status, "agent status")
    require_record("agents", agent_id)
    if is_set(current_task_id) and current_task_id is not None:
        require_record("tasks", current_task_id)

    fields = compact(status=status.value, current_task_id=current_task_id)
    store.ensure().patch("agents", agent_id, fields)
    logger.info(f"Agent {ids.short_id(agent_id)} -> {status.value}")
