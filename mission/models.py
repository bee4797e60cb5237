from dataclasses import dataclass, field
from enum import Enum
from typing import TypeVar

from mission.errors import ValidationError

E = TypeVar("E", bound=Enum)


class AgentStatus(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    BLOCKED = "blocked"


class TaskStatus(str, Enum):
    INBOX = "inbox"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    DONE = "done"


class DocumentType(str, Enum):
    DELIVERABLE = "deliverable"
    RESEARCH = "research"
    PROTOCOL = "protocol"


class EntryType(str, Enum):
    CRON = "cron"
    TASK = "task"


def parse_enum(enum_type: type[E], value: str | E, field_name: str) -> E:
    """Coerce raw input to an enum member, rejecting unknown values."""
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(value)
    except ValueError as e:
        allowed = "|".join(m.value for m in enum_type)
        raise ValidationError(f"Invalid {field_name} '{value}' (expected {allowed})") from e


@dataclass
class Agent:
    id: str
    name: str
    role: str
    status: AgentStatus | str = AgentStatus.IDLE
    current_task_id: str | None = None
    session_key: str | None = None
    creation_time: int | None = None


@dataclass
class Task:
    id: str
    title: str
    description: str = ""
    status: TaskStatus | str = TaskStatus.INBOX
    assignee_ids: list[str] = field(default_factory=list)
    creation_time: int | None = None


@dataclass
class Message:
    id: str
    task_id: str
    from_agent_id: str
    content: str
    attachments: list[str] | None = None
    creation_time: int | None = None


@dataclass
class Activity:
    id: str
    type: str
    message: str
    timestamp: int
    agent_id: str | None = None
    creation_time: int | None = None


@dataclass
class Document:
    id: str
    title: str
    content: str
    type: DocumentType | str
    task_id: str | None = None
    creation_time: int | None = None


@dataclass
class Notification:
    id: str
    mentioned_agent_id: str
    content: str
    created_at: int
    delivered: bool = False
    creation_time: int | None = None


@dataclass
class CalendarEntry:
    id: str
    title: str
    description: str
    schedule: str
    cron_expr: str
    enabled: bool
    type: EntryType | str
    agent_id: str
    next_run_at: int | None = None
    last_run_at: int | None = None
    creation_time: int | None = None
