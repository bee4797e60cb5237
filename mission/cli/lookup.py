"""Translate human references (id fragments, agent names) into records."""

from mission import api
from mission.errors import NotFoundError
from mission.lib import ids
from mission.models import Agent, CalendarEntry, Document, Notification, Task


def task(fragment: str) -> Task:
    return ids.require(fragment, api.tasks.list_tasks(), "Task", strict=True)


def find_task(fragment: str) -> Task | None:
    return ids.resolve(fragment, api.tasks.list_tasks(), strict=True)


def find_agent(name: str) -> Agent | None:
    return api.agents.get_agent_by_name(name)


def agent(name: str) -> Agent:
    found = find_agent(name)
    if found is None:
        raise NotFoundError(f"Agent not found: {name}")
    return found


def document(fragment: str) -> Document:
    return ids.require(fragment, api.documents.list_documents(), "Document", strict=True)


def notification(fragment: str) -> Notification:
    return ids.require(
        fragment, api.notifications.list_notifications(), "Notification", strict=True
    )


def entry(fragment: str) -> CalendarEntry:
    return ids.require(fragment, api.calendar.list_entries(), "Calendar entry", strict=True)


def agent_names() -> dict[str, str]:
    return {a.id: a.name for a in api.agents.list_agents()}
