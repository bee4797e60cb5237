"""Coordination API: one module per entity, one function per operation."""

from mission.api import activities, agents, calendar, documents, messages, notifications, tasks

__all__ = [
    "activities",
    "agents",
    "calendar",
    "documents",
    "messages",
    "notifications",
    "tasks",
]
