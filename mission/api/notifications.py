"""Notifications: pulled by agents, delivered exactly once."""

import logging

from mission.api.refs import require_record, require_text
from mission.lib import clock, ids, store
from mission.models import Notification

logger = logging.getLogger(__name__)


def _row_to_notification(row: store.Record) -> Notification:
    return store.from_row(row, Notification)


def notify(mentioned_agent_id: str, content: str) -> str:
    require_text(content, "content")
    require_record("agents", mentioned_agent_id)

    return store.ensure().insert(
        "notifications",
        {
            "mentioned_agent_id": mentioned_agent_id,
            "content": content,
            "delivered": False,
            "created_at": clock.now_ms(),
        },
    )


def list_undelivered(agent_id: str | None = None) -> list[Notification]:
    if agent_id is None:
        rows = store.ensure().scan("notifications", index="by_delivered", eq=False)
    else:
        rows = [
            row
            for row in store.ensure().scan("notifications", index="by_agent", eq=agent_id)
            if not row.get("delivered")
        ]
    return [_row_to_notification(row) for row in rows]


def list_notifications(agent_id: str | None = None) -> list[Notification]:
    """All notifications, delivered or not."""
    if agent_id is None:
        rows = store.ensure().scan("notifications")
    else:
        rows = store.ensure().scan("notifications", index="by_agent", eq=agent_id)
    return [_row_to_notification(row) for row in rows]


def mark_delivered(notification_id: str) -> None:
    """Flip delivered to true. Repeat calls are no-ops."""
    row = require_record("notifications", notification_id)
    if row.get("delivered"):
        return
    store.ensure().patch("notifications", notification_id, {"delivered": True})
    logger.info(f"Delivered notification {ids.short_id(notification_id)}")
