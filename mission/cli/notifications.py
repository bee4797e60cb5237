"""Notification commands: raise, list, deliver."""

from typing import Annotated

import typer

from mission import api
from mission.cli import lookup, output
from mission.cli.errors import error_feedback
from mission.cli.format import format_notifications

app = typer.Typer(help="Pull-based agent notifications.", no_args_is_help=True)


@error_feedback
def notify(
    ctx: typer.Context,
    agent_name: Annotated[str, typer.Argument(help="Agent to notify")],
    content: Annotated[str, typer.Argument(help="Notification text")],
):
    """Notify an agent."""
    agent = lookup.agent(agent_name)
    notification_id = api.notifications.notify(agent.id, content)
    if output.echo_json({"id": notification_id}, ctx):
        return
    output.echo_text(f"Notification sent to {agent.name}: {notification_id}", ctx)


@app.command("list")
@error_feedback
def list_cmd(
    ctx: typer.Context,
    agent_name: Annotated[str | None, typer.Argument(help="Only this agent's")] = None,
):
    """List undelivered notifications."""
    agent_id = lookup.agent(agent_name).id if agent_name else None
    notifications = api.notifications.list_undelivered(agent_id)
    if output.echo_json(notifications, ctx):
        return
    if not notifications:
        output.echo_text("No undelivered notifications.", ctx)
        return
    output.echo_text(format_notifications(notifications, lookup.agent_names()), ctx)


@app.command("deliver")
@error_feedback
def deliver(
    ctx: typer.Context,
    notification_id: Annotated[str, typer.Argument(help="Notification ID or suffix")],
):
    """Mark notification delivered."""
    notification = lookup.notification(notification_id)
    api.notifications.mark_delivered(notification.id)
    output.echo_text("Notification marked delivered", ctx)
