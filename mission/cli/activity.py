"""Activity feed commands."""

import logging
from typing import Annotated

import typer

from mission import api
from mission.cli import lookup, output
from mission.cli.errors import error_feedback
from mission.cli.format import format_activity_feed

logger = logging.getLogger(__name__)

app = typer.Typer(help="Team activity feed.", no_args_is_help=True)


@app.command("feed")
@error_feedback
def feed(
    ctx: typer.Context,
    limit: Annotated[int | None, typer.Argument(help="Max entries (default 20)")] = None,
):
    """Show recent activity, newest first."""
    activities = api.activities.list_recent(limit)
    if output.echo_json(activities, ctx):
        return
    if not activities:
        output.echo_text("No activities.", ctx)
        return
    output.echo_text(format_activity_feed(activities), ctx)


@app.command("log")
@error_feedback
def log(
    ctx: typer.Context,
    activity_type: Annotated[str, typer.Argument(metavar="TYPE", help="Activity label")],
    message: Annotated[str, typer.Argument(help="What happened")],
    agent_name: Annotated[str | None, typer.Argument(help="Acting agent")] = None,
):
    """Append to the activity feed."""
    agent = lookup.find_agent(agent_name) if agent_name else None
    if agent_name and agent is None:
        logger.warning(f"Agent not found: {agent_name}; logging without agent")
    activity_id = api.activities.log_activity(activity_type, message, agent.id if agent else None)
    if output.echo_json({"id": activity_id}, ctx):
        return
    output.echo_text(f"Activity logged: {activity_id}", ctx)
