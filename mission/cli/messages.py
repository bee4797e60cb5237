"""Message commands: post to and read task threads."""

from typing import Annotated

import typer

from mission import api
from mission.cli import lookup, output
from mission.cli.errors import error_feedback
from mission.cli.format import format_messages
from mission.errors import ValidationError

app = typer.Typer(help="Task message threads.", no_args_is_help=True)


@app.command("post")
@error_feedback
def post(
    ctx: typer.Context,
    task_id: Annotated[str, typer.Argument(help="Task ID or suffix")],
    content: Annotated[str, typer.Argument(help="Message text")],
    agent_name: Annotated[str | None, typer.Argument(help="Sender (default: first agent)")] = None,
    attachments: Annotated[
        list[str] | None, typer.Option("--attach", help="Attachment reference (repeatable)")
    ] = None,
):
    """Post message on a task."""
    task = lookup.task(task_id)
    if agent_name:
        sender_id = lookup.agent(agent_name).id
    else:
        agents = api.agents.list_agents()
        if not agents:
            raise ValidationError("No agents found; create one first with `mc agent create`")
        sender_id = agents[0].id

    message_id = api.messages.post_message(task.id, sender_id, content, attachments)
    if output.echo_json({"id": message_id}, ctx):
        return
    output.echo_text(f"Message posted: {message_id}", ctx)


@app.command("list")
@error_feedback
def list_cmd(
    ctx: typer.Context,
    task_id: Annotated[str, typer.Argument(help="Task ID or suffix")],
):
    """Show a task's thread, oldest first."""
    task = lookup.task(task_id)
    messages = api.messages.list_messages(task.id)
    if output.echo_json(messages, ctx):
        return
    if not messages:
        output.echo_text("No messages for this task.", ctx)
        return
    output.echo_text(format_messages(messages, lookup.agent_names()), ctx)
