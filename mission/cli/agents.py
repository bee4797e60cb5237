"""Agent commands: create, list, status."""

from typing import Annotated

import typer

from mission import api
from mission.cli import lookup, output
from mission.cli.errors import error_feedback
from mission.cli.format import format_agent_list
from mission.lib.patch import UNSET

app = typer.Typer(help="Named agents and their status.", no_args_is_help=True)


@app.command("create")
@error_feedback
def create(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Unique agent name")],
    role: Annotated[str, typer.Argument(help="Agent role")],
    session_key: Annotated[
        str | None, typer.Option("--session", help="Opaque session key")
    ] = None,
):
    """Register agent."""
    agent_id = api.agents.create_agent(name, role, session_key=session_key)
    if output.echo_json({"id": agent_id}, ctx):
        return
    output.echo_text(f"Agent created: {agent_id}", ctx)


@app.command("list")
@error_feedback
def list_cmd(ctx: typer.Context):
    """List agents."""
    agents = api.agents.list_agents()
    if output.echo_json(agents, ctx):
        return
    if not agents:
        output.echo_text("No agents found.", ctx)
        return
    output.echo_text(format_agent_list(agents), ctx)


@app.command("status")
@error_feedback
def status(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Agent name")],
    new_status: Annotated[str, typer.Argument(metavar="STATUS", help="idle|active|blocked")],
    task_id: Annotated[
        str | None, typer.Option("--task", help="Current task ID or suffix")
    ] = None,
):
    """Set agent status, optionally with its current task."""
    agent = lookup.agent(name)
    current_task_id = lookup.task(task_id).id if task_id else UNSET
    api.agents.update_status(agent.id, new_status, current_task_id=current_task_id)
    output.echo_text(f"{agent.name} status -> {new_status}", ctx)
