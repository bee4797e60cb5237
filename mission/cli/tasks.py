"""Task commands: create, list, update, assign."""

from typing import Annotated

import typer

from mission import api
from mission.cli import lookup, output
from mission.cli.errors import error_feedback
from mission.cli.format import format_task_list

app = typer.Typer(help="Shared work items.", no_args_is_help=True)


@app.command("create")
@error_feedback
def create(
    ctx: typer.Context,
    title: Annotated[str, typer.Argument(help="Task title")],
    description: Annotated[str, typer.Argument(help="Task description")] = "",
):
    """Create task in the inbox."""
    task_id = api.tasks.create_task(title, description)
    if output.echo_json({"id": task_id}, ctx):
        return
    output.echo_text(f"Task created: {task_id}", ctx)


@app.command("list")
@error_feedback
def list_cmd(
    ctx: typer.Context,
    status: Annotated[str | None, typer.Argument(help="Filter by status")] = None,
):
    """List tasks, optionally by status."""
    tasks = api.tasks.list_tasks(status)
    if output.echo_json(tasks, ctx):
        return
    if not tasks:
        output.echo_text("No tasks found.", ctx)
        return
    output.echo_text(format_task_list(tasks), ctx)


@app.command("update")
@error_feedback
def update(
    ctx: typer.Context,
    task_id: Annotated[str, typer.Argument(help="Task ID or suffix")],
    status: Annotated[str, typer.Argument(help="inbox|assigned|in_progress|review|done")],
):
    """Set task status."""
    task = lookup.task(task_id)
    api.tasks.update_task(task.id, status=status)
    output.echo_text(f"Task updated -> {status}", ctx)


@app.command("assign")
@error_feedback
def assign(
    ctx: typer.Context,
    task_id: Annotated[str, typer.Argument(help="Task ID or suffix")],
    agent_names: Annotated[list[str], typer.Argument(help="Agent name(s)")],
):
    """Assign task to agents. Status becomes assigned."""
    task = lookup.task(task_id)
    agents = [lookup.agent(name) for name in agent_names]
    api.tasks.assign_task(task.id, [a.id for a in agents])
    output.echo_text(f"Task assigned to {', '.join(a.name for a in agents)}", ctx)
