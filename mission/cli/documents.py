"""Document commands."""

import logging
from typing import Annotated

import typer

from mission import api
from mission.cli import lookup, output
from mission.cli.errors import error_feedback
from mission.cli.format import format_document, format_document_list

logger = logging.getLogger(__name__)

app = typer.Typer(help="Deliverables, research, protocols.", no_args_is_help=True)


@app.command("create")
@error_feedback
def create(
    ctx: typer.Context,
    title: Annotated[str, typer.Argument(help="Document title")],
    content: Annotated[str, typer.Argument(help="Document body")],
    doc_type: Annotated[
        str, typer.Argument(metavar="TYPE", help="deliverable|research|protocol")
    ],
    task_id: Annotated[str | None, typer.Argument(help="Attach to task ID or suffix")] = None,
):
    """Create document."""
    task = lookup.find_task(task_id) if task_id else None
    if task_id and task is None:
        logger.warning(f"Task not found: {task_id}; creating document unattached")
    doc_id = api.documents.create_document(title, content, doc_type, task.id if task else None)
    if output.echo_json({"id": doc_id}, ctx):
        return
    output.echo_text(f"Document created: {doc_id}", ctx)


@app.command("list")
@error_feedback
def list_cmd(
    ctx: typer.Context,
    task_id: Annotated[str | None, typer.Argument(help="Only documents of this task")] = None,
):
    """List documents."""
    task = lookup.task(task_id) if task_id else None
    docs = api.documents.list_documents(task.id if task else None)
    if output.echo_json(docs, ctx):
        return
    if not docs:
        output.echo_text("No documents found.", ctx)
        return
    output.echo_text(format_document_list(docs), ctx)


@app.command("show")
@error_feedback
def show(
    ctx: typer.Context,
    doc_id: Annotated[str, typer.Argument(help="Document ID or suffix")],
):
    """Show document."""
    doc = lookup.document(doc_id)
    if output.echo_json(doc, ctx):
        return
    output.echo_text(format_document(doc), ctx)
