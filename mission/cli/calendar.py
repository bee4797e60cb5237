"""Calendar commands: recurring schedule entries."""

from pathlib import Path
from typing import Annotated

import typer
import yaml

from mission import api
from mission.cli import lookup, output
from mission.cli.errors import error_feedback
from mission.cli.format import format_calendar, ts
from mission.errors import ValidationError
from mission.lib import schedule
from mission.lib.ids import short_id

app = typer.Typer(help="Recurring schedule.", no_args_is_help=True)


@app.command("list")
@error_feedback
def list_cmd(ctx: typer.Context):
    """List calendar entries by schedule."""
    entries = api.calendar.list_entries()
    if output.echo_json(entries, ctx):
        return
    if not entries:
        output.echo_text("No calendar entries.", ctx)
        return
    output.echo_text(format_calendar(entries), ctx)


@app.command("toggle")
@error_feedback
def toggle(
    ctx: typer.Context,
    entry_id: Annotated[str, typer.Argument(help="Entry ID or suffix")],
):
    """Enable or disable an entry."""
    entry = lookup.entry(entry_id)
    enabled = api.calendar.toggle_entry(entry.id)
    output.echo_text(f"{entry.title}: {'enabled' if enabled else 'disabled'}", ctx)


@app.command("run")
@error_feedback
def run(
    ctx: typer.Context,
    entry_id: Annotated[str, typer.Argument(help="Entry ID or suffix")],
):
    """Record a run now and schedule the next one."""
    entry = lookup.entry(entry_id)
    next_run_at = api.calendar.record_run(entry.id)
    output.echo_text(f"{entry.title}: next run {ts(next_run_at)} UTC", ctx)


@app.command("next")
@error_feedback
def next_cmd(
    ctx: typer.Context,
    cron_expr: Annotated[str, typer.Argument(help='e.g. "0 14 * * 5"')],
):
    """Show the next occurrence of a recurrence expression."""
    next_run_at = schedule.next_run_ms(cron_expr)
    if output.echo_json({"cron_expr": cron_expr, "next_run_at": next_run_at}, ctx):
        return
    output.echo_text(f"{ts(next_run_at)} UTC", ctx)


@app.command("seed")
@error_feedback
def seed(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="YAML file with an `entries` list")],
):
    """Upsert calendar entries from a YAML file, keyed by title."""
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    entries = data.get("entries") if isinstance(data, dict) else data
    if not isinstance(entries, list):
        raise ValidationError(f"{path}: expected a list of entries")

    result = api.calendar.seed_entries(entries)
    if not output.echo_json(result, ctx):
        for title, entry_id in result.upserted:
            output.echo_text(f"Upserted: {title} ({short_id(entry_id)})", ctx)
        for title, error in result.failed:
            typer.echo(f"Failed: {title}: {error}", err=True)
        output.echo_text("Seeding complete.", ctx)

    if result.failed:
        raise typer.Exit(1)
