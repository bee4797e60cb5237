import logging

import typer

from mission.cli import activity, agents, calendar, documents, messages, notifications, output, tasks

app = typer.Typer(
    invoke_without_command=True,
    no_args_is_help=False,
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback(invoke_without_command=True)
def common_options_callback(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", "-j", help="Output in JSON format."),
    quiet_output: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging to stderr."),
):
    """Mission control

    Coordinate agents, tasks, messages, documents, notifications and the schedule."""
    output.set_flags(ctx, json_output, quiet_output)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if ctx.resilient_parsing:
        return

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


app.add_typer(tasks.app, name="task")
app.add_typer(agents.app, name="agent")
app.add_typer(messages.app, name="message")
app.add_typer(documents.app, name="doc")
app.add_typer(activity.app, name="activity")
app.add_typer(notifications.app, name="notifications")
app.add_typer(calendar.app, name="calendar")
app.command("notify")(notifications.notify)


def main() -> None:
    """Entry point for mc command."""
    try:
        app()
    except SystemExit:
        raise
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise SystemExit(1) from e
