"""CLI error handling: report failures and exit non-zero."""

import logging
from functools import wraps

import typer
from click.exceptions import Exit

from mission.errors import MissionError

logger = logging.getLogger(__name__)


def error_feedback(f):
    """Wrap command to catch exceptions and report them before exiting.

    Domain errors print as `<Kind>: message`. Anything else is reported as an
    unexpected error. Every failure exits 1.
    """

    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except (SystemExit, Exit):
            raise
        except MissionError as e:
            typer.echo(f"{type(e).__name__}: {e}", err=True)
            raise typer.Exit(1) from e
        except OSError as e:
            typer.echo(f"File error: {e}", err=True)
            raise typer.Exit(1) from e
        except Exception as e:
            logger.debug("Unhandled command failure", exc_info=True)
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1) from e

    return wrapper
