"""Command-line entry point that prints the next ISS passes over the caller.

The CLI locates the machine by its public IP, so no coordinates are needed:

    iss-flyover --count 3
"""

from __future__ import annotations

import asyncio

import typer

from services import next_iss_times_for_my_location
from utils import FlyoverError, get_config, setup_logging
from utils.progress_callback import ProgressUpdate

from .formatting import format_pass_times

app = typer.Typer(
    help="Upcoming ISS passes over your current location (located by public IP)."
)


def _log_progress(update: ProgressUpdate) -> None:
    if not update.stage.is_terminal:
        typer.echo(update.message, err=True)


@app.command()
def passes(
    count: int | None = typer.Option(
        None,
        "--count",
        "-n",
        min=1,
        help="Number of upcoming passes to show (default: LOOKUP_PASS_COUNT or 5).",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Logging level override (DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Print each lookup step to stderr.",
    ),
) -> None:
    """
    Look up the public IP, geolocate it and print the next ISS passes.
    """
    try:
        setup_logging(log_level=log_level)
        if count is None:
            count = get_config().lookup.pass_count
        events = asyncio.run(
            next_iss_times_for_my_location(
                count=count,
                progress_callback=_log_progress if verbose else None,
            )
        )
    except FlyoverError as e:
        typer.echo(f"It didn't work: {e}", err=True)
        raise typer.Exit(code=1)

    for line in format_pass_times(events):
        typer.echo(line)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
