"""
CLI Orchestrator - Main Entry Point

Wires the per-collection sub-apps and the sync commands into one typer app.
The root callback builds the dependency container once per invocation and
closes it when the command finishes.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from travelsync import __version__
from travelsync.application.container import Container
from travelsync.infrastructure.logging_config import setup_logging

from travelsync.interface.cli.commands import (
    activities_app,
    destinations_app,
    expenses_app,
    refresh_command,
    show_settings,
    sync_command,
    trips_app,
)

logger = logging.getLogger(__name__)

# Create console for rich output
console = Console()

# Create main app
app = typer.Typer(
    name="travelsync",
    help="🧭 Local-first travel planner with remote sync",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True
)

# Add sub-apps to main app
app.add_typer(destinations_app, name="destinations")
app.add_typer(trips_app, name="trips")
app.add_typer(activities_app, name="activities")
app.add_typer(expenses_app, name="expenses")

app.command("sync")(sync_command)
app.command("refresh")(refresh_command)
app.command("settings")(show_settings)


def _version_callback(value: bool):
    if value:
        typer.echo(f"travelsync {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        "-c",
        help="Directory containing travel_settings.json (default: ./config)."
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the version and exit.",
        callback=_version_callback,
        is_eager=True
    ),
):
    """
    🧭 TravelSync - destinations, trips, activities and expenses

    📁 Data lives in a local SQLite database and is kept in sync with the
    remote TravelPlanner API on demand:

    - `travelsync destinations list` - browse local data
    - `travelsync sync` - fetch destinations and trips concurrently
    - `travelsync refresh` - fetch destinations, then trips
    - `travelsync settings` - show the effective settings
    """
    container = Container(config_dir=config_dir)
    try:
        settings = container.settings
    except ValueError as e:
        console.print(f"[red]❌ Error:[/red] {e}")
        raise typer.Exit(1)

    setup_logging("DEBUG" if verbose else settings.log_level, settings.log_file)
    logger.debug("Using config directory %s", container.config_dir)

    ctx.obj = container
    ctx.call_on_close(container.close)
