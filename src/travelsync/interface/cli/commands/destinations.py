"""
Destination commands: list, search, add, update, delete.
"""

from pathlib import Path
from typing import Optional

import typer

from .common import (
    changed_fields,
    get_formatter,
    get_planner,
    report_added,
    report_deleted,
    report_updated,
)

destinations_app = typer.Typer(
    name="destinations",
    help="🌍 Manage destinations",
    rich_markup_mode="rich",
    no_args_is_help=True
)


@destinations_app.command("list")
def list_destinations(ctx: typer.Context):
    """List every destination with its trip count."""
    get_formatter(ctx).display_destinations(get_planner(ctx).get_all_destinations())


@destinations_app.command("search")
def search_destinations(
    ctx: typer.Context,
    term: str = typer.Argument(..., help="Case-insensitive part of the city name")
):
    """Find destinations by city."""
    results = get_planner(ctx).search_destinations(term)
    get_formatter(ctx).display_destinations(results, title=f"Destinations matching '{term}'")


@destinations_app.command("add")
def add_destination(
    ctx: typer.Context,
    city: str = typer.Argument(..., help="City name"),
    country: str = typer.Argument(..., help="Country name"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="Free-form description"),
    image: Optional[Path] = typer.Option(
        None, "--image", help="Image file to attach", exists=True, dir_okay=False, readable=True
    ),
):
    """
    Add a destination.

    It is saved locally first, then pushed to the remote API in the background.
    """
    planner = get_planner(ctx)
    image_data = image.read_bytes() if image else None
    report_added(planner, "destination", planner.add_destination(city, country, image_data, description))


@destinations_app.command("update")
def update_destination(
    ctx: typer.Context,
    destination_id: int = typer.Argument(..., help="Destination ID"),
    city: Optional[str] = typer.Option(None, "--city", help="New city name"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="New description"),
):
    """Change a destination's city or description (the country is fixed)."""
    fields = changed_fields(city=city, description=description)
    planner = get_planner(ctx)
    report_updated(
        planner, "destination", destination_id, planner.update_destination(destination_id, **fields)
    )


@destinations_app.command("delete")
def delete_destination(
    ctx: typer.Context,
    destination_id: int = typer.Argument(..., help="Destination ID"),
):
    """Delete a destination that no trip refers to."""
    planner = get_planner(ctx)
    report_deleted(planner, "destination", destination_id, planner.delete_destination(destination_id))
