"""
Trip commands: list, search, add, update, delete.
"""

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

trips_app = typer.Typer(
    name="trips",
    help="🧳 Manage trips",
    rich_markup_mode="rich",
    no_args_is_help=True
)


@trips_app.command("list")
def list_trips(
    ctx: typer.Context,
    destination_id: Optional[int] = typer.Option(
        None, "--destination", help="Only trips to this destination"
    ),
):
    """List trips, optionally for one destination."""
    planner = get_planner(ctx)
    if destination_id is None:
        trips = planner.get_all_trips()
        title = "Trips"
    else:
        trips = planner.get_trips_for_destination(destination_id)
        title = f"Trips to {planner.destination_city(destination_id)}"
    get_formatter(ctx).display_trips(trips, title=title)


@trips_app.command("search")
def search_trips(
    ctx: typer.Context,
    term: str = typer.Argument(..., help="Case-insensitive part of the title")
):
    """Find trips by title."""
    get_formatter(ctx).display_trips(
        get_planner(ctx).search_trips(term), title=f"Trips matching '{term}'"
    )


@trips_app.command("add")
def add_trip(
    ctx: typer.Context,
    destination_id: int = typer.Argument(..., help="Destination ID"),
    title: str = typer.Argument(..., help="Trip title"),
    start_date: str = typer.Argument(..., help="Start date (YYYY-MM-DD)"),
    end_date: str = typer.Argument(..., help="End date (YYYY-MM-DD)"),
):
    """Add a trip to an existing destination."""
    planner = get_planner(ctx)
    report_added(planner, "trip", planner.add_trip(destination_id, title, start_date, end_date))


@trips_app.command("update")
def update_trip(
    ctx: typer.Context,
    trip_id: int = typer.Argument(..., help="Trip ID"),
    title: Optional[str] = typer.Option(None, "--title", help="New title"),
    start_date: Optional[str] = typer.Option(None, "--start", help="New start date (YYYY-MM-DD)"),
    end_date: Optional[str] = typer.Option(None, "--end", help="New end date (YYYY-MM-DD)"),
):
    """Change a trip's title or dates (the destination is fixed)."""
    fields = changed_fields(title=title, start_date=start_date, end_date=end_date)
    planner = get_planner(ctx)
    report_updated(planner, "trip", trip_id, planner.update_trip(trip_id, **fields))


@trips_app.command("delete")
def delete_trip(
    ctx: typer.Context,
    trip_id: int = typer.Argument(..., help="Trip ID"),
):
    """Delete a trip without activities or expenses."""
    planner = get_planner(ctx)
    report_deleted(planner, "trip", trip_id, planner.delete_trip(trip_id))
