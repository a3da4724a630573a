"""
Activity commands: list, search, add, update, delete.
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

activities_app = typer.Typer(
    name="activities",
    help="🎟️ Manage trip activities",
    rich_markup_mode="rich",
    no_args_is_help=True
)


@activities_app.command("list")
def list_activities(
    ctx: typer.Context,
    trip_id: Optional[int] = typer.Option(None, "--trip", help="Only activities of this trip"),
):
    """List activities, optionally for one trip."""
    planner = get_planner(ctx)
    if trip_id is None:
        activities = planner.get_all_activities()
    else:
        activities = planner.get_activities_for_trip(trip_id)
    get_formatter(ctx).display_activities(activities)


@activities_app.command("search")
def search_activities(
    ctx: typer.Context,
    term: str = typer.Argument(..., help="Case-insensitive part of the name")
):
    """Find activities by name."""
    get_formatter(ctx).display_activities(
        get_planner(ctx).search_activities(term), title=f"Activities matching '{term}'"
    )


@activities_app.command("add")
def add_activity(
    ctx: typer.Context,
    trip_id: int = typer.Argument(..., help="Trip ID"),
    name: str = typer.Argument(..., help="Activity name"),
    date: str = typer.Argument(..., help="Date (YYYY-MM-DD)"),
    time: str = typer.Argument(..., help="Time (HH:MM)"),
    location: str = typer.Argument(..., help="Location"),
):
    """Add an activity to a trip."""
    planner = get_planner(ctx)
    report_added(planner, "activity", planner.add_activity(trip_id, name, date, time, location))


@activities_app.command("update")
def update_activity(
    ctx: typer.Context,
    activity_id: int = typer.Argument(..., help="Activity ID"),
    name: Optional[str] = typer.Option(None, "--name", help="New name"),
    date: Optional[str] = typer.Option(None, "--date", help="New date (YYYY-MM-DD)"),
    time: Optional[str] = typer.Option(None, "--time", help="New time (HH:MM)"),
    location: Optional[str] = typer.Option(None, "--location", help="New location"),
):
    """Change an activity's details."""
    fields = changed_fields(name=name, date=date, time=time, location=location)
    planner = get_planner(ctx)
    report_updated(planner, "activity", activity_id, planner.update_activity(activity_id, **fields))


@activities_app.command("delete")
def delete_activity(
    ctx: typer.Context,
    activity_id: int = typer.Argument(..., help="Activity ID"),
):
    """Delete an activity that has not happened yet."""
    planner = get_planner(ctx)
    report_deleted(planner, "activity", activity_id, planner.delete_activity(activity_id))
