"""
Helpers shared by the command modules.
"""

import typer

from travelsync.application.container import Container
from travelsync.application.planner import TravelPlanner
from travelsync.interface.cli.formatters.result_formatters import (
    EntityTableFormatter,
    display_error,
    display_success,
)


def get_container(ctx: typer.Context) -> Container:
    """The container the root callback stored on the context."""
    return ctx.obj


def get_planner(ctx: typer.Context) -> TravelPlanner:
    return get_container(ctx).planner


def get_formatter(ctx: typer.Context) -> EntityTableFormatter:
    return EntityTableFormatter(get_planner(ctx))


def report_added(planner: TravelPlanner, label: str, entity_id: int | None) -> None:
    """Print the new id, or the planner's error and exit non-zero."""
    if entity_id is None:
        display_error(planner.error_message or f"Could not add {label}")
        raise typer.Exit(1)
    display_success(f"Added {label} {entity_id}")


def report_deleted(planner: TravelPlanner, label: str, entity_id: int, deleted: bool) -> None:
    """Print the delete result, or the refusal reason and exit non-zero."""
    if not deleted:
        display_error(planner.error_message or f"Could not delete {label} {entity_id}")
        raise typer.Exit(1)
    display_success(f"Deleted {label} {entity_id}")


def changed_fields(**options) -> dict:
    """Options the user actually passed; exits non-zero if there are none."""
    fields = {name: value for name, value in options.items() if value is not None}
    if not fields:
        display_error("Nothing to update")
        raise typer.Exit(1)
    return fields


def report_updated(planner: TravelPlanner, label: str, entity_id: int, updated: bool) -> None:
    """Print the update result, or why nothing was written and exit non-zero."""
    if not updated:
        display_error(planner.error_message or f"{label.capitalize()} {entity_id} not found")
        raise typer.Exit(1)
    display_success(f"Updated {label} {entity_id}")
