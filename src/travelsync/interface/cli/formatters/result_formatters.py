"""
CLI result formatters for entity listings and sync outcomes.

Separates display logic from command logic; everything goes through a
shared rich Console.
"""

import logging
from typing import List, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from travelsync.application.planner import TravelPlanner
from travelsync.application.sync_coordinator import KindOutcome, SyncOutcome
from travelsync.domain.config import TravelSettings
from travelsync.domain.models import Activity, Destination, Expense, Trip

logger = logging.getLogger(__name__)
console = Console()


class EntityTableFormatter:
    """
    Renders entity collections as tables.

    Takes the planner so rows can show derived values (city names,
    durations, lock flags) without the commands computing them.
    """

    def __init__(self, planner: TravelPlanner):
        self.planner = planner

    def display_destinations(self, destinations: Sequence[Destination], title: str = "Destinations") -> None:
        table = Table(title=f"🌍 {title}")
        table.add_column("ID", style="cyan", justify="right")
        table.add_column("City", style="bold")
        table.add_column("Country", style="blue")
        table.add_column("Image", justify="center")
        table.add_column("Trips", justify="right", style="magenta")
        table.add_column("Description", overflow="fold")

        for destination in destinations:
            trips = len(self.planner.get_trips_for_destination(destination.id))
            table.add_row(
                str(destination.id),
                destination.city,
                destination.country,
                f"{len(destination.image_data)} B" if destination.image_data else "-",
                str(trips),
                destination.description or "",
            )
        self._print(table, len(destinations))

    def display_trips(self, trips: Sequence[Trip], title: str = "Trips") -> None:
        table = Table(title=f"🧳 {title}")
        table.add_column("ID", style="cyan", justify="right")
        table.add_column("Title", style="bold")
        table.add_column("Destination", style="blue")
        table.add_column("Start")
        table.add_column("End")
        table.add_column("Days", justify="right", style="magenta")
        table.add_column("Deletable", justify="center")

        for trip in trips:
            table.add_row(
                str(trip.id),
                trip.title,
                self.planner.destination_city(trip.destination_id),
                trip.start_date,
                trip.end_date,
                str(self.planner.trip_duration_days(trip)),
                _flag(self.planner.can_delete_trip(trip.id)),
            )
        self._print(table, len(trips))

    def display_activities(self, activities: Sequence[Activity], title: str = "Activities") -> None:
        table = Table(title=f"🎟️ {title}")
        table.add_column("ID", style="cyan", justify="right")
        table.add_column("Trip", justify="right", style="blue")
        table.add_column("Name", style="bold")
        table.add_column("Date")
        table.add_column("Time")
        table.add_column("Location")
        table.add_column("Past", justify="center")

        for activity in activities:
            table.add_row(
                str(activity.id),
                str(activity.trip_id),
                activity.name,
                activity.date,
                activity.time,
                activity.location,
                "[yellow]yes[/yellow]" if self.planner.is_activity_in_past(activity) else "",
            )
        self._print(table, len(activities))

    def display_expenses(self, expenses: Sequence[Expense], title: str = "Expenses") -> None:
        table = Table(title=f"💶 {title}")
        table.add_column("ID", style="cyan", justify="right")
        table.add_column("Trip", justify="right", style="blue")
        table.add_column("Title", style="bold")
        table.add_column("Amount", justify="right", style="green")
        table.add_column("Date")
        table.add_column("Locked", justify="center")

        for expense in expenses:
            table.add_row(
                str(expense.id),
                str(expense.trip_id),
                expense.title,
                f"{expense.amount:.2f}",
                expense.date,
                "[yellow]yes[/yellow]" if self.planner.is_expense_too_old(expense) else "",
            )
        self._print(table, len(expenses))

    @staticmethod
    def _print(table: Table, count: int) -> None:
        if count == 0:
            console.print("[yellow]No matching records[/yellow]")
            return
        console.print(table)


class SyncOutcomeFormatter:
    """Formatter for sync and refresh outcomes."""

    def display_outcome(self, outcome: SyncOutcome, title: str = "Sync") -> None:
        table = Table(title=f"🔄 {title} Results")
        table.add_column("Collection", style="cyan")
        table.add_column("Status")
        table.add_column("Fetched", justify="right")
        table.add_column("Error", style="red", overflow="fold")

        for kind_outcome in (outcome.destinations, outcome.trips):
            table.add_row(
                kind_outcome.kind.table,
                _status(kind_outcome),
                str(kind_outcome.count) if kind_outcome.succeeded else "-",
                str(kind_outcome.error or ""),
            )

        console.print(table)
        if outcome.success:
            console.print("[green]✅ Local data is up to date[/green]")
        else:
            console.print(f"[red]❌ {outcome.error_message}[/red]")


class SettingsFormatter:
    """Formatter for the effective settings."""

    def display_settings(self, settings: TravelSettings, source: str) -> None:
        remote = settings.remote
        storage = settings.storage
        panel = Panel.fit(
            f"[bold]Remote API:[/bold]\n"
            f"  Base URL: {remote.base_url}\n"
            f"  Request Timeout: {remote.request_timeout}s\n"
            f"  Workers: {remote.max_workers} (+{remote.image_download_workers} image)\n"
            f"  Push Destination Updates: {_flag(remote.push_destination_updates)}\n\n"
            f"[bold]Storage:[/bold]\n"
            f"  Database: {storage.db_path}\n"
            f"  Template: {storage.template_path or '-'}\n"
            f"  Sample Data: {_flag(storage.seed_sample_data)}\n\n"
            f"[bold]Logging:[/bold] {settings.log_level}"
            + (f" (file: {settings.log_file})" if settings.log_file else ""),
            title=f"⚙️ Settings ({source})",
            border_style="cyan",
        )
        console.print(panel)


def display_error(message: str) -> None:
    console.print(f"[red]❌ Error:[/red] {message}")


def display_success(message: str) -> None:
    console.print(f"[green]✅ {message}[/green]")


def _flag(value: bool) -> str:
    return "[green]✓[/green]" if value else "[red]✗[/red]"


def _status(outcome: KindOutcome) -> str:
    if not outcome.attempted:
        return "[yellow]⏭ Skipped[/yellow]"
    if outcome.succeeded:
        return "[green]✅ OK[/green]"
    return "[red]❌ Failed[/red]"


__all__: List[str] = [
    "EntityTableFormatter",
    "SyncOutcomeFormatter",
    "SettingsFormatter",
    "display_error",
    "display_success",
]
