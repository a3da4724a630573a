"""
Expense commands: list, search, add, update, delete.
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

expenses_app = typer.Typer(
    name="expenses",
    help="💶 Manage trip expenses",
    rich_markup_mode="rich",
    no_args_is_help=True
)


@expenses_app.command("list")
def list_expenses(
    ctx: typer.Context,
    trip_id: Optional[int] = typer.Option(None, "--trip", help="Only expenses of this trip"),
):
    """List expenses, optionally for one trip."""
    planner = get_planner(ctx)
    if trip_id is None:
        expenses = planner.get_all_expenses()
    else:
        expenses = planner.get_expenses_for_trip(trip_id)
    get_formatter(ctx).display_expenses(expenses)


@expenses_app.command("search")
def search_expenses(
    ctx: typer.Context,
    term: str = typer.Argument(..., help="Case-insensitive part of the title")
):
    """Find expenses by title."""
    get_formatter(ctx).display_expenses(
        get_planner(ctx).search_expenses(term), title=f"Expenses matching '{term}'"
    )


@expenses_app.command("add")
def add_expense(
    ctx: typer.Context,
    trip_id: int = typer.Argument(..., help="Trip ID"),
    title: str = typer.Argument(..., help="Expense title"),
    amount: float = typer.Argument(..., help="Amount (positive)"),
    date: str = typer.Argument(..., help="Date (YYYY-MM-DD)"),
):
    """Record an expense against a trip."""
    planner = get_planner(ctx)
    report_added(planner, "expense", planner.add_expense(trip_id, title, amount, date))


@expenses_app.command("update")
def update_expense(
    ctx: typer.Context,
    expense_id: int = typer.Argument(..., help="Expense ID"),
    title: Optional[str] = typer.Option(None, "--title", help="New title"),
    amount: Optional[float] = typer.Option(None, "--amount", help="New amount (positive)"),
    date: Optional[str] = typer.Option(None, "--date", help="New date (YYYY-MM-DD)"),
):
    """Change an expense's title, amount or date."""
    fields = changed_fields(title=title, amount=amount, date=date)
    planner = get_planner(ctx)
    report_updated(planner, "expense", expense_id, planner.update_expense(expense_id, **fields))


@expenses_app.command("delete")
def delete_expense(
    ctx: typer.Context,
    expense_id: int = typer.Argument(..., help="Expense ID"),
):
    """Delete an expense from the last 30 days."""
    planner = get_planner(ctx)
    report_deleted(planner, "expense", expense_id, planner.delete_expense(expense_id))
