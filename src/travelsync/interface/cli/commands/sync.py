"""
Sync Commands - Pull Remote Data Into The Local Store

`sync` fetches destinations and trips concurrently; `refresh` fetches them
in order and stops after a destination failure.
"""

import logging

import typer

from .common import get_planner
from travelsync.interface.cli.formatters.result_formatters import SyncOutcomeFormatter

logger = logging.getLogger(__name__)


def sync_command(ctx: typer.Context):
    """
    Fetch destinations and trips from the remote API concurrently.

    Fetched rows are merged into the local database; local-only rows stay.
    """
    outcome = get_planner(ctx).sync().result()
    SyncOutcomeFormatter().display_outcome(outcome, title="Sync")
    if not outcome.success:
        raise typer.Exit(1)


def refresh_command(ctx: typer.Context):
    """
    Re-fetch destinations, then trips, from the remote API.

    Trips are skipped when the destination fetch fails.
    """
    outcome = get_planner(ctx).refresh().result()
    SyncOutcomeFormatter().display_outcome(outcome, title="Refresh")
    if not outcome.success:
        raise typer.Exit(1)
