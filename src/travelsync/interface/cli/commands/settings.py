"""
Settings Command - Show Or Save Effective Settings
"""

import logging

import typer

from .common import get_container
from travelsync.interface.cli.formatters.result_formatters import (
    SettingsFormatter,
    display_success,
)

logger = logging.getLogger(__name__)


def show_settings(
    ctx: typer.Context,
    save: bool = typer.Option(
        False,
        "--save",
        help="Write the effective settings to travel_settings.json."
    ),
):
    """
    Display the effective settings.

    Values come from travel_settings.json in the config directory, with
    defaults for anything the file leaves out.
    """
    container = get_container(ctx)
    repository = container.settings_repository
    source = str(repository.settings_path) if repository.settings_path.exists() else "defaults"
    SettingsFormatter().display_settings(container.settings, source)

    if save:
        path = repository.save_settings(container.settings)
        display_success(f"Settings written to {path}")
