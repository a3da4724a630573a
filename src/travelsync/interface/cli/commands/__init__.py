"""
CLI commands package.

One sub-app per entity collection plus the sync and settings commands.
"""

from .activities import activities_app
from .destinations import destinations_app
from .expenses import expenses_app
from .settings import show_settings
from .sync import refresh_command, sync_command
from .trips import trips_app

__all__ = [
    "activities_app",
    "destinations_app",
    "expenses_app",
    "show_settings",
    "refresh_command",
    "sync_command",
    "trips_app",
]
