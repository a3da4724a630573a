"""
Configuration infrastructure package.

Loads and saves the JSON settings file.
"""

from travelsync.infrastructure.config.repository import SettingsRepository

__all__ = ["SettingsRepository"]
