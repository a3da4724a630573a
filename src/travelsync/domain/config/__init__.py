"""
Configuration domain package.

This package contains the settings models for storage and remote sync.
"""

from .settings import RemoteSettings, StorageSettings, TravelSettings

__all__ = [
    "RemoteSettings",
    "StorageSettings",
    "TravelSettings",
]
