"""
Settings repository for loading and saving the settings file.

This module provides the infrastructure layer for settings persistence.
It handles file I/O and turns bad files into ValueError.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError

from travelsync.domain.config import TravelSettings

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "travel_settings"


class SettingsRepository:
    """
    Repository for the JSON settings file.

    A missing file means "use defaults"; a present but broken file is an error.
    """

    def __init__(self, config_dir: Path):
        """
        Initialize the settings repository.

        Args:
            config_dir: Directory holding travel_settings.json
        """
        self.config_dir = Path(config_dir)

    @property
    def settings_path(self) -> Path:
        return self.config_dir / f"{SETTINGS_FILENAME}.json"

    def load_json_file(self, filename: str) -> Dict[str, Any]:
        """
        Load a JSON file from the config directory.

        Args:
            filename: Name of the file to load (without extension)

        Returns:
            Parsed JSON data as dictionary

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If file cannot be parsed
        """
        json_path = self.config_dir / f"{filename}.json"
        if not json_path.exists():
            raise FileNotFoundError(f"Config file '{filename}.json' not found in {self.config_dir}")

        try:
            with open(json_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error("Failed to parse JSON file %s: %s", json_path, e)
            raise ValueError(f"Invalid JSON in {json_path}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {json_path}")
        return data

    def save_json_file(self, filename: str, data: Dict[str, Any]) -> Path:
        """
        Save data to a JSON file, creating the config directory if needed.

        Args:
            filename: Name of the file to save (without extension)
            data: Data to save

        Returns:
            Path written
        """
        self.config_dir.mkdir(parents=True, exist_ok=True)
        filepath = self.config_dir / f"{filename}.json"
        with open(filepath, 'w', encoding='utf-8') as f:
            f.write(json.dumps(data, indent=2, ensure_ascii=False))

        logger.info("Saved config file: %s", filepath)
        return filepath

    def load_settings(self) -> TravelSettings:
        """
        Load settings, falling back to defaults when no file exists.

        Raises:
            ValueError: If the file exists but cannot be parsed or validated
        """
        try:
            data = self.load_json_file(SETTINGS_FILENAME)
        except FileNotFoundError:
            logger.info("No settings file in %s, using defaults", self.config_dir)
            return TravelSettings()

        try:
            settings = TravelSettings(**data)
        except ValidationError as e:
            logger.error("Failed to load settings: %s", e)
            raise ValueError(f"Invalid settings in {self.settings_path}: {e}") from e

        logger.info("Loaded settings from %s", self.settings_path)
        return settings

    def save_settings(self, settings: TravelSettings) -> Path:
        """Write settings to travel_settings.json."""
        return self.save_json_file(SETTINGS_FILENAME, settings.model_dump(mode="json"))
