"""
Configuration module for marine heatwave detection.

Loads configuration from JSON file and environment variables.
"""

import json
import os
from typing import Dict, Any, List, Optional
from pathlib import Path

from . import constants
from .date_utils import DateUtils
from ..models.location import Location


class Config:
    """Configuration manager for the application."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration JSON file. If None, uses CONFIG_FILE env var
                        or defaults to 'config.json'
        """
        self.config_file = config_file or os.getenv("CONFIG_FILE", "config.json")
        self.config: Dict[str, Any] = {}
        self._load_config()
        self._override_from_env()
        self._validate_config()

    def _load_config(self) -> None:
        """Load configuration from JSON file."""
        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")

        with open(config_path, "r", encoding="utf-8") as f:
            self.config = json.load(f)

    def _override_from_env(self) -> None:
        """Override configuration with environment variables."""
        # Files
        if os.getenv("ARCHIVE_FILE"):
            self.config.setdefault("files", {})["archive"] = os.getenv("ARCHIVE_FILE")

        if os.getenv("BASELINE_FILE"):
            self.config.setdefault("files", {})["baseline"] = os.getenv("BASELINE_FILE")

        # Processing
        if os.getenv("PROCESSING_TIMEZONE"):
            self.config.setdefault("processing", {})["timezone"] = os.getenv("PROCESSING_TIMEZONE")

        # Environment
        if os.getenv("ENVIRONMENT"):
            self.config["environment"] = os.getenv("ENVIRONMENT")

    def _validate_config(self) -> None:
        """Validate that required configuration keys are present."""
        required_config = {
            "locations": [],
            "files": ["archive", "baseline"],
        }

        # Validate required sections
        missing_sections = []
        for section in required_config.keys():
            if section not in self.config:
                missing_sections.append(section)

        if missing_sections:
            raise ValueError(
                f"Missing required configuration sections: {', '.join(missing_sections)}"
            )

        # Validate required keys within sections
        missing_keys = []
        for section, keys in required_config.items():
            for key in keys:
                if key not in self.config[section]:
                    missing_keys.append(f"{section}.{key}")

        if missing_keys:
            raise ValueError(
                f"Missing required configuration keys: {', '.join(missing_keys)}"
            )

        locations = self.config["locations"]
        if not isinstance(locations, dict) or not locations:
            raise ValueError("Configuration 'locations' must be a non-empty mapping")

        min_duration = self.get("detection.min_duration", constants.MIN_EVENT_DURATION)
        if not isinstance(min_duration, int) or isinstance(min_duration, bool) or min_duration < 1:
            raise ValueError(
                f"Invalid detection.min_duration: {min_duration!r} (must be a positive integer)"
            )

        # Raises ValueError for unknown zones
        DateUtils.parse_timezone(self.timezone)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'files.archive')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    @property
    def locations(self) -> List[Location]:
        """Get configured monitoring locations, in file order."""
        return [
            Location(
                key=key,
                name=info.get("name", key),
                latitude=info.get("latitude"),
                longitude=info.get("longitude"),
            )
            for key, info in self.config["locations"].items()
        ]

    @property
    def archive_file(self) -> str:
        """Get SST archive CSV path."""
        return self.get("files.archive")

    @property
    def baseline_file(self) -> str:
        """Get baseline climatology CSV path."""
        return self.get("files.baseline")

    @property
    def min_duration(self) -> int:
        """Get minimum heatwave duration in days."""
        return self.get("detection.min_duration", constants.MIN_EVENT_DURATION)

    @property
    def timezone(self) -> str:
        """Get processing timezone."""
        return self.get("processing.timezone", constants.DEFAULT_TIMEZONE)

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(file={self.config_file}, env={self.get('environment')})"
