"""
Configuration module for the energy monitor.

Loads configuration from JSON file and environment variables.
"""

import json
import os
from typing import Dict, Any, List, Optional
from pathlib import Path

from . import constants


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
        # API configuration
        if os.getenv("EMS_API_BASE_URL"):
            self.config.setdefault("api", {})["base_url"] = os.getenv("EMS_API_BASE_URL")

        if os.getenv("EMS_API_TIMEOUT"):
            self.config.setdefault("api", {})["timeout"] = int(os.getenv("EMS_API_TIMEOUT"))

        # Processing
        if os.getenv("EMS_TIMEZONE"):
            self.config.setdefault("processing", {})["timezone"] = os.getenv("EMS_TIMEZONE")

        if os.getenv("EMS_POLL_INTERVAL"):
            self.config.setdefault("processing", {})["poll_interval"] = float(
                os.getenv("EMS_POLL_INTERVAL")
            )

        # Meters
        if os.getenv("EMS_TAGS"):
            tags = [t.strip() for t in os.getenv("EMS_TAGS", "").split(",") if t.strip()]
            self.config.setdefault("meters", {})["tags"] = [int(t) for t in tags]

        # Environment
        if os.getenv("ENVIRONMENT"):
            self.config["environment"] = os.getenv("ENVIRONMENT")

    def _validate_config(self) -> None:
        """Validate that required configuration keys are present."""
        required_config = {
            "api": ["base_url"],
        }

        missing_sections = [s for s in required_config if s not in self.config]
        if missing_sections:
            raise ValueError(
                f"Missing required configuration sections: {', '.join(missing_sections)}"
            )

        missing_keys = []
        for section, keys in required_config.items():
            for key in keys:
                if not self.config[section].get(key):
                    missing_keys.append(f"{section}.{key}")

        if missing_keys:
            raise ValueError(
                f"Missing required configuration keys: {', '.join(missing_keys)}"
            )

        if self.poll_interval <= 0:
            raise ValueError("processing.poll_interval must be positive")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'api.base_url')
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
    def api_base_url(self) -> str:
        """Get API base URL."""
        return self.get("api.base_url", "")

    @property
    def api_timeout(self) -> int:
        """Get API timeout in seconds."""
        return self.get("api.timeout", constants.DEFAULT_TIMEOUT)

    @property
    def api_max_retries(self) -> int:
        """Get maximum API retry attempts."""
        return self.get("api.max_retries", constants.DEFAULT_MAX_RETRIES)

    @property
    def api_verify_ssl(self) -> bool:
        """Get API SSL verification setting."""
        return self.get("api.verify_ssl", True)

    @property
    def timezone(self) -> str:
        """Get local timezone the meters report in."""
        return self.get("processing.timezone", constants.DEFAULT_TIMEZONE)

    @property
    def poll_interval(self) -> float:
        """Get refresh interval in seconds."""
        return float(self.get("processing.poll_interval", constants.DEFAULT_POLL_INTERVAL))

    @property
    def meter_tags(self) -> List[int]:
        """Get default meter tag ids."""
        return [int(tag) for tag in self.get("meters.tags", [])]

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(file={self.config_file}, env={self.get('environment')})"
