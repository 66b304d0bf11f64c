"""
Configuration management for the Simple Analytics client.
Handles loading defaults, an optional JSON file and environment overrides.
"""

import os
import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://queue.simpleanalyticscdn.com/events"
DEFAULT_CONFIG_FILE = "simple_analytics.json"


@dataclass
class SimpleAnalyticsConfig:
    """Client configuration settings."""
    endpoint: str
    timeout: float
    storage_dir: str
    debug: bool


class ConfigManager:
    """Manages client configuration loading and access."""

    def __init__(self, config_file: Optional[str] = None):
        self.config_file = Path(
            config_file or os.getenv("SIMPLE_ANALYTICS_CONFIG", DEFAULT_CONFIG_FILE)
        )
        self._config: Optional[Dict[str, Any]] = None
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file and environment variables."""
        self._config = self._get_default_config()

        if self.config_file.exists():
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    file_config = json.load(f)
                if isinstance(file_config, dict):
                    self._config.update(
                        {k: v for k, v in file_config.items() if k in self._config}
                    )
            except (json.JSONDecodeError, OSError) as e:
                # Keep defaults if the file is unreadable
                logger.warning(f"Ignoring config file {self.config_file}: {e}")

        self._override_with_env()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "endpoint": DEFAULT_ENDPOINT,
            "timeout": 10.0,
            "storage_dir": "~/.simple_analytics",
            "debug": False,
        }

    def _override_with_env(self) -> None:
        """Override configuration with environment variables."""
        if os.getenv("SIMPLE_ANALYTICS_ENDPOINT"):
            self._config["endpoint"] = os.getenv("SIMPLE_ANALYTICS_ENDPOINT")

        if os.getenv("SIMPLE_ANALYTICS_TIMEOUT"):
            self._config["timeout"] = float(os.getenv("SIMPLE_ANALYTICS_TIMEOUT"))

        if os.getenv("SIMPLE_ANALYTICS_STORAGE_DIR"):
            self._config["storage_dir"] = os.getenv("SIMPLE_ANALYTICS_STORAGE_DIR")

        if os.getenv("SIMPLE_ANALYTICS_DEBUG"):
            self._config["debug"] = os.getenv("SIMPLE_ANALYTICS_DEBUG").lower() == "true"

    def get_config(self) -> SimpleAnalyticsConfig:
        """Get the client configuration."""
        return SimpleAnalyticsConfig(
            endpoint=self._config["endpoint"],
            timeout=float(self._config["timeout"]),
            storage_dir=self._config["storage_dir"],
            debug=bool(self._config["debug"]),
        )


def load_config(config_file: Optional[str] = None) -> SimpleAnalyticsConfig:
    """Load configuration from *config_file* (or the default location)."""
    return ConfigManager(config_file).get_config()
