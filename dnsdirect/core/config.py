"""Configuration management for dnsdirect."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from loguru import logger

from dnsdirect.core.constants import APP_NAME, CONFIG_FILE, RESOLV_CONF


class Config:
    """Manages dnsdirect settings."""

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize configuration.

        Args:
            config_path: Path to configuration file. If None, uses default path.
        """
        self.config_path = Path(config_path) if config_path else Path(CONFIG_FILE)
        self.config_data: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file."""
        self.config_data = self._get_default_config()
        if not self.config_path.exists() or self.config_path.stat().st_size == 0:
            return
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.error(f"Error loading config: {e}. Using default configuration.")
            return
        if isinstance(data, dict):
            self.config_data.update(data)

    @staticmethod
    def _get_default_config() -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "log_level": "info",
            "app_name": APP_NAME,
            "resolv_conf": RESOLV_CONF,
            "root": "",
            "restart_resolved": True,
            "nameservers": [],
            "search_domains": [],
        }

    def save(self) -> None:
        """Save configuration to file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w", encoding="utf-8") as f:
            json.dump(self.config_data, f, indent=2)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value.

        Args:
            key: Configuration key (supports dot notation)
            default: Default value if key doesn't exist

        Returns:
            Configuration value or default
        """
        value = self.config_data
        for k in key.split("."):
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value in memory; call save() to persist it.

        Intermediate keys that are missing or hold a scalar become mappings.
        """
        *parents, last = key.split(".")
        data = self.config_data
        for k in parents:
            if not isinstance(data.get(k), dict):
                data[k] = {}
            data = data[k]
        data[last] = value

    def get_nameservers(self) -> List[str]:
        return list(self.config_data.get("nameservers") or [])

    def get_search_domains(self) -> List[str]:
        return list(self.config_data.get("search_domains") or [])

    def import_config(self, config_file: Path, file_format: str = "json") -> bool:
        """Import configuration from file.

        Args:
            config_file: Path to configuration file
            file_format: File format ('json' or 'yaml')

        Returns:
            True if successful, False otherwise
        """
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                if file_format.lower() == "yaml":
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            logger.error(f"Error importing config: {e}")
            return False

        # Merge with existing config
        if not isinstance(data, dict):
            logger.error(f"Error importing config: {config_file} does not hold a mapping")
            return False
        self.config_data.update(data)
        self.save()
        return True

    def export_config(self, output_file: Path, file_format: str = "json") -> bool:
        """Export configuration to file.

        Returns:
            True if successful, False otherwise
        """
        try:
            with open(output_file, "w", encoding="utf-8") as f:
                if file_format.lower() == "yaml":
                    yaml.safe_dump(self.config_data, f, default_flow_style=False)
                else:
                    json.dump(self.config_data, f, indent=2)
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Error exporting config: {e}")
            return False
        return True
