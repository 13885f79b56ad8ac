"""
Configuration loading and validation for Remote Database Backup.
"""

import os
import re
from typing import Any

import yaml

from .errors import ConfigurationError


class ConfigLoader:
    """Loads and validates configuration from YAML file."""

    ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')

    def __init__(self, config_path: str):
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from YAML file."""
        with open(self.config_path, 'r') as f:
            config = yaml.safe_load(f) or {}

        if not isinstance(config, dict):
            raise ConfigurationError(
                f"Configuration file '{self.config_path}' must contain a mapping"
            )
        return self._resolve_env_vars(config)

    def _resolve_env_vars(self, obj: Any) -> Any:
        """Recursively resolve environment variables in config."""
        if isinstance(obj, str):
            matches = self.ENV_VAR_PATTERN.findall(obj)
            for match in matches:
                env_value = os.environ.get(match, '')
                obj = obj.replace(f'${{{match}}}', env_value)
            return obj
        elif isinstance(obj, dict):
            return {k: self._resolve_env_vars(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [self._resolve_env_vars(item) for item in obj]
        return obj

    def get_databases(self) -> list[dict[str, Any]]:
        """Get list of database sources to back up."""
        databases = self.config.get('databases') or []
        if not isinstance(databases, list):
            raise ConfigurationError("'databases' must be a list")
        return databases

    def get_defaults(self) -> dict[str, Any]:
        """Get default settings applied to every source."""
        return self.config.get('defaults') or {}

    def get_compressor_settings(self) -> dict[str, Any]:
        """Get compressor settings. Empty when no compressor is configured."""
        return self.config.get('compressor') or {}

    def get_utilities(self) -> dict[str, str]:
        """Get utility path overrides."""
        return self.config.get('utilities') or {}

    def get_logging_settings(self) -> dict[str, Any]:
        """Get logging settings."""
        return self.config.get('logging') or {}
