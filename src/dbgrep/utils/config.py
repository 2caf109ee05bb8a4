"""Configuration management for dbgrep."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from dbgrep.errors import ConfigurationError

from .logging import get_logger

logger = get_logger(__name__)

CONFIG_ENV_VAR = "DBGREP_CONFIG"
DATABASE_URL_ENV_VAR = "DBGREP_DATABASE_URL"
DEFAULT_CONFIG_FILE = "dbgrep.yml"


class Config:
    """Configuration manager for dbgrep."""

    def __init__(self, config_dict: Optional[Dict[str, Any]] = None):
        """Initialize configuration.

        Args:
            config_dict: Configuration dictionary. If None, uses defaults.
        """
        self._config = config_dict or self._get_default_config()

    @staticmethod
    def _get_default_config() -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "database": {
                "url": None,  # SQLAlchemy URL, e.g. mysql+pymysql://user:pw@host/db
                "schema": None,  # Defaults to the URL's database ("main" for SQLite)
            },
            "search": {
                "limit": 20,  # Max rows per table
                "column_limit": 5,  # Columns shown per row line
                "truncate": True,
                "truncate_length": 50,
                "statement_timeout": 30,  # Seconds per table query, null disables
                "workers": 1,  # Tables searched concurrently
            },
        }

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> Config:
        """Load configuration from YAML file.

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            Config instance

        Raises:
            ConfigurationError: If the file is missing or not a YAML mapping

        Example:
            >>> config = Config.from_yaml("dbgrep.yml")
            >>> print(config.get("search.limit"))
        """
        yaml_path = Path(yaml_path)

        if not yaml_path.exists():
            raise ConfigurationError(f"Config file not found: {yaml_path}")

        logger.info(f"Loading config from {yaml_path}")

        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {yaml_path}: {e}") from e

        if config_dict is not None and not isinstance(config_dict, dict):
            raise ConfigurationError(
                f"Config file must contain a YAML mapping, got {type(config_dict).__name__}"
            )

        default_config = cls._get_default_config()
        merged_config = cls._merge_configs(default_config, config_dict or {})

        return cls(merged_config)

    @staticmethod
    def _merge_configs(
        base: Dict[str, Any], override: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Recursively merge two configuration dictionaries.

        Args:
            base: Base configuration
            override: Override configuration

        Returns:
            Merged configuration
        """
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = Config._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Supports dot notation for nested keys.

        Args:
            key: Configuration key (e.g., "search.limit")
            default: Default value if key not found

        Returns:
            Configuration value

        Example:
            >>> config.get("search.truncate_length")
            50
        """
        keys = key.split(".")
        value = self._config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value by key (dot notation supported)."""
        keys = key.split(".")
        config = self._config

        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value

    def database_url(self) -> Optional[str]:
        """Get the database URL, falling back to the environment."""
        return self.get("database.url") or os.getenv(DATABASE_URL_ENV_VAR)

    def __repr__(self) -> str:
        return f"Config({self._config})"


# Global config instance
_global_config: Optional[Config] = None


def get_config() -> Config:
    """Get global configuration instance.

    If not set, tries DBGREP_CONFIG, then dbgrep.yml in the current
    directory, otherwise uses defaults.

    Returns:
        Global Config instance
    """
    global _global_config
    if _global_config is None:
        env_path = os.getenv(CONFIG_ENV_VAR)
        if env_path:
            path = Path(env_path)
            if path.exists():
                logger.info(f"Loading config from {CONFIG_ENV_VAR}: {path}")
                _global_config = Config.from_yaml(path)
                return _global_config
            logger.warning(
                f"{CONFIG_ENV_VAR} set to {path} but file does not exist; falling back"
            )

        config_path = Path(DEFAULT_CONFIG_FILE)
        if config_path.exists():
            _global_config = Config.from_yaml(config_path)
        else:
            _global_config = Config()
    return _global_config


def set_config(config: Optional[Config]) -> None:
    """Set (or with None, reset) the global configuration instance."""
    global _global_config
    _global_config = config


def load_config(yaml_path: str | Path) -> Config:
    """Load configuration from YAML and set as global.

    Args:
        yaml_path: Path to YAML configuration file

    Returns:
        Loaded Config instance
    """
    config = Config.from_yaml(yaml_path)
    set_config(config)
    return config
