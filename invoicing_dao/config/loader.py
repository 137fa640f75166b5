"""
Configuration management and loading.

Handles the database location and logging settings.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

import yaml

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class DatabaseConfig:
    """Location of the SQLite database."""
    path: str = "invoicing.db"

    def __post_init__(self):
        """Validate the database path is usable."""
        if not isinstance(self.path, str) or not self.path.strip():
            raise ValueError("database path must be a non-empty string")


@dataclass(frozen=True)
class LoggingConfig:
    """Logging verbosity."""
    level: str = "INFO"

    def __post_init__(self):
        """Validate the log level name."""
        if self.level not in VALID_LOG_LEVELS:
            raise ValueError(f"logging level must be one of: {list(VALID_LOG_LEVELS)}")


@dataclass(frozen=True)
class Settings:
    """Complete application settings."""
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_settings(path: str) -> Settings:
    """Load and validate settings from a YAML file.

    Both sections are optional; unknown keys are rejected so typos do not
    silently fall back to defaults.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated Settings object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
        ValueError: If configuration is invalid
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in config file {path}: {e}")

    if not raw_config:
        raise ValueError("Configuration file is empty")
    if not isinstance(raw_config, dict):
        raise ValueError("Configuration must be a mapping")

    allowed_top_keys = {'database', 'logging'}
    unknown_keys = set(raw_config.keys()) - allowed_top_keys
    if unknown_keys:
        raise ValueError(f"Unknown configuration keys: {unknown_keys}")

    database_data = _section(raw_config, 'database', {'path'})
    logging_data = _section(raw_config, 'logging', {'level'})

    database = DatabaseConfig(**database_data)

    level = logging_data.get('level', LoggingConfig.level)
    if not isinstance(level, str):
        raise ValueError("'level' in logging must be a string")
    log_config = LoggingConfig(level=level.upper())

    return Settings(database=database, logging=log_config)


def _section(raw_config: Dict, name: str, allowed_keys: set) -> Dict:
    """Extract an optional section and reject unknown keys in it.

    Raises:
        ValueError: If the section is not a mapping or has unknown keys
    """
    data = raw_config.get(name) or {}
    if not isinstance(data, dict):
        raise ValueError(f"'{name}' must be a dictionary")

    unknown_keys = set(data.keys()) - allowed_keys
    if unknown_keys:
        raise ValueError(f"Unknown keys in {name}: {unknown_keys}")
    return data
