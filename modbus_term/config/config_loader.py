"""Configuration loader for ModbusTerm settings."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import voluptuous as vol
import yaml

from .schema import CONFIG_SCHEMA
from .settings import Settings

_LOGGER = logging.getLogger(__name__)


def load_config(path: str | Path) -> Settings:
    """Load and validate settings from a YAML file.

    Args:
        path: Path to the YAML configuration file

    Returns:
        Validated Settings

    Raises:
        FileNotFoundError: If configuration file not found
        ValueError: If the YAML or the configuration is invalid

    Example:
        >>> settings = load_config("modbus_term.yaml")
        >>> settings.registers.reverse_order
        False
    """
    config_file = Path(path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    try:
        config = yaml.safe_load(config_file.read_text(encoding="utf-8"))
    except yaml.YAMLError as err:
        raise ValueError(f"Invalid YAML: {err}") from err

    settings = parse_config(config)
    _LOGGER.info(
        "Loaded configuration from %s: %s, scan %d-%d",
        config_file,
        settings.connection,
        settings.scan.first_slave_id,
        settings.scan.last_slave_id,
    )
    return settings


def parse_config(config: Any) -> Settings:
    """Validate an already parsed configuration mapping.

    Raises:
        ValueError: If the configuration is empty or invalid
    """
    if not config:
        raise ValueError("Configuration file is empty")

    if not isinstance(config, dict):
        raise ValueError(
            f"Configuration must be a mapping, got {type(config).__name__}"
        )

    if "version" not in config:
        raise ValueError("Configuration missing required 'version' field")

    try:
        validated = CONFIG_SCHEMA(config)
    except vol.Invalid as err:
        raise ValueError(f"Invalid configuration: {err}") from err

    return Settings.from_dict(validated)
