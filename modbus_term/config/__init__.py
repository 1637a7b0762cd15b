"""Configuration loading and validation."""

from .config_loader import load_config, parse_config
from .schema import CONFIG_SCHEMA
from .settings import RegisterSettings, ScanSettings, Settings, configure_logging

__all__ = [
    "CONFIG_SCHEMA",
    "load_config",
    "parse_config",
    "Settings",
    "ScanSettings",
    "RegisterSettings",
    "configure_logging",
]
