"""Typed settings built from the validated configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..const import CONFIG_VERSION
from ..domain.value_objects import (
    ConnectionParameters,
    RtuConnectionParameters,
    TcpConnectionParameters,
)
from .schema import CONFIG_SCHEMA

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanSettings:
    """Device scan range and probe parameters."""

    first_slave_id: int
    last_slave_id: int
    probe_timeout: float
    probe_address: int


@dataclass(frozen=True)
class RegisterSettings:
    """Register map presentation settings."""

    reverse_order: bool
    highlight_duration: float


@dataclass(frozen=True)
class Settings:
    """Complete ModbusTerm configuration.

    Attributes:
        version: Configuration format version
        connection: TCP or RTU connection parameters
        scan: Device scan settings
        registers: Word order and highlight duration
        log_level: Level name applied by configure_logging

    Example:
        >>> settings = Settings.default()
        >>> settings.scan.last_slave_id
        247
        >>> settings.connection.port
        502
    """

    version: str
    connection: ConnectionParameters
    scan: ScanSettings
    registers: RegisterSettings
    log_level: str = "INFO"
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> Settings:
        """Build settings from a configuration validated by CONFIG_SCHEMA."""
        connection = config["connection"]
        if connection["type"] == "rtu":
            parameters: ConnectionParameters = RtuConnectionParameters(
                timeout=connection["timeout"],
                is_master=connection["is_master"],
                serial_port=connection["serial_port"],
                baud_rate=connection["baud_rate"],
                parity=connection["parity"],
                data_bits=connection["data_bits"],
                stop_bits=connection["stop_bits"],
            )
        else:
            parameters = TcpConnectionParameters(
                timeout=connection["timeout"],
                is_master=connection["is_master"],
                host=connection["host"],
                port=connection["port"],
            )

        return cls(
            version=config["version"],
            connection=parameters,
            scan=ScanSettings(**config["scan"]),
            registers=RegisterSettings(**config["registers"]),
            log_level=config["logging"]["level"],
            raw=config,
        )

    @classmethod
    def default(cls) -> Settings:
        """Settings with every default applied."""
        return cls.from_dict(CONFIG_SCHEMA({"version": CONFIG_VERSION}))


def configure_logging(settings: Settings, logger_name: str = "modbus_term") -> None:
    """Apply the configured level to the package logger.

    The library itself installs no handlers; applications embedding it
    decide where records go.
    """
    level = logging.getLevelName(settings.log_level)
    logging.getLogger(logger_name).setLevel(level)
    _LOGGER.debug("Log level set to %s", settings.log_level)
