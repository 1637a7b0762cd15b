"""Voluptuous schema for the ModbusTerm YAML configuration."""

from __future__ import annotations

import voluptuous as vol

from ..const import (
    CONFIG_VERSION,
    DEFAULT_BAUD_RATE,
    DEFAULT_DATA_BITS,
    DEFAULT_PARITY,
    DEFAULT_PROBE_ADDRESS,
    DEFAULT_PROBE_TIMEOUT,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SERIAL_PORT,
    DEFAULT_STOP_BITS,
    DEFAULT_TCP_HOST,
    DEFAULT_TCP_PORT,
    HIGHLIGHT_DURATION,
    MAX_SLAVE_ID,
    MIN_SLAVE_ID,
    STANDARD_BAUD_RATES,
)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_slave_id = vol.All(vol.Coerce(int), vol.Range(min=MIN_SLAVE_ID, max=MAX_SLAVE_ID))
_positive_seconds = vol.All(vol.Coerce(float), vol.Range(min=0.01))


def _upper(value):
    return str(value).upper()


CONNECTION_SCHEMA = vol.Schema(
    {
        vol.Optional("type", default="tcp"): vol.All(vol.Lower, vol.In(("tcp", "rtu"))),
        vol.Optional("host", default=DEFAULT_TCP_HOST): str,
        vol.Optional("port", default=DEFAULT_TCP_PORT): vol.All(
            vol.Coerce(int), vol.Range(min=1, max=65535)
        ),
        vol.Optional("serial_port", default=DEFAULT_SERIAL_PORT): str,
        vol.Optional("baud_rate", default=DEFAULT_BAUD_RATE): vol.All(
            vol.Coerce(int), vol.In(STANDARD_BAUD_RATES)
        ),
        vol.Optional("parity", default=DEFAULT_PARITY): vol.All(
            _upper, vol.In(("N", "E", "O"))
        ),
        vol.Optional("data_bits", default=DEFAULT_DATA_BITS): vol.All(
            vol.Coerce(int), vol.In((7, 8))
        ),
        vol.Optional("stop_bits", default=DEFAULT_STOP_BITS): vol.All(
            vol.Coerce(int), vol.In((1, 2))
        ),
        vol.Optional("timeout", default=DEFAULT_REQUEST_TIMEOUT): _positive_seconds,
        vol.Optional("is_master", default=True): bool,
    }
)

SCAN_SCHEMA = vol.Schema(
    {
        vol.Optional("first_slave_id", default=MIN_SLAVE_ID): _slave_id,
        vol.Optional("last_slave_id", default=MAX_SLAVE_ID): _slave_id,
        vol.Optional("probe_timeout", default=DEFAULT_PROBE_TIMEOUT): _positive_seconds,
        vol.Optional("probe_address", default=DEFAULT_PROBE_ADDRESS): vol.All(
            vol.Coerce(int), vol.Range(min=0, max=0xFFFF)
        ),
    }
)

REGISTERS_SCHEMA = vol.Schema(
    {
        vol.Optional("reverse_order", default=False): bool,
        vol.Optional("highlight_duration", default=HIGHLIGHT_DURATION): _positive_seconds,
    }
)

LOGGING_SCHEMA = vol.Schema(
    {
        vol.Optional("level", default="INFO"): vol.All(_upper, vol.In(LOG_LEVELS)),
    }
)


def _scan_range_ordered(config: dict) -> dict:
    scan = config["scan"]
    if scan["first_slave_id"] > scan["last_slave_id"]:
        raise vol.Invalid(
            f"scan.first_slave_id ({scan['first_slave_id']}) must not exceed "
            f"scan.last_slave_id ({scan['last_slave_id']})"
        )
    return config


CONFIG_SCHEMA = vol.All(
    vol.Schema(
        {
            vol.Required("version"): vol.All(vol.Coerce(str), vol.In((CONFIG_VERSION,))),
            vol.Optional("connection", default={}): CONNECTION_SCHEMA,
            vol.Optional("scan", default={}): SCAN_SCHEMA,
            vol.Optional("registers", default={}): REGISTERS_SCHEMA,
            vol.Optional("logging", default={}): LOGGING_SCHEMA,
        }
    ),
    _scan_range_ordered,
)
