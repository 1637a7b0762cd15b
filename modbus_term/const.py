"""Constants for the ModbusTerm core.

Only values shared between several modules live here. Per-deployment
settings (timeouts, scan range, word order) come from the YAML
configuration, these are their defaults.
"""

from __future__ import annotations

# Slave addressing
MIN_SLAVE_ID = 1
MAX_SLAVE_ID = 247
DEFAULT_SLAVE_ID = 1

# Register address space
MIN_ADDRESS = 0x0000
MAX_ADDRESS = 0xFFFF
MAX_WORD = 0xFFFF

# Connection defaults
DEFAULT_TCP_HOST = "127.0.0.1"
DEFAULT_TCP_PORT = 502
DEFAULT_SERIAL_PORT = "/dev/ttyUSB0"
DEFAULT_BAUD_RATE = 9600
DEFAULT_PARITY = "N"
DEFAULT_DATA_BITS = 8
DEFAULT_STOP_BITS = 1
STANDARD_BAUD_RATES = (1200, 2400, 4800, 9600, 19200, 38400, 57600, 115200)

# Timing (seconds)
DEFAULT_REQUEST_TIMEOUT = 5.0
DEFAULT_PROBE_TIMEOUT = 0.2
HIGHLIGHT_DURATION = 5.0

# Device scan probe: read one holding register at this address
DEFAULT_PROBE_ADDRESS = 0

# Communication log
DEFAULT_LOG_CAPACITY = 1000

# Display precision for floating point projections
FLOAT32_DECIMALS = 3
FLOAT64_DECIMALS = 6

CONFIG_VERSION = "1.0"
