"""Connection parameters handed to the transport."""

from dataclasses import dataclass
from enum import Enum

from ...const import (
    DEFAULT_BAUD_RATE,
    DEFAULT_DATA_BITS,
    DEFAULT_PARITY,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SERIAL_PORT,
    DEFAULT_STOP_BITS,
    DEFAULT_TCP_HOST,
    DEFAULT_TCP_PORT,
)


class ConnectionType(Enum):
    """Physical link used by the transport."""

    TCP = "tcp"
    RTU = "rtu"


@dataclass(frozen=True)
class ConnectionParameters:
    """Settings shared by every connection type.

    Attributes:
        timeout: Request timeout in seconds
        is_master: True for master mode, False to act as a slave
    """

    timeout: float = DEFAULT_REQUEST_TIMEOUT
    is_master: bool = True

    @property
    def type(self) -> ConnectionType:
        raise NotImplementedError


@dataclass(frozen=True)
class TcpConnectionParameters(ConnectionParameters):
    """Modbus TCP endpoint."""

    host: str = DEFAULT_TCP_HOST
    port: int = DEFAULT_TCP_PORT

    @property
    def type(self) -> ConnectionType:
        return ConnectionType.TCP

    def __str__(self) -> str:
        return f"TCP {self.host}:{self.port}"


@dataclass(frozen=True)
class RtuConnectionParameters(ConnectionParameters):
    """Modbus RTU serial line.

    Only RTU connections can be scanned for devices: a TCP endpoint
    addresses a single gateway.
    """

    serial_port: str = DEFAULT_SERIAL_PORT
    baud_rate: int = DEFAULT_BAUD_RATE
    parity: str = DEFAULT_PARITY
    data_bits: int = DEFAULT_DATA_BITS
    stop_bits: int = DEFAULT_STOP_BITS

    @property
    def type(self) -> ConnectionType:
        return ConnectionType.RTU

    def __str__(self) -> str:
        return (
            f"RTU {self.serial_port} {self.baud_rate} "
            f"{self.data_bits}{self.parity}{self.stop_bits}"
        )
