"""IModbusTransport interface for transport layer implementations."""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence, Union

from ..value_objects.connection_parameters import ConnectionParameters
from ..value_objects.external_write import ExternalWrite
from ..value_objects.modbus_request import ModbusRequest
from ..value_objects.register_kind import RegisterKind

ExternalWriteListener = Callable[[ExternalWrite], None]
Payload = Union[List[int], List[bool]]


class IModbusTransport(ABC):
    """Interface for Modbus transport implementations (RTU or TCP).

    The transport already performs framing, CRC and request/response
    matching. The core only sees typed requests and raw word or boolean
    payloads.

    Connection lifecycle:
        1. connect(params) → opens the serial port or socket
        2. execute_request(request) / probe(slave_id) (multiple times)
        3. disconnect() → closes it

    In slave mode the transport also owns the data image a remote master
    reads from, and reports the writes that master makes through
    external write listeners. Listeners may be called from the
    transport's own thread.

    Example:
        >>> await transport.connect(TcpConnectionParameters(host="10.0.0.5"))
        >>> words = await transport.execute_request(
        ...     ModbusRequest.read(FunctionCode.READ_HOLDING_REGISTERS, 0, 2)
        ... )
        >>> await transport.disconnect()
    """

    @abstractmethod
    async def connect(self, params: ConnectionParameters) -> bool:
        """Open the connection.

        Args:
            params: TCP or RTU connection parameters

        Returns:
            True if connection successful, False otherwise
        """

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the connection.

        This method should be idempotent (safe to call multiple times).
        """

    @abstractmethod
    async def execute_request(self, request: ModbusRequest) -> Optional[Payload]:
        """Send a request and wait for the reply.

        Args:
            request: Read or write request

        Returns:
            Register words for register reads, booleans for coil and
            discrete input reads, None for writes

        Raises:
            ProtocolTimeout: If no reply arrived before the timeout
            ProtocolException: If the device returned an exception reply
            TransportFailure: If the connection is lost or not open
        """

    @abstractmethod
    async def probe(self, slave_id: int, timeout: float, address: int = 0) -> float:
        """Issue a minimal one-register read to discover a device.

        Args:
            slave_id: Bus address to probe
            timeout: Seconds to wait for the reply
            address: Holding register to read

        Returns:
            Response time in milliseconds

        Raises:
            ProtocolTimeout: If no reply arrived in time
            ProtocolException: If the device answered with an exception
            TransportFailure: If the connection is lost
        """

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Check if transport is currently connected."""

    @abstractmethod
    def add_external_write_listener(self, listener: ExternalWriteListener) -> None:
        """Register a callback for writes made by a remote master."""

    @abstractmethod
    def write_data_image(
        self, kind: RegisterKind, start_address: int, values: Sequence
    ) -> None:
        """Update the slave data image a remote master reads from.

        Args:
            kind: Data table to write
            start_address: First address
            values: Words for register tables, booleans for bit tables
        """
