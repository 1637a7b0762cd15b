"""Domain interfaces for the ModbusTerm core.

This module defines the contracts that infrastructure implementations
must fulfill. The core depends on these abstractions only, so tests can
substitute fakes and real RTU or TCP transports can be swapped freely.
"""

from .i_modbus_transport import ExternalWriteListener, IModbusTransport, Payload

__all__ = [
    "IModbusTransport",
    "ExternalWriteListener",
    "Payload",
]
