"""Custom exceptions for the ModbusTerm core.

This module defines domain-specific exceptions for the error conditions
the register model, codec and scanner can run into. Every failure is
scoped to the operation that triggered it; nothing here is meant to
terminate the process.
"""

from typing import Optional

from .value_objects.exception_code import ExceptionCode


class ModbusTermError(Exception):
    """Base class for all ModbusTerm core errors."""


class FormatError(ModbusTermError, ValueError):
    """Malformed typed input (operator text that cannot be encoded).

    When raised while building a write request, ``index`` names the
    offending write item and ``data_type`` the type it was parsed as.
    The whole write is aborted; no partial payload is ever sent.

    Example:
        >>> raise FormatError("Invalid UInt16 value: 'abc'", index=1)
    """

    def __init__(
        self,
        message: str,
        index: Optional[int] = None,
        data_type: Optional[object] = None,
    ):
        super().__init__(message)
        self.index = index
        self.data_type = data_type


class ProtocolTimeout(ModbusTermError, TimeoutError):
    """No reply arrived before the request deadline.

    Reported as a Timeout classification by the scanner. Not fatal.
    """


class ProtocolException(ModbusTermError):
    """Device answered with a Modbus exception reply.

    Attributes:
        code: Modbus exception code returned by the device
        slave_id: Slave that answered, when known
    """

    def __init__(self, code: int, slave_id: Optional[int] = None, message: str = ""):
        self.code = code
        self.slave_id = slave_id
        self.description = message or ExceptionCode.describe(code)
        super().__init__(self.description)


class TransportFailure(ModbusTermError, ConnectionError):
    """Connection lost or unusable mid-operation.

    Propagated to the caller. Any active device scan is stopped.
    """


class ScanInProgressError(ModbusTermError):
    """A device scan was requested while another one is still active."""


class DuplicateAddressError(ModbusTermError, ValueError):
    """An entry at the same address, or with an overlapping span, already exists."""


class EntryNotFoundError(ModbusTermError, KeyError):
    """The referenced register or coil is not held by the store."""
