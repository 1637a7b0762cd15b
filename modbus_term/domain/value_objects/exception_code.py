"""Modbus exception codes."""

from enum import IntEnum


class ExceptionCode(IntEnum):
    """Standard Modbus exception codes returned by slave devices."""

    ILLEGAL_FUNCTION = 0x01
    ILLEGAL_DATA_ADDRESS = 0x02
    ILLEGAL_DATA_VALUE = 0x03
    SLAVE_DEVICE_FAILURE = 0x04
    ACKNOWLEDGE = 0x05
    SLAVE_DEVICE_BUSY = 0x06
    MEMORY_PARITY_ERROR = 0x08
    GATEWAY_PATH_UNAVAILABLE = 0x0A
    GATEWAY_TARGET_NO_RESPONSE = 0x0B

    @classmethod
    def describe(cls, code: int) -> str:
        """Short description of an exception code.

        Args:
            code: Exception code byte from the reply

        Returns:
            Description, or "Unknown Exception Code N" for codes outside the table

        Example:
            >>> ExceptionCode.describe(2)
            'Illegal Data Address'
            >>> ExceptionCode.describe(0x7F)
            'Unknown Exception Code 127'
        """
        try:
            return _DESCRIPTIONS[cls(code)]
        except ValueError:
            return f"Unknown Exception Code {code}"


_DESCRIPTIONS = {
    ExceptionCode.ILLEGAL_FUNCTION: "Illegal Function",
    ExceptionCode.ILLEGAL_DATA_ADDRESS: "Illegal Data Address",
    ExceptionCode.ILLEGAL_DATA_VALUE: "Illegal Data Value",
    ExceptionCode.SLAVE_DEVICE_FAILURE: "Slave Device Failure",
    ExceptionCode.ACKNOWLEDGE: "Acknowledge",
    ExceptionCode.SLAVE_DEVICE_BUSY: "Slave Device Busy",
    ExceptionCode.MEMORY_PARITY_ERROR: "Memory Parity Error",
    ExceptionCode.GATEWAY_PATH_UNAVAILABLE: "Gateway Path Unavailable",
    ExceptionCode.GATEWAY_TARGET_NO_RESPONSE: "Gateway Target Device Failed to Respond",
}
