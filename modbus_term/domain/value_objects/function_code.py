"""Modbus function codes supported by the terminal."""

from enum import IntEnum


class FunctionCode(IntEnum):
    """Modbus function codes."""

    READ_COILS = 0x01
    READ_DISCRETE_INPUTS = 0x02
    READ_HOLDING_REGISTERS = 0x03
    READ_INPUT_REGISTERS = 0x04
    WRITE_SINGLE_COIL = 0x05
    WRITE_SINGLE_REGISTER = 0x06
    WRITE_MULTIPLE_COILS = 0x0F
    WRITE_MULTIPLE_REGISTERS = 0x10

    @property
    def is_read(self) -> bool:
        """FC01-FC04."""
        return self <= FunctionCode.READ_INPUT_REGISTERS

    @property
    def is_write(self) -> bool:
        """FC05, FC06, FC15, FC16."""
        return not self.is_read

    @property
    def is_coil(self) -> bool:
        """Whether the function moves bits rather than 16-bit words."""
        return self in (
            FunctionCode.READ_COILS,
            FunctionCode.READ_DISCRETE_INPUTS,
            FunctionCode.WRITE_SINGLE_COIL,
            FunctionCode.WRITE_MULTIPLE_COILS,
        )

    @property
    def is_register(self) -> bool:
        """Whether the function moves 16-bit words."""
        return not self.is_coil

    @property
    def is_multiple(self) -> bool:
        """Multi-item write functions (FC15, FC16)."""
        return self in (
            FunctionCode.WRITE_MULTIPLE_COILS,
            FunctionCode.WRITE_MULTIPLE_REGISTERS,
        )
