"""ModbusRequest value object: what the transport is asked to execute."""

from dataclasses import dataclass, field
from typing import Tuple

from .function_code import FunctionCode


@dataclass(frozen=True)
class ModbusRequest:
    """A read or write request, independent of framing.

    Attributes:
        function_code: Modbus function
        start_address: First register or coil address
        quantity: Number of registers or coils read or written
        slave_id: Target device (1-247)
        registers: Word payload for FC06/FC16
        coils: Bit payload for FC05/FC15

    Example:
        >>> request = ModbusRequest.read(FunctionCode.READ_HOLDING_REGISTERS, 0, 10)
        >>> request.quantity
        10
    """

    function_code: FunctionCode
    start_address: int = 0
    quantity: int = 1
    slave_id: int = 1
    registers: Tuple[int, ...] = field(default_factory=tuple)
    coils: Tuple[bool, ...] = field(default_factory=tuple)

    @classmethod
    def read(
        cls,
        function_code: FunctionCode,
        start_address: int,
        quantity: int,
        slave_id: int = 1,
    ) -> "ModbusRequest":
        """Build a read request (FC01-FC04)."""
        if not function_code.is_read:
            raise ValueError(f"{function_code.name} is not a read function")
        return cls(function_code, start_address, quantity, slave_id)

    @property
    def payload(self) -> tuple:
        """The bits or words carried by a write request."""
        return self.coils if self.function_code.is_coil else self.registers

    def __str__(self) -> str:
        verb = "Read" if self.function_code.is_read else "Write"
        unit = "coils" if self.function_code.is_coil else "registers"
        return (
            f"{verb} {self.quantity} {unit} at address {self.start_address} "
            f"(FC{int(self.function_code)}) - Slave ID {self.slave_id}"
        )
