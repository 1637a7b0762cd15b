"""Modbus data tables held by a slave."""

from enum import Enum


class RegisterKind(Enum):
    """The four Modbus data tables, each with its own address space."""

    HOLDING_REGISTERS = "holding_registers"
    INPUT_REGISTERS = "input_registers"
    COILS = "coils"
    DISCRETE_INPUTS = "discrete_inputs"

    @property
    def is_boolean(self) -> bool:
        """Coils and discrete inputs hold single bits."""
        return self in (RegisterKind.COILS, RegisterKind.DISCRETE_INPUTS)

    @property
    def label(self) -> str:
        """Human-readable table name for log messages."""
        return self.value.replace("_", " ")
