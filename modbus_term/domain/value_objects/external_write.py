"""ExternalWrite: a write observed on the slave data image."""

from dataclasses import dataclass, field
from typing import Tuple, Union

from .register_kind import RegisterKind


@dataclass(frozen=True)
class ExternalWrite:
    """A remote master wrote to this node acting as a slave.

    Attributes:
        kind: Table written (holding registers or coils)
        start_address: First address written
        values: Words for registers, bools for coils

    Example:
        >>> write = ExternalWrite(RegisterKind.HOLDING_REGISTERS, 10, (0x0002, 0x0001))
        >>> write.end_address
        11
    """

    kind: RegisterKind
    start_address: int
    values: Tuple[Union[int, bool], ...] = field(default_factory=tuple)

    @property
    def end_address(self) -> int:
        """Last address written (inclusive)."""
        return self.start_address + len(self.values) - 1

    def value_at(self, address: int):
        """Value written at ``address``, or None outside the written range."""
        offset = address - self.start_address
        if 0 <= offset < len(self.values):
            return self.values[offset]
        return None

    def address_range(self) -> str:
        """Written range for log messages, e.g. 10 or 10-11."""
        if len(self.values) > 1:
            return f"{self.start_address}-{self.end_address}"
        return f"{self.start_address}"
