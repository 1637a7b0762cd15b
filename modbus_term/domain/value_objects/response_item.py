"""ModbusResponseItem value object.

One addressed, typed value decoded from a read reply. Rebuilt on every
response, never persisted.
"""

from dataclasses import dataclass, field
from typing import Any, Tuple

from .data_type import DataType


@dataclass(frozen=True)
class ModbusResponseItem:
    """Decoded value at an address.

    Attributes:
        address: Address of the first register (or the bit) consumed
        value: Decoded value (int, float, str or bool)
        data_type: Type used to decode the value
        raw_words: Register words consumed, or (0|1,) for a bit

    Example:
        >>> item = ModbusResponseItem(10, 0x1234, DataType.UINT16, (0x1234,))
        >>> item.hex_value
        '0x1234'
        >>> item.binary_value
        '0001001000110100'
    """

    address: int
    value: Any
    data_type: DataType
    raw_words: Tuple[int, ...] = field(default_factory=tuple)

    @property
    def is_bit(self) -> bool:
        """Whether this item came from a coil or discrete input."""
        return isinstance(self.value, bool)

    @property
    def formatted_value(self) -> str:
        """Display text for the decoded value."""
        if self.is_bit:
            return "1" if self.value else "0"
        # Late import: strategies depend on value_objects
        from ..strategies.value_codec_strategy import format_value

        return format_value(self.value, self.data_type)

    @property
    def hex_value(self) -> str:
        """Hex projection of a single word or bit, empty otherwise."""
        if self.is_bit:
            return "0x01" if self.value else "0x00"
        if len(self.raw_words) == 1:
            return f"0x{self.raw_words[0]:04X}"
        return ""

    @property
    def binary_value(self) -> str:
        """Binary projection of a single word or bit, empty otherwise."""
        if self.is_bit:
            return "1" if self.value else "0"
        if len(self.raw_words) == 1:
            return format(self.raw_words[0], "016b")
        return ""
