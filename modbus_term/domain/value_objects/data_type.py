"""Register data types.

A data type tells the codec how many consecutive 16-bit words a logical
value occupies and how to interpret them.
"""

from enum import Enum
from typing import Optional


class DataType(Enum):
    """Typed interpretations of Modbus register words."""

    UINT16 = "uint16"  # Unsigned 16-bit integer (0-65535)
    INT16 = "int16"  # Signed 16-bit integer (-32768 to 32767)
    UINT32 = "uint32"  # Unsigned 32-bit (two registers)
    INT32 = "int32"  # Signed 32-bit (two registers)
    FLOAT32 = "float32"  # IEEE 754 single (two registers)
    FLOAT64 = "float64"  # IEEE 754 double (four registers)
    ASCII_STRING = "ascii"  # Two characters per register, variable length
    HEX = "hex"  # Single register shown as 0xNNNN
    BINARY = "binary"  # Single register shown as 16 bits

    @property
    def fixed_word_span(self) -> Optional[int]:
        """Number of registers a value occupies, None when variable.

        Example:
            >>> DataType.FLOAT64.fixed_word_span
            4
            >>> DataType.ASCII_STRING.fixed_word_span is None
            True
        """
        return _WORD_SPANS.get(self)

    @property
    def is_multi_word(self) -> bool:
        """Whether values of this type can span more than one register."""
        return self.fixed_word_span != 1

    @property
    def display_name(self) -> str:
        """Short label used in tables and menus (u16, f32, ASCII...)."""
        return _DISPLAY_NAMES[self]

    @classmethod
    def from_name(cls, name: str) -> "DataType":
        """Resolve a data type from its value, member name or display name.

        Args:
            name: "float32", "FLOAT32" or "f32" all resolve to FLOAT32

        Returns:
            Matching DataType

        Raises:
            ValueError: If nothing matches
        """
        if isinstance(name, cls):
            return name
        key = str(name).strip()
        for member in cls:
            if key.lower() in (member.value, member.name.lower()) or key == member.display_name:
                return member
        raise ValueError(f"Unknown data type: {name}")


def word_span(data_type: DataType, value: Optional[object] = None) -> int:
    """Number of registers a value of ``data_type`` occupies.

    Fixed for every type except ASCII_STRING, which takes ceil(len/2)
    registers and never less than one.

    Args:
        data_type: Register data type
        value: Text of the value, only consulted for ASCII_STRING

    Returns:
        Word span (>= 1)

    Example:
        >>> word_span(DataType.UINT32)
        2
        >>> word_span(DataType.ASCII_STRING, "HELLO")
        3
    """
    span = data_type.fixed_word_span
    if span is not None:
        return span
    text = "" if value is None else str(value)
    return max(1, (len(text) + 1) // 2)


_WORD_SPANS = {
    DataType.UINT16: 1,
    DataType.INT16: 1,
    DataType.HEX: 1,
    DataType.BINARY: 1,
    DataType.UINT32: 2,
    DataType.INT32: 2,
    DataType.FLOAT32: 2,
    DataType.FLOAT64: 4,
}

_DISPLAY_NAMES = {
    DataType.UINT16: "u16",
    DataType.INT16: "i16",
    DataType.UINT32: "u32",
    DataType.INT32: "i32",
    DataType.FLOAT32: "f32",
    DataType.FLOAT64: "f64",
    DataType.ASCII_STRING: "ASCII",
    DataType.HEX: "Hex",
    DataType.BINARY: "Binary",
}
