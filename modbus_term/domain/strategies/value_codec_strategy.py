"""Value encoding/decoding strategies using Strategy pattern.

Every register data type has a codec that converts between a typed value
and the 16-bit words it occupies on the wire.

Word-order policy:
    Bytes inside a word are packed little-endian. Multi-word numbers are
    sent least-significant word first unless ``reverse_order`` is set, in
    which case the most-significant word comes first. The word sequence,
    assembled per that flag, is the raw little-endian byte image of the
    integer or IEEE 754 value.

ASCII strings hold two characters per word, the earlier character in the
high byte; ``reverse_order`` swaps the bytes inside each word instead of
the word order.

Example:
    >>> encode("65538", DataType.UINT32)
    [2, 1]
    >>> decode([2, 1], DataType.UINT32)
    (65538, 2)
"""

import re
import struct
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence, Tuple, Union

from ...const import FLOAT32_DECIMALS, FLOAT64_DECIMALS
from ..exceptions import FormatError
from ..helpers.transformations import bytes_to_words, swap_bytes, words_to_bytes
from ..helpers.validators import validate_words
from ..value_objects.data_type import DataType, word_span

_INTEGER_TEXT = re.compile(r"^[+-]?\d+$")
_HEX_TEXT = re.compile(r"^[0-9A-Fa-f]{1,4}$")
_BINARY_TEXT = re.compile(r"^[01]{1,16}$")


class ValueCodecStrategy(ABC):
    """Abstract strategy for encoding/decoding typed register values."""

    data_type: DataType
    label: str = ""

    @abstractmethod
    def parse(self, value: Any) -> Any:
        """Convert operator input (text or native value) to the typed value.

        Raises:
            FormatError: If the input is malformed or out of range
        """

    @abstractmethod
    def encode(self, value: Any, reverse_order: bool = False) -> List[int]:
        """Encode a typed value (or its text) to register words.

        Args:
            value: Typed value or operator text
            reverse_order: Most-significant word first

        Returns:
            Register words, word_span(value) of them

        Raises:
            FormatError: If the value cannot be parsed
        """

    @abstractmethod
    def decode(self, words: Sequence[int], reverse_order: bool = False) -> Any:
        """Decode exactly one value's words to the typed value."""

    def format(self, value: Any) -> str:
        """Display text for a typed value."""
        return str(value)

    def span(self, value: Any = None) -> int:
        """Register count of a value of this type."""
        return word_span(self.data_type, value)

    def _invalid(self, value: Any, reason: str = "") -> FormatError:
        message = f"Invalid {self.label} value: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        return FormatError(message, data_type=self.data_type)


class _IntegerCodec(ValueCodecStrategy):
    """Two's complement integers of 1 or 2 words."""

    bits: int = 16
    signed: bool = False

    @property
    def minimum(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def maximum(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    def parse(self, value: Any) -> int:
        if isinstance(value, bool):
            raise self._invalid(value)
        if isinstance(value, int):
            number = value
        elif isinstance(value, float):
            if not value.is_integer():
                raise self._invalid(value, "not an integer")
            number = int(value)
        else:
            text = str(value).strip()
            if not _INTEGER_TEXT.match(text):
                raise self._invalid(value)
            number = int(text)

        if not self.minimum <= number <= self.maximum:
            raise self._invalid(value, f"must be {self.minimum}-{self.maximum}")
        return number

    def encode(self, value: Any, reverse_order: bool = False) -> List[int]:
        number = self.parse(value)
        raw = number.to_bytes(self.bits // 8, byteorder="little", signed=self.signed)
        return bytes_to_words(raw, reverse_order)

    def decode(self, words: Sequence[int], reverse_order: bool = False) -> int:
        raw = words_to_bytes(words, reverse_order)
        return int.from_bytes(raw, byteorder="little", signed=self.signed)


class UInt16Codec(_IntegerCodec):
    """Codec for unsigned 16-bit integers."""

    data_type = DataType.UINT16
    label = "UInt16"
    bits = 16
    signed = False


class Int16Codec(_IntegerCodec):
    """Codec for signed 16-bit integers (two's complement)."""

    data_type = DataType.INT16
    label = "Int16"
    bits = 16
    signed = True


class UInt32Codec(_IntegerCodec):
    """Codec for unsigned 32-bit integers over two registers."""

    data_type = DataType.UINT32
    label = "UInt32"
    bits = 32
    signed = False


class Int32Codec(_IntegerCodec):
    """Codec for signed 32-bit integers over two registers."""

    data_type = DataType.INT32
    label = "Int32"
    bits = 32
    signed = True


class _FloatCodec(ValueCodecStrategy):
    """IEEE 754 floats laid out per the word-order policy."""

    struct_format: str = "<f"
    decimals: int = FLOAT32_DECIMALS

    def parse(self, value: Any) -> float:
        if isinstance(value, bool):
            raise self._invalid(value)
        if isinstance(value, (int, float)):
            number = float(value)
        else:
            try:
                number = float(str(value).strip())
            except ValueError as err:
                raise self._invalid(value) from err
        try:
            struct.pack(self.struct_format, number)
        except (OverflowError, struct.error) as err:
            raise self._invalid(value, "out of range") from err
        return number

    def encode(self, value: Any, reverse_order: bool = False) -> List[int]:
        raw = struct.pack(self.struct_format, self.parse(value))
        return bytes_to_words(raw, reverse_order)

    def decode(self, words: Sequence[int], reverse_order: bool = False) -> float:
        raw = words_to_bytes(words, reverse_order)
        return struct.unpack(self.struct_format, raw)[0]

    def format(self, value: Any) -> str:
        return f"{value:.{self.decimals}f}"


class Float32Codec(_FloatCodec):
    """Codec for 32-bit floats over two registers."""

    data_type = DataType.FLOAT32
    label = "Float32"
    struct_format = "<f"
    decimals = FLOAT32_DECIMALS


class Float64Codec(_FloatCodec):
    """Codec for 64-bit floats over four registers."""

    data_type = DataType.FLOAT64
    label = "Float64"
    struct_format = "<d"
    decimals = FLOAT64_DECIMALS


class AsciiStringCodec(ValueCodecStrategy):
    """Codec for ASCII text, two characters per register.

    Odd-length text is NUL padded; decoding strips trailing NULs. The
    empty string still occupies one (all NUL) register.

    Example:
        >>> [hex(w) for w in AsciiStringCodec().encode("ABC")]
        ['0x4142', '0x4300']
    """

    data_type = DataType.ASCII_STRING
    label = "ASCII"

    def parse(self, value: Any) -> str:
        if isinstance(value, (bytes, bytearray)):
            try:
                return bytes(value).decode("ascii")
            except UnicodeDecodeError as err:
                raise self._invalid(value, "non-ASCII characters") from err
        text = str(value)
        if not text.isascii():
            raise self._invalid(value, "non-ASCII characters")
        return text

    def encode(self, value: Any, reverse_order: bool = False) -> List[int]:
        raw = self.parse(value).encode("ascii")
        if len(raw) % 2:
            raw += b"\x00"
        if not raw:
            raw = b"\x00\x00"

        words = []
        for i in range(0, len(raw), 2):
            word = (raw[i] << 8) | raw[i + 1]
            words.append(swap_bytes(word) if reverse_order else word)
        return words

    def decode(self, words: Sequence[int], reverse_order: bool = False) -> str:
        chars = []
        for word in words:
            if reverse_order:
                word = swap_bytes(word)
            chars.append(chr((word >> 8) & 0xFF))
            chars.append(chr(word & 0xFF))
        return "".join(chars).rstrip("\x00")


class HexCodec(ValueCodecStrategy):
    """Single register entered and shown as hexadecimal text.

    Accepts "1A2B", "0x1A2B", "#1A2B" and "1A 2B".
    """

    data_type = DataType.HEX
    label = "hexadecimal"

    def parse(self, value: Any) -> int:
        if isinstance(value, bool):
            raise self._invalid(value)
        if isinstance(value, int):
            if not 0 <= value <= 0xFFFF:
                raise self._invalid(value, "must be 0x0000-0xFFFF")
            return value

        text = str(value).replace(" ", "")
        if text[:2].lower() == "0x":
            text = text[2:]
        elif text.startswith("#"):
            text = text[1:]
        if not _HEX_TEXT.match(text):
            raise self._invalid(value)
        return int(text, 16)

    def encode(self, value: Any, reverse_order: bool = False) -> List[int]:
        return [self.parse(value)]

    def decode(self, words: Sequence[int], reverse_order: bool = False) -> int:
        return words[0]

    def format(self, value: Any) -> str:
        return f"0x{value:04X}"


class BinaryCodec(ValueCodecStrategy):
    """Single register entered and shown as up to 16 binary digits.

    Accepts "1010", "0b1010" and "1010 1010".
    """

    data_type = DataType.BINARY
    label = "binary"

    def parse(self, value: Any) -> int:
        if isinstance(value, bool):
            raise self._invalid(value)
        if isinstance(value, int):
            if not 0 <= value <= 0xFFFF:
                raise self._invalid(value, "must fit in 16 bits")
            return value

        text = str(value).replace(" ", "")
        if text[:2].lower() == "0b":
            text = text[2:]
        if not _BINARY_TEXT.match(text):
            raise self._invalid(value, "expected 1-16 binary digits")
        return int(text, 2)

    def encode(self, value: Any, reverse_order: bool = False) -> List[int]:
        return [self.parse(value)]

    def decode(self, words: Sequence[int], reverse_order: bool = False) -> int:
        return words[0]

    def format(self, value: Any) -> str:
        return format(value, "016b")


class CodecFactory:
    """Factory for creating appropriate codec based on data type."""

    _codecs = {
        DataType.UINT16: UInt16Codec(),
        DataType.INT16: Int16Codec(),
        DataType.UINT32: UInt32Codec(),
        DataType.INT32: Int32Codec(),
        DataType.FLOAT32: Float32Codec(),
        DataType.FLOAT64: Float64Codec(),
        DataType.ASCII_STRING: AsciiStringCodec(),
        DataType.HEX: HexCodec(),
        DataType.BINARY: BinaryCodec(),
    }

    @classmethod
    def get_codec(cls, data_type: Union[DataType, str]) -> ValueCodecStrategy:
        """Get codec for data type.

        Args:
            data_type: DataType member or any name DataType.from_name accepts

        Returns:
            Appropriate codec instance

        Raises:
            ValueError: If data type unknown

        Example:
            >>> codec = CodecFactory.get_codec("i16")
            >>> codec.decode([0xFFEC])
            -20
        """
        if not isinstance(data_type, DataType):
            data_type = DataType.from_name(data_type)
        return cls._codecs[data_type]

    @classmethod
    def get_supported_types(cls) -> List[DataType]:
        """Get list of supported data types."""
        return list(cls._codecs.keys())


def parse_value(value: Any, data_type: DataType) -> Any:
    """Parse operator input to the typed value for ``data_type``.

    Raises:
        FormatError: If the input is malformed
    """
    return CodecFactory.get_codec(data_type).parse(value)


def encode(value: Any, data_type: DataType, reverse_order: bool = False) -> List[int]:
    """Encode a typed value (or its text) to register words.

    Args:
        value: Typed value or operator text
        data_type: Register data type
        reverse_order: Most-significant word first for multi-word numbers,
            per-word byte swap for ASCII

    Returns:
        word_span(data_type, value) register words

    Raises:
        FormatError: If the value is malformed or out of range

    Example:
        >>> encode("-2", DataType.INT16)
        [65534]
    """
    return CodecFactory.get_codec(data_type).encode(value, reverse_order)


def decode(
    words: Sequence[int], data_type: DataType, reverse_order: bool = False
) -> Tuple[Optional[Any], int]:
    """Decode one value from the front of ``words``.

    Consumes exactly word_span(data_type) words; ASCII_STRING consumes all
    of them. When fewer words remain than the type needs, nothing is
    decoded and ``(None, 0)`` is returned: running off the end of a
    payload is not an error.

    Args:
        words: Register words (0-65535), extra trailing words are ignored
        data_type: Register data type
        reverse_order: Most-significant word first

    Returns:
        Tuple of (decoded value or None, words consumed)

    Raises:
        ValidationError: If a word is outside 0-65535

    Example:
        >>> decode([0x0002, 0x0001, 0x0005], DataType.UINT32)
        (65538, 2)
        >>> decode([0x0002], DataType.UINT32)
        (None, 0)
    """
    codec = CodecFactory.get_codec(data_type)
    span = len(words) if data_type == DataType.ASCII_STRING else codec.span()
    if span == 0 or len(words) < span:
        return None, 0
    chunk = validate_words(words[:span])
    return codec.decode(chunk, reverse_order), span


def format_value(value: Any, data_type: DataType) -> str:
    """Display projection of a typed value.

    Example:
        >>> format_value(3.14159, DataType.FLOAT32)
        '3.142'
        >>> format_value(0x1A, DataType.HEX)
        '0x001A'
    """
    if value is None:
        return ""
    return CodecFactory.get_codec(data_type).format(value)
