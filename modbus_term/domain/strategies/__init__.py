"""Domain strategies."""

from .value_codec_strategy import (
    AsciiStringCodec,
    BinaryCodec,
    CodecFactory,
    Float32Codec,
    Float64Codec,
    HexCodec,
    Int16Codec,
    Int32Codec,
    UInt16Codec,
    UInt32Codec,
    ValueCodecStrategy,
    decode,
    encode,
    format_value,
    parse_value,
)

__all__ = [
    "ValueCodecStrategy",
    "CodecFactory",
    "UInt16Codec",
    "Int16Codec",
    "UInt32Codec",
    "Int32Codec",
    "Float32Codec",
    "Float64Codec",
    "AsciiStringCodec",
    "HexCodec",
    "BinaryCodec",
    "encode",
    "decode",
    "format_value",
    "parse_value",
]
