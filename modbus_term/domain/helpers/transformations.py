"""Word and byte transformation helper functions.

This module provides the low-level conversions the codec is built on:
packing of 16-bit words to and from the raw bytes of a numeric
representation, and the per-word byte swap used for ASCII text.
"""

from typing import List, Sequence


def words_to_bytes(words: Sequence[int], reverse_order: bool = False) -> bytes:
    """Lay out register words as little-endian raw bytes.

    Each word contributes its low byte then its high byte. Words are taken
    least-significant first, as received, unless ``reverse_order`` says the
    sequence is most-significant first, in which case it is reversed.

    Args:
        words: Register words (0-65535)
        reverse_order: True when the first word is the most significant

    Returns:
        2 * len(words) bytes, least significant byte first

    Examples:
        >>> words_to_bytes([0x0002, 0x0001]).hex()
        '02000100'
        >>> words_to_bytes([0x0001, 0x0002], reverse_order=True).hex()
        '02000100'
    """
    ordered = list(reversed(words)) if reverse_order else list(words)
    data = bytearray()
    for word in ordered:
        data.append(word & 0xFF)
        data.append((word >> 8) & 0xFF)
    return bytes(data)


def bytes_to_words(data: bytes, reverse_order: bool = False) -> List[int]:
    """Inverse of words_to_bytes.

    Args:
        data: Little-endian raw bytes (even length)
        reverse_order: True to emit the most significant word first

    Returns:
        Register words

    Examples:
        >>> [hex(w) for w in bytes_to_words(bytes.fromhex('02000100'))]
        ['0x2', '0x1']
    """
    if len(data) % 2:
        raise ValueError(f"Expected an even number of bytes, got {len(data)}")
    words = [data[i] | (data[i + 1] << 8) for i in range(0, len(data), 2)]
    if reverse_order:
        words.reverse()
    return words


def swap_bytes(word: int) -> int:
    """Swap the two bytes of a 16-bit word.

    Examples:
        >>> hex(swap_bytes(0x4142))
        '0x4241'
    """
    return ((word & 0xFF) << 8) | ((word >> 8) & 0xFF)
