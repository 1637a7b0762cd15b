"""Tests for word and byte transformation helpers."""

import pytest

from modbus_term.domain.helpers.transformations import (
    bytes_to_words,
    swap_bytes,
    words_to_bytes,
)


class TestWordPacking:
    """Test word to byte layout."""

    def test_words_to_bytes_little_endian(self):
        """Test each word contributes its low byte first."""
        assert words_to_bytes([0x0002, 0x0001]) == b"\x02\x00\x01\x00"

    def test_words_to_bytes_reverse_order(self):
        """Test reverse order reads the most significant word first."""
        assert words_to_bytes([0x0001, 0x0002], reverse_order=True) == b"\x02\x00\x01\x00"

    def test_bytes_to_words(self):
        """Test bytes are grouped into little-endian words."""
        assert bytes_to_words(b"\x02\x00\x01\x00") == [0x0002, 0x0001]
        assert bytes_to_words(b"\x02\x00\x01\x00", reverse_order=True) == [0x0001, 0x0002]

    def test_bytes_to_words_odd_length(self):
        """Test odd byte counts are rejected."""
        with pytest.raises(ValueError, match="even number of bytes"):
            bytes_to_words(b"\x01\x02\x03")

    def test_swap_bytes(self):
        """Test the two bytes of a word trade places."""
        assert swap_bytes(0x4142) == 0x4241
        assert swap_bytes(0x00FF) == 0xFF00
