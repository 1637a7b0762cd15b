"""Tests for ResponseDecoder."""

import pytest

from modbus_term.application.services import ResponseDecoder
from modbus_term.domain.value_objects import DataType, FunctionCode


class TestResponseDecoder:
    """Test suite for ResponseDecoder."""

    @pytest.fixture
    def decoder(self):
        """Create decoder with the default word order."""
        return ResponseDecoder()

    def test_uint16_one_item_per_word(self, decoder):
        """Test single-word types yield one item per register."""
        items = decoder.decode_registers([1, 0xFFFF], DataType.INT16, 100)
        assert [(item.address, item.value) for item in items] == [(100, 1), (101, -1)]
        assert items[1].raw_words == (0xFFFF,)

    def test_multi_word_addresses_advance_by_span(self, decoder):
        """Test Float32 items sit two addresses apart."""
        items = decoder.decode_registers([0, 0x3FC0, 0, 0x4000], DataType.FLOAT32, 10)
        assert [(item.address, item.value) for item in items] == [(10, 1.5), (12, 2.0)]

    def test_trailing_words_dropped(self, decoder):
        """Test words too few for another value are not decoded."""
        items = decoder.decode_registers([0x0002, 0x0001, 0x0005], DataType.UINT32)
        assert len(items) == 1
        assert items[0].value == 0x00010002

    def test_too_short_for_one_value(self, decoder):
        """Test a payload shorter than one value yields nothing."""
        assert decoder.decode_registers([1, 2, 3], DataType.FLOAT64) == []

    def test_ascii_single_item(self, decoder):
        """Test the whole payload becomes one string."""
        items = decoder.decode_registers([0x4845, 0x4C4C, 0x4F00], DataType.ASCII_STRING, 5)
        assert len(items) == 1
        assert items[0].address == 5
        assert items[0].value == "HELLO"
        assert items[0].raw_words == (0x4845, 0x4C4C, 0x4F00)

    def test_reverse_order(self):
        """Test the decoder's word order setting and per-call override."""
        decoder = ResponseDecoder(reverse_order=True)
        assert decoder.decode_registers([1, 2], DataType.UINT32)[0].value == 0x00010002
        assert decoder.decode_registers([1, 2], DataType.UINT32, reverse_order=False)[0].value == 0x00020001

    def test_empty_payload(self, decoder):
        """Test no words, no items."""
        assert decoder.decode_registers([], DataType.UINT16) == []
        assert decoder.decode_registers([], DataType.ASCII_STRING) == []

    def test_bits(self, decoder):
        """Test one BINARY item per bit."""
        items = decoder.decode_bits([True, False, 1], start_address=8)
        assert [(item.address, item.value) for item in items] == [(8, True), (9, False), (10, True)]
        assert all(item.data_type == DataType.BINARY for item in items)
        assert items[0].raw_words == (1,)

    def test_decode_dispatches_on_function(self, decoder):
        """Test coil functions decode bits, register functions words."""
        bits = decoder.decode(FunctionCode.READ_COILS, [True])
        words = decoder.decode(FunctionCode.READ_INPUT_REGISTERS, [0x1234], DataType.HEX)
        assert bits[0].is_bit
        assert words[0].formatted_value == "0x1234"

    def test_decode_none_payload(self, decoder):
        """Test a missing payload decodes to nothing."""
        assert decoder.decode(FunctionCode.READ_HOLDING_REGISTERS, None) == []
