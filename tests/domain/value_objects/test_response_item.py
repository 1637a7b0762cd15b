"""Tests for response items, requests and external writes."""

import pytest

from modbus_term.domain.value_objects import (
    CommunicationEvent,
    DataType,
    EventType,
    ExternalWrite,
    FunctionCode,
    ModbusRequest,
    ModbusResponseItem,
    RegisterKind,
    WriteDataItem,
)


class TestModbusResponseItem:
    """Test ModbusResponseItem projections."""

    def test_single_word_projections(self):
        """Test hex and binary projections of one word."""
        item = ModbusResponseItem(10, 0x1234, DataType.UINT16, (0x1234,))
        assert item.formatted_value == "4660"
        assert item.hex_value == "0x1234"
        assert item.binary_value == "0001001000110100"
        assert not item.is_bit

    def test_multi_word_has_no_raw_projection(self):
        """Test multi-word values only have a formatted projection."""
        item = ModbusResponseItem(0, 1.5, DataType.FLOAT32, (0x0000, 0x3FC0))
        assert item.formatted_value == "1.500"
        assert item.hex_value == ""
        assert item.binary_value == ""

    def test_bit_projections(self):
        """Test coils project as 1/0."""
        item = ModbusResponseItem(3, True, DataType.BINARY, (1,))
        assert item.is_bit
        assert item.formatted_value == "1"
        assert item.hex_value == "0x01"
        assert item.binary_value == "1"


class TestModbusRequest:
    """Test ModbusRequest value object."""

    def test_read(self):
        """Test read factory."""
        request = ModbusRequest.read(FunctionCode.READ_HOLDING_REGISTERS, 0, 10, slave_id=3)
        assert request.quantity == 10
        assert request.slave_id == 3
        assert request.payload == ()

    def test_read_rejects_write_function(self):
        """Test a write function cannot build a read."""
        with pytest.raises(ValueError, match="not a read function"):
            ModbusRequest.read(FunctionCode.WRITE_SINGLE_REGISTER, 0, 1)

    def test_payload_follows_function(self):
        """Test payload is the bits for coil writes and words otherwise."""
        coils = ModbusRequest(FunctionCode.WRITE_MULTIPLE_COILS, coils=(True, False))
        words = ModbusRequest(FunctionCode.WRITE_MULTIPLE_REGISTERS, registers=(1, 2))
        assert coils.payload == (True, False)
        assert words.payload == (1, 2)

    def test_str(self):
        """Test log description."""
        request = ModbusRequest.read(FunctionCode.READ_COILS, 5, 8)
        assert str(request) == "Read 8 coils at address 5 (FC1) - Slave ID 1"


class TestExternalWrite:
    """Test ExternalWrite value object."""

    def test_range(self):
        """Test end address and value lookup."""
        write = ExternalWrite(RegisterKind.HOLDING_REGISTERS, 10, (0x0002, 0x0001))
        assert write.end_address == 11
        assert write.value_at(11) == 0x0001
        assert write.value_at(12) is None
        assert write.address_range() == "10-11"

    def test_single_address_range(self):
        """Test single-value writes name one address."""
        write = ExternalWrite(RegisterKind.COILS, 4, (True,))
        assert write.address_range() == "4"


class TestWriteDataItem:
    """Test WriteDataItem input row."""

    def test_span_follows_type(self):
        """Test span is derived from type and text."""
        assert WriteDataItem("1.5", DataType.FLOAT64).word_span == 4
        assert WriteDataItem("HELLO", DataType.ASCII_STRING).word_span == 3

    def test_for_coil(self):
        """Test coil items are BINARY with a boolean value."""
        item = WriteDataItem.for_coil(True)
        assert item.data_type == DataType.BINARY
        assert item.boolean_value is True


class TestCommunicationEvent:
    """Test CommunicationEvent formatting."""

    def test_hex_data(self):
        """Test raw data renders as spaced hex."""
        event = CommunicationEvent.sent(b"\x01\x03\x00", "Read")
        assert event.type == EventType.SENT
        assert event.hex_data == "01 03 00"
        assert "SENT: Read [01 03 00]" in str(event)

    def test_no_data(self):
        """Test events without raw data."""
        event = CommunicationEvent.info("Connected")
        assert event.hex_data == ""
        assert str(event).endswith("INFO: Connected")
