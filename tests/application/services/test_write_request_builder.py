"""Tests for WriteRequestBuilder."""

import pytest

from modbus_term.application.services import CommunicationLog, WriteRequestBuilder
from modbus_term.application.services.write_request_builder import MAX_WRITE_REGISTERS
from modbus_term.domain.exceptions import FormatError
from modbus_term.domain.helpers.validators import ValidationError
from modbus_term.domain.value_objects import (
    DataType,
    EventType,
    FunctionCode,
    WriteDataItem,
)

FC06 = FunctionCode.WRITE_SINGLE_REGISTER
FC16 = FunctionCode.WRITE_MULTIPLE_REGISTERS
FC05 = FunctionCode.WRITE_SINGLE_COIL
FC15 = FunctionCode.WRITE_MULTIPLE_COILS


class TestWriteRequestBuilder:
    """Test suite for WriteRequestBuilder."""

    @pytest.fixture
    def builder(self):
        """Create builder with the default word order."""
        return WriteRequestBuilder()

    def test_multiple_registers_concatenate(self, builder):
        """Test every item's words are sent in order."""
        items = [
            WriteDataItem("1", DataType.UINT16),
            WriteDataItem("65538", DataType.UINT32),
            WriteDataItem("AB", DataType.ASCII_STRING),
        ]

        request = builder.build(FC16, 10, items, slave_id=5)

        assert request.registers == (1, 0x0002, 0x0001, 0x4142)
        assert request.quantity == 4
        assert request.start_address == 10
        assert request.slave_id == 5

    def test_reverse_order_override(self, builder):
        """Test the call can override the builder's word order."""
        items = [WriteDataItem("65538", DataType.UINT32)]
        request = builder.build(FC16, 0, items, reverse_order=True)
        assert request.registers == (0x0001, 0x0002)

    def test_malformed_item_aborts_whole_write(self, builder):
        """Test a bad second item raises with its index and builds nothing."""
        items = [
            WriteDataItem("3.14", DataType.FLOAT32),
            WriteDataItem("abc", DataType.UINT16),
        ]

        with pytest.raises(FormatError) as exc_info:
            builder.build(FC16, 0, items)

        assert exc_info.value.index == 1
        assert exc_info.value.data_type == DataType.UINT16
        assert str(exc_info.value).startswith("Item 1 (u16): Invalid UInt16 value")

    def test_single_register_uses_first_item(self, builder):
        """Test FC06 ignores items after the first."""
        items = [WriteDataItem("0x1A2B", DataType.HEX), WriteDataItem("5")]
        request = builder.build(FC06, 7, items)
        assert request.registers == (0x1A2B,)
        assert request.quantity == 1

    def test_single_register_truncates_wide_value(self):
        """Test FC06 with a two-word value sends only the first word and warns."""
        log = CommunicationLog()
        builder = WriteRequestBuilder(communication_log=log)

        request = builder.build(FC06, 0, [WriteDataItem("1.5", DataType.FLOAT32)])

        assert request.registers == (0x0000,)
        assert log.last().type == EventType.WARNING
        assert "only sends the first word" in log.last().message

    def test_coils_use_boolean_value(self, builder):
        """Test coil writes read boolean_value and ignore the text."""
        items = [
            WriteDataItem("0", DataType.BINARY, boolean_value=True),
            WriteDataItem.for_coil(False),
            WriteDataItem.for_coil(True),
        ]

        request = builder.build(FC15, 20, items)

        assert request.coils == (True, False, True)
        assert request.quantity == 3
        assert request.registers == ()

    def test_single_coil(self, builder):
        """Test FC05 writes exactly one bit."""
        request = builder.build(FC05, 3, [WriteDataItem.for_coil(True), WriteDataItem.for_coil(False)])
        assert request.coils == (True,)

    def test_read_function_rejected(self, builder):
        """Test reads cannot be built as writes."""
        with pytest.raises(ValueError, match="not a write function"):
            builder.build(FunctionCode.READ_HOLDING_REGISTERS, 0, [WriteDataItem()])

    def test_no_items(self, builder):
        """Test an empty batch is rejected."""
        with pytest.raises(ValueError, match="At least one write item"):
            builder.build(FC16, 0, [])

    def test_invalid_slave_id(self, builder):
        """Test slave id range is enforced."""
        with pytest.raises(ValidationError):
            builder.build(FC16, 0, [WriteDataItem()], slave_id=0)

    def test_register_limit(self, builder):
        """Test more words than one request may carry is rejected."""
        items = [WriteDataItem("1") for _ in range(MAX_WRITE_REGISTERS + 1)]
        with pytest.raises(ValueError, match="Too many registers"):
            builder.build(FC16, 0, items)


class TestWriteLayout:
    """Test static layout helpers."""

    def test_available_data_types(self):
        """Test choices per function."""
        assert WriteRequestBuilder.available_data_types(FC15) == [DataType.BINARY]
        assert DataType.FLOAT32 not in WriteRequestBuilder.available_data_types(FC06)
        assert len(WriteRequestBuilder.available_data_types(FC16)) == len(DataType)

    def test_layout_register_items(self):
        """Test addresses advance by word span."""
        items = [
            WriteDataItem("1"),
            WriteDataItem("2.5", DataType.FLOAT32),
            WriteDataItem("HELLO", DataType.ASCII_STRING),
            WriteDataItem("3"),
        ]

        laid_out = WriteRequestBuilder.layout_items(FC16, items, 10)

        assert [item.address for item in laid_out] == [10, 11, 13, 16]
        assert [item.index for item in laid_out] == [0, 1, 2, 3]

    def test_layout_coil_items(self):
        """Test coil addresses advance by one."""
        items = [WriteDataItem.for_coil() for _ in range(3)]
        laid_out = WriteRequestBuilder.layout_items(FC15, items, 4)
        assert [item.address for item in laid_out] == [4, 5, 6]

    def test_calculate_quantity(self):
        """Test quantity per function."""
        items = [WriteDataItem("1"), WriteDataItem("1.0", DataType.FLOAT64)]
        assert WriteRequestBuilder.calculate_quantity(FC16, items) == 5
        assert WriteRequestBuilder.calculate_quantity(FC15, items) == 2
        assert WriteRequestBuilder.calculate_quantity(FC06, items) == 1
        assert WriteRequestBuilder.calculate_quantity(FC16, []) == 0
