"""Tests for ExecuteRequestUseCase."""

import logging

import pytest

from modbus_term.application.services import CommunicationLog
from modbus_term.application.use_cases import ExecuteRequestUseCase
from modbus_term.domain.exceptions import (
    FormatError,
    ProtocolException,
    ProtocolTimeout,
    TransportFailure,
)
from modbus_term.domain.value_objects import (
    DataType,
    EventType,
    FunctionCode,
    ModbusRequest,
    WriteDataItem,
)


class TestExecuteRequestUseCase:
    """Test suite for ExecuteRequestUseCase."""

    @pytest.fixture
    def log(self):
        """Create communication log."""
        return CommunicationLog()

    @pytest.fixture
    def use_case(self, connected_transport, log):
        """Create use case over a connected fake transport."""
        return ExecuteRequestUseCase(connected_transport, communication_log=log)

    @pytest.mark.asyncio
    async def test_read_decodes_items(self, use_case, connected_transport):
        """Test a Float32 read yields addressed items."""
        connected_transport.queue_reply([0x0000, 0x3FC0, 0x0000, 0x4000])
        request = ModbusRequest.read(FunctionCode.READ_HOLDING_REGISTERS, 100, 4)

        result = await use_case.execute(request, DataType.FLOAT32)

        assert result.success is True
        assert [(item.address, item.value) for item in result.items] == [(100, 1.5), (102, 2.0)]
        assert result.response_time_ms >= 0.0
        assert connected_transport.requests == [request]

    @pytest.mark.asyncio
    async def test_read_coils(self, use_case, connected_transport):
        """Test bit replies decode one item per coil."""
        connected_transport.queue_reply([True, False])
        request = ModbusRequest.read(FunctionCode.READ_COILS, 0, 2)

        result = await use_case.execute(request)

        assert [item.formatted_value for item in result.items] == ["1", "0"]

    @pytest.mark.asyncio
    async def test_timeout_is_a_result(self, use_case, log):
        """Test a missing reply becomes an unsuccessful result."""
        request = ModbusRequest.read(FunctionCode.READ_INPUT_REGISTERS, 0, 1)

        result = await use_case.execute(request)

        assert result.success is False
        assert result.timed_out is True
        assert result.error.startswith("Timeout:")
        assert log.last().type == EventType.ERROR

    @pytest.mark.asyncio
    async def test_exception_reply_is_a_result(self, use_case, connected_transport):
        """Test a device exception is reported with its code."""
        connected_transport.fail_next(ProtocolException(2, slave_id=1))
        request = ModbusRequest.read(FunctionCode.READ_HOLDING_REGISTERS, 9000, 1)

        result = await use_case.execute(request)

        assert result.success is False
        assert result.exception_code == 2
        assert result.error == "Modbus exception 2: Illegal Data Address"
        assert not result.timed_out

    @pytest.mark.asyncio
    async def test_not_connected(self, fake_transport):
        """Test executing without a connection raises TransportFailure."""
        use_case = ExecuteRequestUseCase(fake_transport)
        request = ModbusRequest.read(FunctionCode.READ_HOLDING_REGISTERS, 0, 1)

        with pytest.raises(TransportFailure):
            await use_case.execute(request)

    @pytest.mark.asyncio
    async def test_connection_lost_propagates(
        self, use_case, connected_transport, caplog
    ):
        """Test a transport failure mid-request is logged and not turned into a result."""
        connected_transport.fail_next(TransportFailure("Line lost"))
        request = ModbusRequest.read(FunctionCode.READ_HOLDING_REGISTERS, 0, 1)

        with caplog.at_level(logging.ERROR):
            with pytest.raises(TransportFailure):
                await use_case.execute(request)

        assert "Execute request transport failure: Line lost" in caplog.text

    @pytest.mark.asyncio
    async def test_write_builds_and_sends(self, use_case, connected_transport, log):
        """Test typed items are encoded and sent as one request."""
        items = [WriteDataItem("65538", DataType.UINT32), WriteDataItem("7")]

        result = await use_case.write(FunctionCode.WRITE_MULTIPLE_REGISTERS, 10, items, slave_id=3)

        assert result.success is True
        sent = connected_transport.requests[0]
        assert sent.registers == (0x0002, 0x0001, 7)
        assert sent.slave_id == 3
        assert [event.type for event in log] == [EventType.SENT, EventType.RECEIVED]

    @pytest.mark.asyncio
    async def test_malformed_write_sends_nothing(self, use_case, connected_transport):
        """Test a FormatError aborts before anything reaches the transport."""
        items = [WriteDataItem("1"), WriteDataItem("xyz", DataType.HEX)]

        with pytest.raises(FormatError) as exc_info:
            await use_case.write(FunctionCode.WRITE_MULTIPLE_REGISTERS, 0, items)

        assert exc_info.value.index == 1
        assert connected_transport.requests == []

    @pytest.mark.asyncio
    async def test_scripted_timeout_message(self, use_case, connected_transport):
        """Test the timeout message carries the transport's reason."""
        connected_transport.fail_next(ProtocolTimeout("no reply from slave 1"))

        result = await use_case.execute(ModbusRequest.read(FunctionCode.READ_COILS, 0, 1))

        assert result.error == "Timeout: no reply from slave 1"
