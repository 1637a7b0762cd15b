"""ExecuteRequestUseCase for master-mode requests.

This use case orchestrates one master request:
1. Check the transport is connected
2. Send the request and time the round trip
3. Decode a read reply into display items
4. Report timeouts and exception replies as unsuccessful results
"""

import logging
import time
from typing import Optional, Sequence

from ...const import DEFAULT_SLAVE_ID
from ...domain.exceptions import ProtocolException, ProtocolTimeout
from ...domain.interfaces import IModbusTransport
from ...domain.value_objects import (
    DataType,
    FunctionCode,
    ModbusRequest,
    WriteDataItem,
)
from ...infrastructure.decorators import handle_transport_errors, require_connection
from ..services.communication_log import CommunicationLog
from ..services.response_decoder import ResponseDecoder
from ..services.write_request_builder import WriteRequestBuilder
from .execute_request_result import ExecuteRequestResult

_LOGGER = logging.getLogger(__name__)


class ExecuteRequestUseCase:
    """Use case for executing Modbus requests as a master.

    Responsibilities:
    - Guard against executing without a connection
    - Execute the request via the transport
    - Decode read replies with the selected display type
    - Turn timeouts and device exceptions into result objects

    A TransportFailure is not a result: it propagates to the caller.

    Dependencies (injected):
    - transport: Performs the request/response exchange
    - decoder: Turns read replies into display items
    - builder: Turns typed input rows into write payloads

    Example:
        >>> use_case = ExecuteRequestUseCase(transport)
        >>> request = ModbusRequest.read(FunctionCode.READ_HOLDING_REGISTERS, 0, 4)
        >>> result = await use_case.execute(request, DataType.FLOAT32)
        >>> if result.success:
        ...     print([item.formatted_value for item in result.items])
    """

    def __init__(
        self,
        transport: IModbusTransport,
        decoder: Optional[ResponseDecoder] = None,
        builder: Optional[WriteRequestBuilder] = None,
        communication_log: Optional[CommunicationLog] = None,
    ):
        """Initialize use case with dependencies.

        Args:
            transport: Communication transport
            decoder: Response decoder (default: least-significant word first)
            builder: Write request builder (default: least-significant word first)
            communication_log: Optional log for sent/received events
        """
        self._transport = transport
        self._decoder = decoder or ResponseDecoder()
        self._builder = builder or WriteRequestBuilder(communication_log=communication_log)
        self._log = communication_log

    @require_connection()
    @handle_transport_errors("Execute request")
    async def execute(
        self,
        request: ModbusRequest,
        data_type: DataType = DataType.UINT16,
        reverse_order: Optional[bool] = None,
    ) -> ExecuteRequestResult:
        """Execute a request and decode the reply.

        Args:
            request: Read or write request
            data_type: Display type for register read replies
            reverse_order: Word order for decoding (default: decoder setting)

        Returns:
            ExecuteRequestResult with success/error information

        Raises:
            TransportFailure: If not connected or the connection is lost
        """
        _LOGGER.debug("Executing %s", request)
        if self._log is not None:
            self._log.sent(str(request))

        started = time.perf_counter()
        try:
            payload = await self._transport.execute_request(request)
        except ProtocolTimeout as err:
            elapsed = (time.perf_counter() - started) * 1000.0
            message = f"Timeout: {err}" if str(err) else "Timeout: no response"
            _LOGGER.warning("%s timed out after %.0f ms", request, elapsed)
            if self._log is not None:
                self._log.error(message)
            return ExecuteRequestResult(
                success=False,
                request=request,
                response_time_ms=elapsed,
                error=message,
                timed_out=True,
            )
        except ProtocolException as err:
            elapsed = (time.perf_counter() - started) * 1000.0
            message = f"Modbus exception {err.code}: {err.description}"
            _LOGGER.error("%s failed: %s", request, message)
            if self._log is not None:
                self._log.error(message)
            return ExecuteRequestResult(
                success=False,
                request=request,
                response_time_ms=elapsed,
                error=message,
                exception_code=err.code,
            )

        elapsed = (time.perf_counter() - started) * 1000.0
        items = []
        if request.function_code.is_read:
            items = self._decoder.decode(
                request.function_code,
                payload,
                data_type,
                request.start_address,
                reverse_order,
            )

        if self._log is not None:
            self._log.received(
                f"Response in {elapsed:.1f} ms ({len(items)} item(s))"
            )
        return ExecuteRequestResult(
            success=True,
            request=request,
            items=items,
            response_time_ms=elapsed,
        )

    async def write(
        self,
        function_code: FunctionCode,
        start_address: int,
        items: Sequence[WriteDataItem],
        slave_id: int = DEFAULT_SLAVE_ID,
        reverse_order: Optional[bool] = None,
    ) -> ExecuteRequestResult:
        """Build a write request from input rows and execute it.

        Raises:
            FormatError: If an item does not parse; nothing is sent
            TransportFailure: If not connected or the connection is lost
        """
        request = self._builder.build(
            function_code, start_address, items, slave_id, reverse_order
        )
        return await self.execute(request)
