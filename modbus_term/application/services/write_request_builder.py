"""Write request builder service.

Assembles the payload of a write function from the operator's typed
input rows.
"""

import logging
from typing import List, Optional, Sequence

from ...const import DEFAULT_SLAVE_ID
from ...domain.exceptions import FormatError
from ...domain.helpers.validators import validate_register_address, validate_slave_id
from ...domain.strategies.value_codec_strategy import encode
from ...domain.value_objects import DataType, FunctionCode, ModbusRequest, WriteDataItem
from .communication_log import CommunicationLog

_LOGGER = logging.getLogger(__name__)

# Protocol limits per request
MAX_WRITE_REGISTERS = 123
MAX_WRITE_COILS = 1968

_REGISTER_TYPES = [
    DataType.UINT16,
    DataType.INT16,
    DataType.UINT32,
    DataType.INT32,
    DataType.FLOAT32,
    DataType.FLOAT64,
    DataType.ASCII_STRING,
    DataType.HEX,
    DataType.BINARY,
]
_SINGLE_REGISTER_TYPES = [DataType.UINT16, DataType.INT16, DataType.HEX, DataType.BINARY]


class WriteRequestBuilder:
    """Builds write requests from WriteDataItems.

    Coil functions take one bit per item from ``boolean_value`` and
    ignore the text. Register functions concatenate the encoded words of
    every item in order. Single-item functions (FC05, FC06) only use the
    first item.

    A single malformed item aborts the whole build: the caller gets a
    FormatError naming the item index and its data type, never a partial
    payload.

    Example:
        >>> builder = WriteRequestBuilder()
        >>> items = [WriteDataItem("3.14", DataType.FLOAT32), WriteDataItem("abc")]
        >>> builder.build(FunctionCode.WRITE_MULTIPLE_REGISTERS, 0, items)
        Traceback (most recent call last):
        ...
        FormatError: Item 1 (u16): Invalid UInt16 value: 'abc'
    """

    def __init__(
        self,
        reverse_order: bool = False,
        communication_log: Optional[CommunicationLog] = None,
    ):
        """Initialize builder.

        Args:
            reverse_order: Default word order for multi-word values
            communication_log: Receives a warning on single-register truncation
        """
        self._reverse_order = reverse_order
        self._log = communication_log

    @staticmethod
    def available_data_types(function_code: FunctionCode) -> List[DataType]:
        """Data types an operator may pick for a write function.

        Coil writes are bits, so only BINARY applies. FC06 writes one
        register and offers the single-word types.
        """
        if function_code.is_coil:
            return [DataType.BINARY]
        if function_code == FunctionCode.WRITE_SINGLE_REGISTER:
            return list(_SINGLE_REGISTER_TYPES)
        return list(_REGISTER_TYPES)

    @staticmethod
    def layout_items(
        function_code: FunctionCode,
        items: Sequence[WriteDataItem],
        start_address: int,
    ) -> List[WriteDataItem]:
        """Number the items and compute their addresses.

        Register items advance by their word span, coil items by one.

        Example:
            >>> items = [WriteDataItem("1"), WriteDataItem("2.5", DataType.FLOAT32),
            ...          WriteDataItem("3")]
            >>> [i.address for i in WriteRequestBuilder.layout_items(
            ...     FunctionCode.WRITE_MULTIPLE_REGISTERS, items, 10)]
            [10, 11, 13]
        """
        address = start_address
        for index, item in enumerate(items):
            item.index = index
            item.address = address
            address += 1 if function_code.is_coil else item.word_span
        return list(items)

    @staticmethod
    def calculate_quantity(
        function_code: FunctionCode, items: Sequence[WriteDataItem]
    ) -> int:
        """Registers or coils the request will write."""
        if not items:
            return 0
        if not function_code.is_multiple:
            return 1
        if function_code.is_coil:
            return len(items)
        return sum(item.word_span for item in items)

    def encode_items(
        self, items: Sequence[WriteDataItem], reverse_order: Optional[bool] = None
    ) -> List[int]:
        """Concatenate the encoded words of every item.

        Raises:
            FormatError: For the first item that does not parse
        """
        if reverse_order is None:
            reverse_order = self._reverse_order

        words: List[int] = []
        for index, item in enumerate(items):
            try:
                words.extend(encode(item.value, item.data_type, reverse_order))
            except FormatError as err:
                raise FormatError(
                    f"Item {index} ({item.data_type.display_name}): {err}",
                    index=index,
                    data_type=item.data_type,
                ) from err
        return words

    def build(
        self,
        function_code: FunctionCode,
        start_address: int,
        items: Sequence[WriteDataItem],
        slave_id: int = DEFAULT_SLAVE_ID,
        reverse_order: Optional[bool] = None,
    ) -> ModbusRequest:
        """Build a write request.

        Args:
            function_code: FC05, FC06, FC15 or FC16
            start_address: First register or coil address
            items: Input rows in write order
            slave_id: Target device
            reverse_order: Word order (default: builder setting)

        Returns:
            ModbusRequest carrying the registers or coils

        Raises:
            ValueError: If the function is not a write, there are no items,
                or the payload exceeds the protocol limit
            FormatError: If any item fails to parse
        """
        if not function_code.is_write:
            raise ValueError(f"{function_code.name} is not a write function")
        if not items:
            raise ValueError("At least one write item is required")
        validate_register_address(start_address, "start_address")
        validate_slave_id(slave_id)

        participating = list(items) if function_code.is_multiple else list(items[:1])

        if function_code.is_coil:
            coils = tuple(bool(item.boolean_value) for item in participating)
            if len(coils) > MAX_WRITE_COILS:
                raise ValueError(
                    f"Too many coils: {len(coils)} (maximum {MAX_WRITE_COILS})"
                )
            return ModbusRequest(
                function_code,
                start_address,
                len(coils),
                slave_id,
                coils=coils,
            )

        words = self.encode_items(participating, reverse_order)

        if not function_code.is_multiple and len(words) > 1:
            item = participating[0]
            message = (
                f"{item.data_type.display_name} value spans {len(words)} registers; "
                f"Write Single Register only sends the first word"
            )
            _LOGGER.warning("%s", message)
            if self._log is not None:
                self._log.warning(message)
            words = words[:1]

        if len(words) > MAX_WRITE_REGISTERS:
            raise ValueError(
                f"Too many registers: {len(words)} (maximum {MAX_WRITE_REGISTERS})"
            )

        _LOGGER.debug(
            "Built %s: %d word(s) at %d for slave %d",
            function_code.name,
            len(words),
            start_address,
            slave_id,
        )
        return ModbusRequest(
            function_code,
            start_address,
            len(words),
            slave_id,
            registers=tuple(words),
        )
