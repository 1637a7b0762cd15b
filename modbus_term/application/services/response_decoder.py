"""Response decoder service.

Turns a raw read reply into the addressed, typed items shown to the
operator.
"""

import logging
from typing import List, Optional, Sequence

from ...domain.strategies.value_codec_strategy import decode
from ...domain.value_objects import DataType, FunctionCode, ModbusResponseItem

_LOGGER = logging.getLogger(__name__)


class ResponseDecoder:
    """Decodes word and bit payloads into ModbusResponseItems.

    Word payloads are walked with the codec, the address advancing by the
    number of words each value consumed. Words left over at the tail that
    cannot fill another value are dropped. ASCII strings are the
    exception: the whole payload becomes one item.

    Bit payloads yield one BINARY item per bit.

    Example:
        >>> decoder = ResponseDecoder()
        >>> items = decoder.decode_registers([1, 2, 3], DataType.UINT32, 100)
        >>> [(item.address, item.value) for item in items]
        [(100, 131073)]
    """

    def __init__(self, reverse_order: bool = False):
        """Initialize decoder.

        Args:
            reverse_order: Default word order when a call does not give one
        """
        self._reverse_order = reverse_order

    def decode_registers(
        self,
        words: Sequence[int],
        data_type: DataType,
        start_address: int = 0,
        reverse_order: Optional[bool] = None,
    ) -> List[ModbusResponseItem]:
        """Decode a register payload.

        Args:
            words: Register words from the reply
            data_type: Display type selected by the operator
            start_address: Address of the first word
            reverse_order: Word order (default: decoder setting)

        Returns:
            One item per decoded value, in address order
        """
        if reverse_order is None:
            reverse_order = self._reverse_order
        if not words:
            return []

        if data_type == DataType.ASCII_STRING:
            value, consumed = decode(words, data_type, reverse_order)
            return [
                ModbusResponseItem(start_address, value, data_type, tuple(words[:consumed]))
            ]

        items = []
        offset = 0
        while offset < len(words):
            value, consumed = decode(words[offset:], data_type, reverse_order)
            if consumed == 0:
                _LOGGER.debug(
                    "Dropping %d trailing word(s) too short for %s",
                    len(words) - offset,
                    data_type.display_name,
                )
                break
            items.append(
                ModbusResponseItem(
                    start_address + offset,
                    value,
                    data_type,
                    tuple(words[offset : offset + consumed]),
                )
            )
            offset += consumed
        return items

    def decode_bits(
        self, bits: Sequence[bool], start_address: int = 0
    ) -> List[ModbusResponseItem]:
        """Decode a coil or discrete input payload, one item per bit."""
        return [
            ModbusResponseItem(
                start_address + offset, bool(bit), DataType.BINARY, (int(bool(bit)),)
            )
            for offset, bit in enumerate(bits)
        ]

    def decode(
        self,
        function_code: FunctionCode,
        payload: Sequence,
        data_type: DataType = DataType.UINT16,
        start_address: int = 0,
        reverse_order: Optional[bool] = None,
    ) -> List[ModbusResponseItem]:
        """Decode a read reply according to the function that produced it."""
        if payload is None:
            return []
        if function_code.is_coil:
            return self.decode_bits(payload, start_address)
        return self.decode_registers(payload, data_type, start_address, reverse_order)
