"""WriteDataItem: one operator-entered value in a write batch."""

from dataclasses import dataclass

from .data_type import DataType, word_span


@dataclass
class WriteDataItem:
    """Typed input for a write request.

    Created and discarded whenever the operator picks a write function;
    never persisted. ``address`` is derived from the batch start address
    and the spans of the preceding items (see
    WriteRequestBuilder.layout_items).

    Attributes:
        value: Operator text ("3.14", "0x1A2B", "HELLO")
        data_type: Type the text is parsed as
        boolean_value: Value used by coil writes; text is ignored there
        index: Position within the batch
        address: Computed register or coil address
        name: Optional label
    """

    value: str = "0"
    data_type: DataType = DataType.UINT16
    boolean_value: bool = False
    index: int = 0
    address: int = 0
    name: str = ""

    @property
    def word_span(self) -> int:
        """Registers this item occupies in a register write."""
        return word_span(self.data_type, self.value)

    @classmethod
    def for_coil(cls, value: bool = False, name: str = "") -> "WriteDataItem":
        """Coil write item (data type fixed to BINARY)."""
        return cls(
            value=str(value),
            data_type=DataType.BINARY,
            boolean_value=value,
            name=name,
        )
