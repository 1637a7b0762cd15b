"""Register definition entity.

A RegisterDefinition is one logical value held in the holding or input
register table. It occupies ``word_span`` consecutive registers starting
at ``address`` and keeps the raw words together with their decoded value
and display text.

The decoded value and the display text are never edited on their own:
every method that changes the words recomputes both in the same call.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ..helpers.validators import validate_register_address, validate_words
from ..strategies.value_codec_strategy import decode, encode, format_value
from ..value_objects.data_type import DataType


@dataclass(eq=False)
class RegisterDefinition:
    """Domain entity representing a typed register value.

    Entities compare by identity: two definitions at the same address in
    different tables are different entries.

    Attributes:
        address: Base register address (0-65535)
        data_type: How the words are interpreted
        words: Raw register words, one per register in the span
        name: Operator-assigned label
        description: Free text
        recently_modified: Set while an external write is highlighted
        suppress_notifications: Set while the store applies an external
            write, so the change is not pushed back onto the bus
        value: Decoded value (derived from words)
        formatted_value: Display text (derived from value)

    Example:
        >>> register = RegisterDefinition(10, DataType.UINT32)
        >>> register.word_span
        2
        >>> register.load_words([0x0002, 0x0001])
        >>> register.value
        65538
    """

    address: int
    data_type: DataType = DataType.UINT16
    words: List[int] = field(default_factory=list)
    name: str = ""
    description: str = ""
    recently_modified: bool = False
    suppress_notifications: bool = False
    value: Any = field(default=None, init=False)
    formatted_value: str = field(default="", init=False)

    def __post_init__(self) -> None:
        """Validate address and normalize words to the type's span."""
        validate_register_address(self.address)
        self.words = self._fit_words(validate_words(self.words))
        self.refresh()

    @property
    def word_span(self) -> int:
        """Registers occupied; ASCII strings span all of their words."""
        span = self.data_type.fixed_word_span
        return span if span is not None else max(1, len(self.words))

    @property
    def end_address(self) -> int:
        """Last register address covered by this value."""
        return self.address + self.word_span - 1

    @property
    def is_multi_word(self) -> bool:
        """Whether this value spans more than one register."""
        return self.word_span > 1

    def covers(self, address: int) -> bool:
        """Check if ``address`` falls inside this value's span."""
        return self.address <= address <= self.end_address

    def word_at(self, address: int) -> Optional[int]:
        """Raw word stored at ``address``, or None outside the span."""
        if not self.covers(address):
            return None
        return self.words[address - self.address]

    def refresh(self, reverse_order: bool = False) -> None:
        """Recompute value and display text from the raw words."""
        self.value, _ = decode(self.words, self.data_type, reverse_order)
        self.formatted_value = format_value(self.value, self.data_type)

    def load_words(self, words: Sequence[int], reverse_order: bool = False) -> None:
        """Replace the raw words and recompute the projections.

        Fixed-span types are padded with zeros or truncated to their span.
        """
        self.words = self._fit_words(validate_words(words))
        self.refresh(reverse_order)

    def load_value(self, value: Any, reverse_order: bool = False) -> None:
        """Encode a typed value (or operator text) into the words.

        Raises:
            FormatError: If the value cannot be encoded as data_type
        """
        self.words = encode(value, self.data_type, reverse_order)
        self.refresh(reverse_order)

    def change_type(self, data_type: DataType, reverse_order: bool = False) -> None:
        """Reinterpret the existing words as another data type."""
        self.data_type = data_type
        self.words = self._fit_words(self.words)
        self.refresh(reverse_order)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to an entry record for persistence collaborators."""
        return {
            "address": self.address,
            "data_type": self.data_type.value,
            "value": self.value,
            "name": self.name,
            "description": self.description,
        }

    @classmethod
    def from_dict(
        cls, record: Dict[str, Any], reverse_order: bool = False
    ) -> "RegisterDefinition":
        """Create a definition from an entry record.

        Raises:
            ValueError: If the data type is unknown
            FormatError: If the value does not match the data type
        """
        data_type = DataType.from_name(record.get("data_type", DataType.UINT16.value))
        register = cls(
            address=int(record["address"]),
            data_type=data_type,
            name=record.get("name", ""),
            description=record.get("description", ""),
        )
        value = record.get("value")
        if value is not None:
            register.load_value(value, reverse_order)
        return register

    def _fit_words(self, words: List[int]) -> List[int]:
        span = self.data_type.fixed_word_span
        if span is None:
            return list(words) or [0]
        return (list(words) + [0] * span)[:span]

    def __repr__(self) -> str:
        return (
            f"RegisterDefinition(address={self.address}, "
            f"data_type={self.data_type.display_name}, value={self.formatted_value!r})"
        )
