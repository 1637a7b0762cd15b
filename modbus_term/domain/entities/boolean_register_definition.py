"""Boolean register definition entity (coils and discrete inputs)."""

from dataclasses import dataclass
from typing import Any, Dict

from ..helpers.validators import validate_register_address


@dataclass(eq=False)
class BooleanRegisterDefinition:
    """Domain entity representing a single coil or discrete input.

    Bit addresses are numbered independently from registers and every
    entry spans exactly one address.

    Example:
        >>> coil = BooleanRegisterDefinition(5, True, name="pump")
        >>> coil.formatted_value
        '1'
    """

    address: int
    value: bool = False
    name: str = ""
    description: str = ""
    recently_modified: bool = False
    suppress_notifications: bool = False

    def __post_init__(self) -> None:
        """Validate address."""
        validate_register_address(self.address)
        self.value = bool(self.value)

    @property
    def word_span(self) -> int:
        """Always one bit address."""
        return 1

    @property
    def end_address(self) -> int:
        return self.address

    @property
    def formatted_value(self) -> str:
        return "1" if self.value else "0"

    def covers(self, address: int) -> bool:
        return address == self.address

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to an entry record for persistence collaborators."""
        return {
            "address": self.address,
            "data_type": "bool",
            "value": self.value,
            "name": self.name,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "BooleanRegisterDefinition":
        """Create an entry from a record; "1", "true" and "on" are truthy text."""
        value = record.get("value", False)
        if isinstance(value, str):
            value = value.strip().lower() in ("1", "true", "on", "yes")
        return cls(
            address=int(record["address"]),
            value=bool(value),
            name=record.get("name", ""),
            description=record.get("description", ""),
        )
