"""Domain entities for the ModbusTerm core.

Entities are domain objects that have:
- Identity (two entries with equal fields are still different entries)
- Mutable state, changed only through the RegisterStore
- Behavior that keeps raw words and their projections consistent

Example:
    >>> first = RegisterDefinition(0, DataType.UINT16)
    >>> second = RegisterDefinition(0, DataType.UINT16)
    >>> assert first != second  # Different entries
"""

from .register_definition import RegisterDefinition
from .boolean_register_definition import BooleanRegisterDefinition

__all__ = [
    "RegisterDefinition",
    "BooleanRegisterDefinition",
]
