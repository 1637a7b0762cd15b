"""Validation helper functions.

This module provides standardized validation functions for domain
entities and value objects. All validators raise ValidationError
(subclass of ValueError) for invalid inputs.
"""

from typing import Any, Sequence

from ...const import MAX_SLAVE_ID, MIN_SLAVE_ID


class ValidationError(ValueError):
    """Domain validation error."""


def validate_register_address(address: int, name: str = "address") -> int:
    """Validate register address is in valid range (0x0000-0xFFFF).

    Examples:
        >>> validate_register_address(0x1234)
        4660
    """
    if isinstance(address, bool) or not isinstance(address, int):
        raise ValidationError(
            f"Invalid {name}: must be integer, got {type(address).__name__}"
        )

    if not 0 <= address <= 0xFFFF:
        raise ValidationError(f"Invalid {name}: {address} (must be 0-65535)")

    return address


def validate_word(value: Any, name: str = "value") -> int:
    """Validate a raw register word (0-65535)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"Invalid {name}: must be integer, got {type(value).__name__}"
        )

    if not 0 <= value <= 0xFFFF:
        raise ValidationError(f"Invalid {name}: {value} (must be 0-65535)")

    return value


def validate_words(words: Sequence[int], name: str = "words") -> list:
    """Validate every word of a sequence and return them as a list."""
    return [validate_word(word, f"{name}[{i}]") for i, word in enumerate(words)]


def validate_slave_id(slave_id: int, name: str = "slave_id") -> int:
    """Validate a Modbus slave id (1-247).

    Examples:
        >>> validate_slave_id(247)
        247
    """
    if isinstance(slave_id, bool) or not isinstance(slave_id, int):
        raise ValidationError(
            f"Invalid {name}: must be integer, got {type(slave_id).__name__}"
        )

    if not MIN_SLAVE_ID <= slave_id <= MAX_SLAVE_ID:
        raise ValidationError(
            f"Invalid {name}: {slave_id} (must be {MIN_SLAVE_ID}-{MAX_SLAVE_ID})"
        )

    return slave_id
