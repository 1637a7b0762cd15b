"""Domain helper functions."""

from .transformations import (
    bytes_to_words,
    swap_bytes,
    words_to_bytes,
)
from .validators import (
    ValidationError,
    validate_register_address,
    validate_slave_id,
    validate_word,
    validate_words,
)

__all__ = [
    # Transformations
    "words_to_bytes",
    "bytes_to_words",
    "swap_bytes",
    # Validators
    "ValidationError",
    "validate_register_address",
    "validate_slave_id",
    "validate_word",
    "validate_words",
]
