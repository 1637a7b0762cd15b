"""Contiguous address allocation for register and coil tables.

Allocation is a pure computation over (address, word_span) pairs. It
never mutates entries; the RegisterStore applies the returned assignment
as one change set.
"""

import logging
from typing import List, Optional, Protocol, Sequence, Tuple, TypeVar

from ...const import MAX_ADDRESS

_LOGGER = logging.getLogger(__name__)


class Addressable(Protocol):
    """Anything with a base address and a word span."""

    address: int

    @property
    def word_span(self) -> int: ...


T = TypeVar("T", bound=Addressable)


def allocate_addresses(
    entries: Sequence[T], start: Optional[int] = 0
) -> List[Tuple[T, int]]:
    """Assign contiguous addresses in current address order.

    Entries are sorted by their current address (stable for ties), the
    first one gets ``start`` and each following entry gets the previous
    address plus the previous entry's word span.

    Args:
        entries: Entries to lay out
        start: First address; None keeps the lowest existing address,
            which is how coil and discrete input tables are resequenced

    Returns:
        (entry, new_address) pairs in the new order

    Raises:
        ValueError: If the layout runs past address 65535

    Example:
        >>> # UInt16, Float32, UInt16 at scattered addresses
        >>> [address for _, address in allocate_addresses(registers)]
        [0, 1, 3]
    """
    ordered = sorted(entries, key=lambda entry: entry.address)
    if not ordered:
        return []

    next_address = ordered[0].address if start is None else start
    assignment = []
    for entry in ordered:
        end = next_address + entry.word_span - 1
        if end > MAX_ADDRESS:
            raise ValueError(
                f"Address space exhausted: entry needs {next_address}-{end}"
            )
        assignment.append((entry, next_address))
        next_address = end + 1

    _LOGGER.debug(
        "Allocated %d entries from %d to %d",
        len(assignment),
        assignment[0][1],
        next_address - 1,
    )
    return assignment


def next_free_address(entries: Sequence[Addressable], default: int = 0) -> int:
    """Address right after the highest entry (address plus its span).

    Example:
        >>> next_free_address([])
        0
    """
    if not entries:
        return default
    last = max(entries, key=lambda entry: entry.address)
    return last.address + last.word_span


def find_overlaps(
    entries: Sequence[Addressable],
) -> List[Tuple[Addressable, Addressable]]:
    """Pairs of neighbouring entries whose spans overlap."""
    ordered = sorted(entries, key=lambda entry: entry.address)
    return [
        (current, following)
        for current, following in zip(ordered, ordered[1:])
        if current.address + current.word_span > following.address
    ]
