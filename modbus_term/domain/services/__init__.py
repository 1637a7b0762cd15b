"""Domain services."""

from .address_allocator import allocate_addresses, find_overlaps, next_free_address

__all__ = [
    "allocate_addresses",
    "next_free_address",
    "find_overlaps",
]
