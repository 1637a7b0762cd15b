"""Tests for address allocation."""

import pytest

from modbus_term.domain.entities import BooleanRegisterDefinition, RegisterDefinition
from modbus_term.domain.services import allocate_addresses, find_overlaps, next_free_address
from modbus_term.domain.value_objects import DataType


class TestAllocateAddresses:
    """Test contiguous allocation."""

    def test_mixed_spans_from_zero(self):
        """Test [UInt16, Float32, UInt16] at scattered addresses gets [0, 1, 3]."""
        registers = [
            RegisterDefinition(5, DataType.UINT16),
            RegisterDefinition(9, DataType.FLOAT32),
            RegisterDefinition(40, DataType.UINT16),
        ]
        assignment = allocate_addresses(registers)
        assert [address for _, address in assignment] == [0, 1, 3]
        assert [entry for entry, _ in assignment] == registers

    def test_sorted_by_current_address(self):
        """Test allocation walks entries in current address order."""
        late = RegisterDefinition(100, DataType.FLOAT64)
        early = RegisterDefinition(3, DataType.UINT32)
        assignment = allocate_addresses([late, early])
        assert assignment == [(early, 0), (late, 2)]

    def test_does_not_mutate(self):
        """Test the allocation is a pure computation."""
        register = RegisterDefinition(7)
        allocate_addresses([register])
        assert register.address == 7

    def test_keep_base_for_bits(self):
        """Test start=None keeps the first entry's address."""
        coils = [
            BooleanRegisterDefinition(15),
            BooleanRegisterDefinition(10),
            BooleanRegisterDefinition(12),
        ]
        assert [address for _, address in allocate_addresses(coils, start=None)] == [10, 11, 12]

    def test_empty(self):
        """Test nothing to allocate."""
        assert allocate_addresses([]) == []

    def test_address_space_exhausted(self):
        """Test running past 65535 is rejected."""
        with pytest.raises(ValueError, match="Address space exhausted"):
            allocate_addresses([RegisterDefinition(0, DataType.FLOAT64)], start=65533)


class TestAddressQueries:
    """Test next free address and overlap detection."""

    def test_next_free_address_empty(self):
        """Test an empty table starts at the default."""
        assert next_free_address([]) == 0
        assert next_free_address([], default=100) == 100

    def test_next_free_address_after_span(self):
        """Test the next address follows the last entry's span."""
        entries = [RegisterDefinition(0), RegisterDefinition(10, DataType.UINT32)]
        assert next_free_address(entries) == 12

    def test_find_overlaps(self):
        """Test neighbouring spans that collide are reported."""
        wide = RegisterDefinition(10, DataType.UINT32)
        inside = RegisterDefinition(11)
        clear = RegisterDefinition(12)
        assert find_overlaps([clear, inside, wide]) == [(wide, inside)]
