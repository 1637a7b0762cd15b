"""Tests for validation helper functions."""

import pytest

from modbus_term.domain.helpers.validators import (
    ValidationError,
    validate_register_address,
    validate_slave_id,
    validate_word,
    validate_words,
)


class TestValidationError:
    """Test ValidationError exception."""

    def test_validation_error_is_value_error(self):
        """Test ValidationError is subclass of ValueError."""
        assert issubclass(ValidationError, ValueError)


class TestValidateRegisterAddress:
    """Test validate_register_address function."""

    def test_bounds_accepted(self):
        """Test the first and last addresses are valid."""
        assert validate_register_address(0) == 0
        assert validate_register_address(0xFFFF) == 0xFFFF

    @pytest.mark.parametrize("address", [-1, 0x10000])
    def test_out_of_range(self, address):
        """Test addresses outside 0-65535 are rejected."""
        with pytest.raises(ValidationError, match="must be 0-65535"):
            validate_register_address(address)

    @pytest.mark.parametrize("address", ["10", 1.0, True, None])
    def test_wrong_type(self, address):
        """Test non-integers (bool included) are rejected."""
        with pytest.raises(ValidationError, match="must be integer"):
            validate_register_address(address)

    def test_custom_name_in_message(self):
        """Test the parameter name appears in the error."""
        with pytest.raises(ValidationError, match="start_address"):
            validate_register_address(-5, "start_address")


class TestValidateWords:
    """Test word validation."""

    def test_valid_word(self):
        """Test a 16-bit value passes through."""
        assert validate_word(0xABCD) == 0xABCD

    def test_word_too_large(self):
        """Test 17-bit values are rejected."""
        with pytest.raises(ValidationError):
            validate_word(0x10000)

    def test_words_returns_list(self):
        """Test tuples come back as lists."""
        assert validate_words((1, 2, 3)) == [1, 2, 3]

    def test_words_names_bad_index(self):
        """Test the offending index is named."""
        with pytest.raises(ValidationError, match=r"words\[1\]"):
            validate_words([1, -1, 3])


class TestValidateSlaveId:
    """Test slave id validation."""

    def test_bounds_accepted(self):
        """Test 1 and 247 are valid."""
        assert validate_slave_id(1) == 1
        assert validate_slave_id(247) == 247

    @pytest.mark.parametrize("slave_id", [0, 248])
    def test_out_of_range(self, slave_id):
        """Test broadcast and reserved ids are rejected."""
        with pytest.raises(ValidationError, match="must be 1-247"):
            validate_slave_id(slave_id)
