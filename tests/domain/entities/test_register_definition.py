"""Tests for register and coil definition entities."""

import pytest

from modbus_term.domain.entities import BooleanRegisterDefinition, RegisterDefinition
from modbus_term.domain.exceptions import FormatError
from modbus_term.domain.helpers.validators import ValidationError
from modbus_term.domain.value_objects import DataType


class TestRegisterDefinition:
    """Test RegisterDefinition entity."""

    def test_defaults_to_zero_words_of_span(self):
        """Test a new register holds span-many zero words."""
        register = RegisterDefinition(10, DataType.UINT32)
        assert register.words == [0, 0]
        assert register.value == 0
        assert register.formatted_value == "0"
        assert register.word_span == 2
        assert register.end_address == 11

    def test_load_words_recomputes_projections(self):
        """Test value and display text change together with the words."""
        register = RegisterDefinition(10, DataType.UINT32)
        register.load_words([0x0002, 0x0001])
        assert register.value == 0x00010002
        assert register.formatted_value == "65538"

    def test_load_words_reverse_order(self):
        """Test the word order flag is applied when decoding."""
        register = RegisterDefinition(10, DataType.UINT32)
        register.load_words([0x0001, 0x0002], reverse_order=True)
        assert register.value == 0x00010002

    def test_load_value_from_text(self):
        """Test operator text is encoded into words."""
        register = RegisterDefinition(0, DataType.FLOAT32)
        register.load_value("1.5")
        assert register.words == [0x0000, 0x3FC0]
        assert register.value == 1.5
        assert register.formatted_value == "1.500"

    def test_load_value_invalid_keeps_words(self):
        """Test a malformed value leaves the register untouched."""
        register = RegisterDefinition(0, DataType.UINT16, words=[7])
        with pytest.raises(FormatError):
            register.load_value("seven")
        assert register.words == [7]
        assert register.value == 7

    def test_short_words_padded(self):
        """Test fixed-span words are padded with zeros."""
        register = RegisterDefinition(0, DataType.FLOAT64, words=[1])
        assert register.words == [1, 0, 0, 0]

    def test_change_type_narrowing(self):
        """Test narrowing keeps the first word."""
        register = RegisterDefinition(0, DataType.UINT32, words=[2, 1])
        register.change_type(DataType.UINT16)
        assert register.words == [2]
        assert register.value == 2

    def test_change_type_widening(self):
        """Test widening pads with zero words."""
        register = RegisterDefinition(0, DataType.INT16, words=[0xFFFF])
        register.change_type(DataType.INT32)
        assert register.words == [0xFFFF, 0]
        assert register.value == 0xFFFF

    def test_ascii_span_follows_text(self):
        """Test ASCII registers span as many words as the text needs."""
        register = RegisterDefinition(0, DataType.ASCII_STRING)
        assert register.word_span == 1
        assert register.value == ""

        register.load_value("HELLO")
        assert register.word_span == 3
        assert register.value == "HELLO"

    def test_covers_and_word_at(self):
        """Test span membership and per-address words."""
        register = RegisterDefinition(10, DataType.UINT32, words=[2, 1])
        assert register.covers(11)
        assert not register.covers(12)
        assert register.word_at(11) == 1
        assert register.word_at(9) is None

    def test_invalid_address(self):
        """Test addresses outside 0-65535 are rejected."""
        with pytest.raises(ValidationError):
            RegisterDefinition(70000)

    def test_identity_equality(self):
        """Test equal fields do not make two entries equal."""
        assert RegisterDefinition(0) != RegisterDefinition(0)

    def test_record_round_trip(self):
        """Test to_dict/from_dict keep type, value and labels."""
        register = RegisterDefinition(4, DataType.FLOAT32, name="gain", description="loop gain")
        register.load_value(2.5)

        record = register.to_dict()
        assert record == {
            "address": 4,
            "data_type": "float32",
            "value": 2.5,
            "name": "gain",
            "description": "loop gain",
        }

        restored = RegisterDefinition.from_dict(record)
        assert restored.address == 4
        assert restored.data_type == DataType.FLOAT32
        assert restored.words == register.words

    def test_from_dict_display_name(self):
        """Test records may name the type by its short label."""
        register = RegisterDefinition.from_dict({"address": 0, "data_type": "Hex", "value": "0x00FF"})
        assert register.value == 0xFF


class TestBooleanRegisterDefinition:
    """Test BooleanRegisterDefinition entity."""

    def test_single_address_span(self):
        """Test coils always span one address."""
        coil = BooleanRegisterDefinition(5, True)
        assert coil.word_span == 1
        assert coil.end_address == 5
        assert coil.covers(5)
        assert not coil.covers(6)

    def test_formatted_value(self):
        """Test bits display as 1/0."""
        assert BooleanRegisterDefinition(0, True).formatted_value == "1"
        assert BooleanRegisterDefinition(0, False).formatted_value == "0"

    @pytest.mark.parametrize("text,expected", [("true", True), ("1", True), ("off", False)])
    def test_from_dict_text_values(self, text, expected):
        """Test textual truth values in records."""
        coil = BooleanRegisterDefinition.from_dict({"address": 3, "value": text})
        assert coil.value is expected

    def test_to_dict(self):
        """Test record layout."""
        coil = BooleanRegisterDefinition(3, True, name="pump")
        assert coil.to_dict()["value"] is True
        assert coil.to_dict()["name"] == "pump"
