"""Pytest configuration and fixtures for ModbusTerm tests."""

from __future__ import annotations

import sys
from pathlib import Path

# Add parent directory to Python path so we can import modbus_term
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from modbus_term.application.services import CommunicationLog, RegisterStore
from modbus_term.domain.value_objects import DataType, RegisterKind
from tests.doubles import FakeTransport


@pytest.fixture
def store() -> RegisterStore:
    """Return an empty register store (least-significant word first)."""
    return RegisterStore()


@pytest.fixture
def holding_store() -> RegisterStore:
    """Store with UInt16 @0, UInt32 @1, Float32 @3 and ASCII "HELLO" @5."""
    store = RegisterStore()
    kind = RegisterKind.HOLDING_REGISTERS
    store.add_register(kind, DataType.UINT16, 0, value="7", name="setpoint")
    store.add_register(kind, DataType.UINT32, 1, value="70000", name="counter")
    store.add_register(kind, DataType.FLOAT32, 3, value="1.5", name="gain")
    store.add_register(kind, DataType.ASCII_STRING, 5, value="HELLO", name="tag")
    return store


@pytest.fixture
def communication_log() -> CommunicationLog:
    """Return an empty communication log."""
    return CommunicationLog()


@pytest.fixture
def fake_transport() -> FakeTransport:
    """Return a disconnected fake transport."""
    return FakeTransport()


@pytest.fixture
def connected_transport() -> FakeTransport:
    """Return a fake transport that is already connected."""
    return FakeTransport(connected=True)
