"""Value Objects for the ModbusTerm domain.

Value Objects are immutable domain primitives (the WriteDataItem input
row is the one mutable exception) that:
- Have no identity (equality based on value, not reference)
- Validate their invariants at construction
- Encapsulate related data and behavior
"""

from .data_type import DataType, word_span
from .register_kind import RegisterKind
from .function_code import FunctionCode
from .exception_code import ExceptionCode
from .change_set import Change, ChangeField, ChangeSet
from .response_item import ModbusResponseItem
from .scan_result import DeviceScanResult, ScanStatus, ScanSummary
from .write_data_item import WriteDataItem
from .modbus_request import ModbusRequest
from .external_write import ExternalWrite
from .communication_event import CommunicationEvent, EventType
from .connection_parameters import (
    ConnectionParameters,
    ConnectionType,
    RtuConnectionParameters,
    TcpConnectionParameters,
)

__all__ = [
    "DataType",
    "word_span",
    "RegisterKind",
    "FunctionCode",
    "ExceptionCode",
    "Change",
    "ChangeField",
    "ChangeSet",
    "ModbusResponseItem",
    "DeviceScanResult",
    "ScanStatus",
    "ScanSummary",
    "WriteDataItem",
    "ModbusRequest",
    "ExternalWrite",
    "CommunicationEvent",
    "EventType",
    "ConnectionParameters",
    "ConnectionType",
    "RtuConnectionParameters",
    "TcpConnectionParameters",
]
