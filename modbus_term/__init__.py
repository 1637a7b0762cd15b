"""ModbusTerm core: register data model and protocol codec engine.

Translates typed operator values into Modbus register words and back,
allocates addresses across variably sized values, scans a serial bus for
responsive devices and reconciles writes made by a remote master.
"""

from .application.services import (
    CommunicationLog,
    DeviceScanner,
    ExternalWriteReconciler,
    HighlightTracker,
    RegisterStore,
    ResponseDecoder,
    SlaveDataSynchronizer,
    WriteRequestBuilder,
)
from .application.use_cases import ExecuteRequestResult, ExecuteRequestUseCase
from .container import Container, create_container
from .domain.strategies import decode, encode, format_value
from .domain.value_objects import DataType, FunctionCode, RegisterKind, word_span

__version__ = "1.0.0"

__all__ = [
    "CommunicationLog",
    "DeviceScanner",
    "ExternalWriteReconciler",
    "HighlightTracker",
    "RegisterStore",
    "ResponseDecoder",
    "SlaveDataSynchronizer",
    "WriteRequestBuilder",
    "ExecuteRequestResult",
    "ExecuteRequestUseCase",
    "Container",
    "create_container",
    "DataType",
    "FunctionCode",
    "RegisterKind",
    "encode",
    "decode",
    "format_value",
    "word_span",
]
