"""Application services for the ModbusTerm core.

Application services provide reusable application logic that the use
cases and the surrounding terminal build on.

They differ from use cases in that:
- Services are reusable across use cases
- Services focus on a specific technical capability
- Use cases orchestrate multiple services + domain logic

One class per file.
"""

from .register_store import RegisterStore
from .write_request_builder import WriteRequestBuilder
from .response_decoder import ResponseDecoder
from .device_scanner import DeviceScanner
from .highlight_tracker import HighlightTracker
from .external_write_reconciler import (
    ExternalWriteReconciler,
    PartialSpanUpdate,
    ReconcileResult,
)
from .slave_data_sync import SlaveDataSynchronizer
from .communication_log import CommunicationLog

__all__ = [
    "RegisterStore",
    "WriteRequestBuilder",
    "ResponseDecoder",
    "DeviceScanner",
    "HighlightTracker",
    "ExternalWriteReconciler",
    "PartialSpanUpdate",
    "ReconcileResult",
    "SlaveDataSynchronizer",
    "CommunicationLog",
]
