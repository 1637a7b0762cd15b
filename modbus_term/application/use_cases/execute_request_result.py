"""Execute Request Result DTO.

Data Transfer Object representing the outcome of one master-mode request.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ...domain.value_objects import ModbusRequest, ModbusResponseItem


@dataclass
class ExecuteRequestResult:
    """Result of executing a read or write request.

    Attributes:
        success: Whether the device answered with a normal reply
        request: The request that was sent
        items: Decoded items for read replies (empty for writes)
        response_time_ms: Round trip in milliseconds
        error: Error message if failed
        exception_code: Modbus exception code if the device returned one
        timed_out: Whether the request failed by timing out
    """

    success: bool
    request: Optional[ModbusRequest] = None
    items: List[ModbusResponseItem] = field(default_factory=list)
    response_time_ms: float = 0.0
    error: str = ""
    exception_code: Optional[int] = None
    timed_out: bool = False
