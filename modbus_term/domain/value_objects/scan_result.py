"""Device scan results."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional


class ScanStatus(Enum):
    """Outcome of probing one slave id."""

    SUCCESS = "success"  # Valid reply
    EXCEPTION = "exception"  # Valid Modbus exception reply
    TIMEOUT = "timeout"  # No reply before the deadline


@dataclass(frozen=True)
class DeviceScanResult:
    """Result of probing a single slave id.

    Attributes:
        slave_id: Probed bus address (1-247)
        status: Classification of the outcome
        response_time: Round trip in milliseconds (0.0 on timeout)
        exception_code: Modbus exception code for EXCEPTION results
        exception_message: Description of the exception code
        timestamp: When the probe finished
    """

    slave_id: int
    status: ScanStatus
    response_time: float = 0.0
    exception_code: Optional[int] = None
    exception_message: str = ""
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def responded(self) -> bool:
        """Whether the device answered at all (success or exception)."""
        return self.status != ScanStatus.TIMEOUT

    def __str__(self) -> str:
        if self.status == ScanStatus.SUCCESS:
            return f"Device ID {self.slave_id} responded successfully in {self.response_time:.1f} ms"
        if self.status == ScanStatus.EXCEPTION:
            return f"Device ID {self.slave_id} responded with exception: {self.exception_message}"
        return f"Device ID {self.slave_id} timed out"


@dataclass(frozen=True)
class ScanSummary:
    """Counts emitted when a scan loop exits."""

    success: int = 0
    exception: int = 0
    timeout: int = 0
    cancelled: bool = False

    @property
    def total(self) -> int:
        """Number of probes that completed."""
        return self.success + self.exception + self.timeout

    @classmethod
    def from_results(
        cls, results: Iterable[DeviceScanResult], cancelled: bool = False
    ) -> "ScanSummary":
        """Count results by status."""
        counts = {status: 0 for status in ScanStatus}
        for result in results:
            counts[result.status] += 1
        return cls(
            success=counts[ScanStatus.SUCCESS],
            exception=counts[ScanStatus.EXCEPTION],
            timeout=counts[ScanStatus.TIMEOUT],
            cancelled=cancelled,
        )

    def __str__(self) -> str:
        prefix = "Scan cancelled" if self.cancelled else "Scan complete"
        return (
            f"{prefix}: {self.success} device(s) responded successfully, "
            f"{self.exception} with exceptions, {self.timeout} timed out"
        )
