"""Communication log events."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class EventType(Enum):
    """Kind of communication event."""

    SENT = "sent"
    RECEIVED = "received"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class CommunicationEvent:
    """One entry of the communication log.

    Attributes:
        type: Event kind
        message: Human-readable description
        raw_data: Bytes sent or received, when available
        timestamp: When the event was recorded

    Example:
        >>> event = CommunicationEvent.sent(b"\\x01\\x03", "Read 1 register")
        >>> event.hex_data
        '01 03'
    """

    type: EventType
    message: str = ""
    raw_data: Optional[bytes] = None
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def hex_data(self) -> str:
        """Raw data as space separated hex bytes."""
        if not self.raw_data:
            return ""
        return " ".join(f"{byte:02X}" for byte in self.raw_data)

    @property
    def timestamp_string(self) -> str:
        """Timestamp with millisecond precision."""
        return self.timestamp.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]

    @classmethod
    def sent(cls, data: Optional[bytes] = None, message: str = "") -> "CommunicationEvent":
        return cls(EventType.SENT, message, data)

    @classmethod
    def received(cls, data: Optional[bytes] = None, message: str = "") -> "CommunicationEvent":
        return cls(EventType.RECEIVED, message, data)

    @classmethod
    def info(cls, message: str) -> "CommunicationEvent":
        return cls(EventType.INFO, message)

    @classmethod
    def warning(cls, message: str) -> "CommunicationEvent":
        return cls(EventType.WARNING, message)

    @classmethod
    def error(cls, message: str, data: Optional[bytes] = None) -> "CommunicationEvent":
        return cls(EventType.ERROR, message, data)

    def __str__(self) -> str:
        text = f"[{self.timestamp_string}] {self.type.name}: {self.message}"
        if self.raw_data:
            text += f" [{self.hex_data}]"
        return text
